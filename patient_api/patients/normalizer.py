"""Reshape a loosely formatted Patient body into its canonical form.

Normalization never validates and never raises: unusable values degrade to
empty or omitted fields, and anything that is not a JSON object yields `None`.
Rules (required fields, closed gender set, dates) live in
`patient_api.patients.validator`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

# Optional list fields carried through untouched when they already are lists.
PASSTHROUGH_LIST_FIELDS = ("telecom", "address", "identifier")


# Recognized shapes of the `name` field. Clients send a bare string, a single
# HumanName-like object, or a list mixing both.


@dataclass(frozen=True)
class TextName:
    text: str


@dataclass(frozen=True)
class StructuredName:
    fields: dict[str, Any]


@dataclass(frozen=True)
class NameList:
    items: list[Any]


@dataclass(frozen=True)
class UnrecognizedName:
    raw: Any


NameInput = TextName | StructuredName | NameList | UnrecognizedName


def classify_name(raw: Any) -> NameInput:
    if isinstance(raw, str):
        return TextName(text=raw)
    if isinstance(raw, dict):
        return StructuredName(fields=raw)
    if isinstance(raw, list):
        return NameList(items=raw)
    return UnrecognizedName(raw=raw)


def trim_or_empty(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _json_copy(data: Any) -> Any:
    try:
        return json.loads(json.dumps(data))
    except (TypeError, ValueError, RecursionError):
        return None


def _text_entry(text: str) -> dict[str, Any] | None:
    trimmed = text.strip()
    return {"text": trimmed} if trimmed else None


def _structured_entry(fields: dict[str, Any]) -> dict[str, Any] | None:
    text = trim_or_empty(fields.get("text"))
    family = trim_or_empty(fields.get("family"))
    raw_given = fields.get("given")
    given = []
    if isinstance(raw_given, list):
        given = [g for g in (trim_or_empty(item) for item in raw_given) if g]

    entry: dict[str, Any] = {}
    if text:
        entry["text"] = text
    if family:
        entry["family"] = family
    if given:
        entry["given"] = given
    return entry or None


def normalize_name(raw: Any) -> list[dict[str, Any]]:
    """Return the list of non-empty name entries found in `raw`."""

    shape = classify_name(raw)
    if isinstance(shape, TextName):
        entries = [_text_entry(shape.text)]
    elif isinstance(shape, StructuredName):
        entries = [_structured_entry(shape.fields)]
    elif isinstance(shape, NameList):
        entries = []
        for item in shape.items:
            if isinstance(item, str):
                entries.append(_text_entry(item))
            elif isinstance(item, dict):
                entries.append(_structured_entry(item))
    else:
        entries = []
    return [entry for entry in entries if entry]


def normalize_gender(raw: Any) -> str:
    return trim_or_empty(raw).lower()


def normalize_active(raw: Any) -> bool | None:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        # Lenient on purpose: "TRUE " is true, every other string is false.
        return raw.strip().lower() == "true"
    return None


def normalize_patient(data: Any) -> dict[str, Any] | None:
    """
    Return the canonical form of `data`, or `None` if it is not a JSON object.

    The input is copied through a JSON round trip, so the result never aliases
    the caller's object and anything JSON cannot represent is rejected.
    """

    clone = _json_copy(data)
    if not isinstance(clone, dict):
        return None

    resource_type = clone.get("resourceType")
    normalized: dict[str, Any] = {
        "resourceType": trim_or_empty(resource_type) or resource_type,
        "name": normalize_name(clone.get("name")),
        "gender": normalize_gender(clone.get("gender")),
        "birthDate": trim_or_empty(clone.get("birthDate")),
    }

    active = normalize_active(clone.get("active"))
    if active is not None:
        normalized["active"] = active

    for field in PASSTHROUGH_LIST_FIELDS:
        value = clone.get(field)
        if isinstance(value, list):
            normalized[field] = value

    return normalized
