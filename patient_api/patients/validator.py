"""Decide whether a Patient body may be created or may replace a stored one.

Both entry points normalize first and then apply their rules in a fixed order;
the first failing rule is the one reported.

Status codes are part of the contract:
- 400: the request is structurally wrong or addresses another resource
  (body is not an object, malformed or mismatched identifier, malformed URL id)
- 422: the request is well formed but its content breaks a business rule
  (resourceType, name, gender, birthDate)
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date
from typing import Any

from patient_api.patients.normalizer import normalize_patient

RESOURCE_TYPE = "Patient"
ALLOWED_GENDERS = frozenset({"male", "female", "other", "unknown"})

_BIRTH_DATE_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")
# ASCII digits with an optional fraction and exponent; no signs, underscores or other scripts.
_ID_NUMBER_PATTERN = re.compile(r"[0-9]+(\.[0-9]*)?([eE][+-]?[0-9]+)?")

MSG_BODY_NOT_OBJECT = "Body must be a JSON object."
MSG_URL_ID = "URL id must be a positive integer."
MSG_IDENTIFIER_REQUIRED = "Patient.identifier is required for update."
MSG_IDENTIFIER_VALUE = "Patient.identifier[0].value must be a positive integer."
MSG_IDENTIFIER_MISMATCH = "Patient.identifier[0].value must match the id in the URL."
MSG_RESOURCE_TYPE = "resourceType must be 'Patient'."
MSG_NAME_REQUIRED = "Patient must have at least one name."
MSG_GENDER_REQUIRED = "Patient.gender is required."
MSG_GENDER_INVALID = "Patient.gender must be male, female, other, or unknown."
MSG_BIRTH_DATE_REQUIRED = "Patient.birthDate is required."
MSG_BIRTH_DATE_INVALID = "Patient.birthDate must be a valid past date in YYYY-MM-DD."


@dataclass(frozen=True)
class ValidationSuccess:
    patient: dict[str, Any]

    ok = True


@dataclass(frozen=True)
class ValidationFailure:
    status: int
    message: str

    ok = False


ValidationResult = ValidationSuccess | ValidationFailure


def _malformed(message: str) -> ValidationFailure:
    return ValidationFailure(status=400, message=message)


def _violation(message: str) -> ValidationFailure:
    return ValidationFailure(status=422, message=message)


def parse_positive_int(value: Any) -> int | None:
    """
    Parse `value` as a positive integer, or return `None`.

    Accepts ints, integral floats, and strings such as " 5 ", "5.0" or "5e0".
    Booleans, blanks, fractions, zero, negatives, underscores ("1_0") and
    non-ASCII digits are rejected.
    """

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            return None
        parsed = int(value)
    elif isinstance(value, str):
        text = value.strip()
        if not _ID_NUMBER_PATTERN.fullmatch(text):
            return None
        try:
            parsed = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                return None
            if not math.isfinite(number) or not number.is_integer():
                return None
            parsed = int(number)
    else:
        return None
    return parsed if parsed > 0 else None


def is_valid_birth_date(value: Any, *, today: date | None = None) -> bool:
    """True for a real `YYYY-MM-DD` calendar date that is not after `today` (local)."""

    if not isinstance(value, str) or not _BIRTH_DATE_PATTERN.fullmatch(value):
        return False

    year, month, day = (int(part) for part in value.split("-"))
    try:
        # The constructor rejects days and months that do not exist (2023-02-30, 2023-13-01).
        parsed = date(year, month, day)
    except ValueError:
        return False

    return parsed <= (today or date.today())


def _check_business_rules(
    patient: dict[str, Any], *, today: date | None
) -> ValidationFailure | None:
    if patient.get("resourceType") != RESOURCE_TYPE:
        return _violation(MSG_RESOURCE_TYPE)

    name = patient.get("name")
    if not isinstance(name, list) or not name:
        return _violation(MSG_NAME_REQUIRED)

    gender = patient.get("gender")
    if not gender:
        return _violation(MSG_GENDER_REQUIRED)
    if gender not in ALLOWED_GENDERS:
        return _violation(MSG_GENDER_INVALID)

    birth_date = patient.get("birthDate")
    if not birth_date:
        return _violation(MSG_BIRTH_DATE_REQUIRED)
    if not is_valid_birth_date(birth_date, today=today):
        return _violation(MSG_BIRTH_DATE_INVALID)

    return None


def validate_for_create(data: Any, *, today: date | None = None) -> ValidationResult:
    """Validate a body for `POST /Patient`. Client identifiers are always discarded."""

    normalized = normalize_patient(data)
    if normalized is None:
        return _malformed(MSG_BODY_NOT_OBJECT)

    # The store mints identifiers; never trust one sent by the client.
    normalized.pop("identifier", None)

    failure = _check_business_rules(normalized, today=today)
    if failure is not None:
        return failure
    return ValidationSuccess(patient=normalized)


def validate_for_update(
    data: Any, id_from_url: Any, *, today: date | None = None
) -> ValidationResult:
    """
    Validate a body for `PUT /Patient/{id}`.

    The body must carry `identifier[0].value` equal to the URL id. Whether that
    id exists in the store is for the caller to check.
    """

    normalized = normalize_patient(data)
    if normalized is None:
        return _malformed(MSG_BODY_NOT_OBJECT)

    url_id = parse_positive_int(id_from_url)
    if url_id is None:
        return _malformed(MSG_URL_ID)

    identifiers = normalized.get("identifier")
    if not isinstance(identifiers, list) or not identifiers:
        return _malformed(MSG_IDENTIFIER_REQUIRED)

    first = identifiers[0]
    body_id = parse_positive_int(first.get("value") if isinstance(first, dict) else None)
    if body_id is None:
        return _malformed(MSG_IDENTIFIER_VALUE)
    if body_id != url_id:
        return _malformed(MSG_IDENTIFIER_MISMATCH)

    failure = _check_business_rules(normalized, today=today)
    if failure is not None:
        return failure

    # Stored records carry exactly one identifier whose value is the id as a string.
    normalized["identifier"] = [{"value": str(url_id)}]
    return ValidationSuccess(patient=normalized)
