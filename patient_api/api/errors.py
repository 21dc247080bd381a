"""Uniform error payloads: `{"error": <message>, "details": <details>}`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ErrorResponse:
    status: int
    body: dict[str, Any]


def format_error(status: int, message: str, details: str | None = None) -> ErrorResponse:
    # `details` is always present in the body, empty when the caller has nothing to add.
    return ErrorResponse(status=status, body={"error": message, "details": details or ""})
