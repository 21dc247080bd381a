from __future__ import annotations


class PatientRequestError(Exception):
    """Raised by routes when a request cannot be served (400, 404, 422)."""

    def __init__(self, status_code: int, message: str, details: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details
