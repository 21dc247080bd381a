"""JSON logging for the Patient API.

Every record goes to stdout as one JSON object. The service logs through three
loggers, and the formatter lifts their `extra` fields into top-level keys:

- `patient_api.http`: one record per request (request_id, method, route
  template, status_code, duration_ms)
- `patient_api.patients`: create/update/delete events, keyed by the numeric
  patient_id only
- `patient_api.request_errors`: rejected requests with their error kind
  (malformed_request, not_found, business_rule_violation)

Patient bodies (names, birth dates, telecom) never reach a log record. Records
from other libraries lack these fields, so each key defaults to null.
"""

from __future__ import annotations

import json
import logging
import logging.config
import os
from datetime import UTC, datetime
from typing import Any


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


class JsonFormatter(logging.Formatter):
    """Emit JSON logs while safely handling missing `extra` fields.

    A `'%(request_id)s'`-style format string would raise KeyError for records
    emitted without those fields (uvicorn, third-party libraries).
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
            "method": getattr(record, "method", getattr(record, "http_method", None)),
            "path": getattr(record, "path", getattr(record, "request_path", None)),
            "status_code": getattr(record, "status_code", None),
            "duration_ms": getattr(record, "duration_ms", None),
            "patient_id": getattr(record, "patient_id", None),
            "error": getattr(record, "error", None),
        }

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False)


def setup_logging() -> None:
    """Configure application logging (JSON to stdout)."""

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "()": "patient_api.core.logging.JsonFormatter",
                }
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                    "stream": "ext://sys.stdout",
                }
            },
            "root": {
                "level": LOG_LEVEL,
                "handlers": ["default"],
            },
        }
    )
