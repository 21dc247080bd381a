"""Error payload shape: format_error and the registered exception handlers."""

from __future__ import annotations

import logging

import pytest
from starlette.testclient import TestClient

from patient_api.api.errors import ErrorResponse, format_error


def test_format_error_defaults_details_to_empty_string() -> None:
    assert format_error(404, "Patient not found.") == ErrorResponse(
        status=404, body={"error": "Patient not found.", "details": ""}
    )


def test_format_error_keeps_details() -> None:
    error = format_error(400, "Bad request", "identifier missing")

    assert error.status == 400
    assert error.body == {"error": "Bad request", "details": "identifier missing"}


def test_unknown_route_uses_error_shape(client: TestClient) -> None:
    res = client.get("/Practitioner")

    assert res.status_code == 404
    assert res.json() == {"error": "Not Found", "details": ""}


def test_wrong_method_uses_error_shape(client: TestClient) -> None:
    res = client.patch("/Patient/1", json={})

    assert res.status_code == 405
    assert res.json()["error"] == "Method Not Allowed"
    assert "allow" in res.headers


def test_rejected_request_is_logged_without_body(
    client: TestClient, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.INFO, logger="patient_api.request_errors")

    res = client.post(
        "/Patient",
        json={"resourceType": "Patient", "name": "Secret Name", "gender": "robot"},
        headers={"X-Request-ID": "req_422"},
    )

    assert res.status_code == 422
    records = [r for r in caplog.records if r.name == "patient_api.request_errors"]
    assert len(records) == 1
    record = records[0]
    assert record.__dict__["request_id"] == "req_422"
    assert record.__dict__["status_code"] == 422
    assert record.__dict__["error"] == "business_rule_violation"
    assert record.__dict__["request_path"] == "/Patient"
    assert "Secret Name" not in record.getMessage()
