from __future__ import annotations


def test_health_ok(client) -> None:
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


def test_metrics_exposes_route_templates_only(client) -> None:
    client.get("/Patient/12345")

    res = client.get("/metrics")

    assert res.status_code == 200
    assert "patient_api_http_requests_total" in res.text
    assert 'route="/Patient/{patient_id}"' in res.text
    assert "/Patient/12345" not in res.text


def test_metrics_can_be_disabled(monkeypatch) -> None:
    from fastapi.testclient import TestClient

    from patient_api.core.settings import get_settings
    from patient_api.main import create_app

    monkeypatch.setenv("METRICS_ENABLED", "false")
    get_settings.cache_clear()

    with TestClient(create_app()) as c:
        assert c.get("/metrics").status_code == 404
        assert c.get("/health").status_code == 200
