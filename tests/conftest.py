from __future__ import annotations

import os

import pytest

from patient_api.patients.store import PatientStore


@pytest.fixture(autouse=True)
def _test_settings() -> None:
    os.environ["APP_ENV"] = "development"
    # Settings are cached via @lru_cache; clear so each test sees its own environment.
    from patient_api.core.settings import get_settings

    get_settings.cache_clear()


@pytest.fixture
def store() -> PatientStore:
    return PatientStore()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from patient_api.main import create_app

    # A fresh app per test means a fresh PatientStore: ids restart at 1.
    app = create_app()
    with TestClient(app) as c:
        yield c
