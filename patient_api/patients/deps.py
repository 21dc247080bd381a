from __future__ import annotations

from typing import Any

from fastapi import Request

from patient_api.patients.store import PatientStore


def init_patient_store(*, app: Any) -> PatientStore:
    store = PatientStore()
    app.state.patient_store = store
    return store


def get_patient_store(request: Request) -> PatientStore:
    """Dependency provider for the application's single PatientStore."""
    return request.app.state.patient_store
