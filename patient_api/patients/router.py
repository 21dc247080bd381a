from __future__ import annotations

import logging
from typing import Any, NoReturn, cast

from fastapi import APIRouter, Depends, Request, status

from patient_api.api.schemas import ErrorOut
from patient_api.domain.exceptions import PatientRequestError
from patient_api.patients.deps import get_patient_store
from patient_api.patients.schemas import PatientIdsOut, PatientOut
from patient_api.patients.store import PatientStore
from patient_api.patients.validator import (
    MSG_URL_ID,
    ValidationFailure,
    parse_positive_int,
    validate_for_create,
    validate_for_update,
)

router = APIRouter(prefix="/Patient", tags=["patients"])
logger = logging.getLogger("patient_api.patients")

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorOut, "description": "Malformed body, identifier or URL id."},
    404: {"model": ErrorOut, "description": "Patient not found."},
    422: {"model": ErrorOut, "description": "Patient content breaks a business rule."},
}

MSG_INVALID_JSON = "Body must be valid JSON."
MSG_NOT_FOUND = "Patient not found."


async def _read_json_body(request: Request) -> Any:
    try:
        return await request.json()
    except (ValueError, RecursionError):
        raise PatientRequestError(status.HTTP_400_BAD_REQUEST, MSG_INVALID_JSON) from None


def _parse_url_id(raw_id: str) -> int:
    patient_id = parse_positive_int(raw_id)
    if patient_id is None:
        raise PatientRequestError(status.HTTP_400_BAD_REQUEST, MSG_URL_ID)
    return patient_id


def _raise_failure(failure: ValidationFailure) -> NoReturn:
    raise PatientRequestError(failure.status, failure.message)


def _log_event(message: str, *, request: Request, patient_id: int) -> None:
    # Numeric id only; names and birth dates are PHI.
    logger.info(
        message,
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "patient_id": patient_id,
        },
    )


@router.get("", response_model=PatientIdsOut)
async def list_patient_ids(store: PatientStore = Depends(get_patient_store)) -> PatientIdsOut:
    return PatientIdsOut(ids=store.list_ids())


@router.get(
    "/{patient_id}",
    response_model=PatientOut,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
)
async def read_patient(
    patient_id: str,
    store: PatientStore = Depends(get_patient_store),
) -> dict[str, Any]:
    record = store.read(_parse_url_id(patient_id))
    if record is None:
        raise PatientRequestError(status.HTTP_404_NOT_FOUND, MSG_NOT_FOUND)
    return record


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=PatientOut,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
)
async def create_patient(
    request: Request,
    store: PatientStore = Depends(get_patient_store),
) -> dict[str, Any]:
    result = validate_for_create(await _read_json_body(request))
    if isinstance(result, ValidationFailure):
        _raise_failure(result)

    created = store.create(result.patient)
    _log_event("Patient created", request=request, patient_id=created.id)
    return created.record


@router.put(
    "/{patient_id}",
    response_model=PatientOut,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
)
async def update_patient(
    patient_id: str,
    request: Request,
    store: PatientStore = Depends(get_patient_store),
) -> dict[str, Any]:
    """
    Replace a stored Patient.

    Check order: malformed URL id (400), unknown patient (404), then the body rules
    (400 for identifier problems, 422 for content).
    """

    url_id = parse_positive_int(patient_id)
    if url_id is not None and url_id not in store:
        raise PatientRequestError(status.HTTP_404_NOT_FOUND, MSG_NOT_FOUND)

    result = validate_for_update(await _read_json_body(request), patient_id)
    if isinstance(result, ValidationFailure):
        _raise_failure(result)

    # Cast is safe: validate_for_update only succeeds when the URL id parses.
    url_id = cast(int, url_id)
    store.update(url_id, result.patient)
    _log_event("Patient updated", request=request, patient_id=url_id)
    record = store.read(url_id)
    if record is None:
        # Removed by a concurrent request between the checks above and the read.
        raise PatientRequestError(status.HTTP_404_NOT_FOUND, MSG_NOT_FOUND)
    return record


@router.delete(
    "/{patient_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
    responses={400: _ERROR_RESPONSES[400], 404: _ERROR_RESPONSES[404]},
)
async def delete_patient(
    patient_id: str,
    request: Request,
    store: PatientStore = Depends(get_patient_store),
) -> None:
    url_id = _parse_url_id(patient_id)
    if url_id not in store:
        raise PatientRequestError(status.HTTP_404_NOT_FOUND, MSG_NOT_FOUND)
    store.remove(url_id)
    _log_event("Patient deleted", request=request, patient_id=url_id)
    return None
