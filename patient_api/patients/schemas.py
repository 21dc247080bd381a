"""Response models for the Patient routes (OpenAPI documentation and output shaping)."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class HumanNameOut(BaseModel):
    text: str | None = Field(default=None, examples=["Ada Lovelace"])
    family: str | None = Field(default=None, examples=["Lovelace"])
    given: list[str] | None = Field(default=None, examples=[["Ada"]])


class PatientOut(BaseModel):
    """A stored Patient resource."""

    resourceType: str = Field(description="Always `Patient`.", examples=["Patient"])
    identifier: list[Any] = Field(
        description="Server-assigned identifier; `identifier[0].value` is the patient id.",
        examples=[[{"value": "1"}]],
    )
    name: list[HumanNameOut] = Field(description="At least one name entry.")
    gender: str = Field(
        description="One of male, female, other, unknown.",
        examples=["female"],
    )
    birthDate: str = Field(description="Date of birth (YYYY-MM-DD).", examples=["1815-12-10"])
    active: bool | None = Field(default=None, description="Whether the record is in active use.")
    telecom: list[Any] | None = Field(default=None, description="Contact points, stored as sent.")
    address: list[Any] | None = Field(default=None, description="Addresses, stored as sent.")


class PatientIdsOut(BaseModel):
    ids: list[int] = Field(
        description="Ids of the patients currently stored, ascending.",
        examples=[[1, 2, 5]],
    )
