from __future__ import annotations

from pydantic import BaseModel, Field


class HealthOut(BaseModel):
    """Health check response."""

    status: str = Field(
        description="Service status indicator. `ok` means the API process is up and responding.",
        examples=["ok"],
    )


class ErrorOut(BaseModel):
    """Body returned with every 4xx response."""

    error: str = Field(
        description="Short, human readable reason for the failure.",
        examples=["Patient.gender is required."],
    )
    details: str = Field(
        default="",
        description="Additional context. Empty string when there is none.",
        examples=[""],
    )
