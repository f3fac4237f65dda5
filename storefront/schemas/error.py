"""Error envelope schemas shared across API handlers."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class ErrorEnvelope(BaseModel):
    """Terminal error response body."""

    message: str
    stack: str
    data: Any = None


class ValidationErrorEntry(BaseModel):
    """Single violated field constraint."""

    field: str
    message: str


class ValidationErrorResponse(BaseModel):
    """Rejection body produced by the validation gate."""

    success: bool = False
    errors: list[ValidationErrorEntry]


class UploadErrorResponse(BaseModel):
    """Rejection body for refused image uploads."""

    success: bool = False
    message: str
