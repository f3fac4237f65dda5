"""Shared pydantic configuration and response envelopes."""

from __future__ import annotations

from typing import Annotated
from typing import Generic
from typing import TypeVar

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic.alias_generators import to_camel

from storefront.validation.checks import MAX_INT
from storefront.validation.checks import MIN_INT

DataT = TypeVar("DataT")

StoredInt = Annotated[int, Field(ge=MIN_INT, le=MAX_INT)]


class CamelModel(BaseModel):
    """Schema base exposing snake_case attributes as camelCase JSON keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
        allow_inf_nan=False,
    )


class ApiResponse(CamelModel, Generic[DataT]):
    """Success envelope returned by resource routes."""

    success: bool = True
    message: str | None = None
    count: int | None = None
    data: DataT


class DeletedResource(CamelModel):
    """Identity of a removed record."""

    id: str
    name: str | None = None
