"""Shared FastAPI dependencies and body parsing helpers for resource routes."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from typing import TypeVar

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel
from pydantic import ValidationError

from storefront.core.config import Settings
from storefront.media.uploads import ImageUpload
from storefront.media.uploads import collect_images
from storefront.validation.checks import is_blank

ModelT = TypeVar("ModelT", bound=BaseModel)


def get_app_settings(request: Request) -> Settings:
    """Return the settings the running app was built with."""
    return request.app.state.settings


def parse_body(model: type[ModelT], fields: Mapping[str, Any], *, partial: bool = False) -> ModelT:
    """Build ``model`` from raw body fields.

    Blank values are dropped for creates and become ``null`` for partial
    updates, where ``null`` clears nullable references.
    """
    if partial:
        cleaned = {key: None if is_blank(value) else value for key, value in fields.items()}
    else:
        cleaned = {key: value for key, value in fields.items() if not is_blank(value)}
    try:
        return model.model_validate(cleaned)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False)) from exc


async def single_image(request: Request, settings: Settings, field: str = "image") -> ImageUpload | None:
    images = await collect_images(request, field, max_count=1, max_bytes=settings.max_upload_bytes)
    return images[0] if images else None
