"""Pydantic schemas for slider API payloads."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from storefront.schemas.common import CamelModel
from storefront.schemas.common import StoredInt


class SliderCreate(CamelModel):
    """Form fields accompanying a slider image upload."""

    title: str
    alt_text: str = ""
    subtitle: str = ""
    button_text: str = ""
    button_link: str = ""
    order: StoredInt = 0
    is_active: bool = True


class SliderUpdate(CamelModel):
    """Payload to update mutable slider fields."""

    title: str | None = None
    alt_text: str | None = None
    subtitle: str | None = None
    button_text: str | None = None
    button_link: str | None = None
    order: StoredInt | None = None
    is_active: bool | None = None


class Slider(CamelModel):
    """Slider response payload."""

    id: UUID
    image_url: str
    public_id: str
    alt_text: str
    title: str
    subtitle: str
    button_text: str
    button_link: str
    order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime
