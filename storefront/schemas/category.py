"""Pydantic schemas for category API payloads."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field
from pydantic import field_validator

from storefront.schemas.common import CamelModel


class CategoryCreate(CamelModel):
    """Payload to create a category."""

    name: str
    description: str = ""
    parent: UUID | None = None
    is_active: bool = True
    show_in_menu: bool = False


class CategoryUpdate(CamelModel):
    """Payload to update mutable category fields; ``parent: null`` detaches."""

    name: str | None = None
    description: str | None = None
    parent: UUID | None = None
    is_active: bool | None = None
    show_in_menu: bool | None = None
    remove_image: bool | None = False

    @field_validator("parent", mode="before")
    @classmethod
    def _blank_parent_detaches(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class Category(CamelModel):
    """Category response payload."""

    id: UUID
    name: str
    slug: str
    description: str
    parent_id: UUID | None = None
    is_active: bool
    show_in_menu: bool
    image_url: str | None = None
    image_public_id: str | None = None
    image_alt_text: str = ""
    created_at: datetime
    updated_at: datetime


class CategoryNode(Category):
    """Category with its nested active subcategories."""

    children: list["CategoryNode"] = Field(default_factory=list)
