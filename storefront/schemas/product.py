"""Pydantic schemas for product API payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import Field
from pydantic import field_validator

from storefront.schemas.common import CamelModel
from storefront.schemas.common import StoredInt

SortField = Literal["createdAt", "updatedAt", "name", "price", "stock"]
SortOrder = Literal["asc", "desc"]


class ProductImageIn(CamelModel):
    """Image descriptor attached to a product payload."""

    url: str
    public_id: str | None = None
    alt_text: str = ""
    is_primary: bool = False
    order: StoredInt = 0


class ProductCreate(CamelModel):
    """Payload to create a product."""

    name: str
    description: str
    short_description: str = ""
    price: float
    compare_at_price: float = 0
    stock: StoredInt
    sku: str
    category: UUID
    tags: list[str] = Field(default_factory=list)
    images: list[ProductImageIn] = Field(default_factory=list)
    is_active: bool = True
    is_featured: bool = False
    is_best_seller: bool = False


class ProductUpdate(CamelModel):
    """Payload to update mutable product fields; ``category: null`` clears it."""

    name: str | None = None
    description: str | None = None
    short_description: str | None = None
    price: float | None = Field(default=None, ge=0)
    compare_at_price: float | None = Field(default=None, ge=0)
    stock: StoredInt | None = Field(default=None, ge=0)
    sku: str | None = None
    category: UUID | None = None
    tags: list[str] | None = None
    images: list[ProductImageIn] | None = None
    is_active: bool | None = None
    is_featured: bool | None = None
    is_best_seller: bool | None = None

    @field_validator("category", mode="before")
    @classmethod
    def _blank_category_clears(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ProductImage(ProductImageIn):
    """Stored product image."""

    id: UUID


class CategorySummary(CamelModel):
    """Category snapshot embedded in product responses."""

    id: UUID
    name: str
    slug: str


class Product(CamelModel):
    """Product response payload."""

    id: UUID
    name: str
    slug: str
    sku: str
    description: str
    short_description: str
    price: float
    compare_at_price: float
    stock: int
    category_id: UUID | None = None
    category: CategorySummary | None = None
    tags: list[str]
    images: list[ProductImage]
    is_active: bool
    is_featured: bool
    is_best_seller: bool
    created_at: datetime
    updated_at: datetime


class ProductFilters(CamelModel):
    """Query filters for product listing."""

    search: str | None = None
    category_id: UUID | None = None
    is_active: bool | None = None
    is_featured: bool | None = None
    is_best_seller: bool | None = None
    min_price: float | None = None
    max_price: float | None = None
    sort_by: SortField = "createdAt"
    sort_order: SortOrder = "desc"


class ProductPage(CamelModel):
    """Paginated product listing."""

    products: list[Product]
    total: int
    total_pages: int
    page: int
    limit: int


class UploadedImage(CamelModel):
    """Descriptor returned for each image forwarded to the image service."""

    url: str
    public_id: str
    alt_text: str
    is_primary: bool
    order: int
    format: str | None = None
    width: int | None = None
    height: int | None = None
