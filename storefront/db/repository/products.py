"""Repository primitives for product entities."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any
from uuid import UUID

from sqlalchemy import Select
from sqlalchemy import String
from sqlalchemy import cast
from sqlalchemy import func
from sqlalchemy import or_
from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.db.models.product import Product
from storefront.db.models.product import ProductImage

SORT_COLUMNS = {
    "createdAt": Product.created_at,
    "updatedAt": Product.updated_at,
    "name": Product.name,
    "price": Product.price,
    "stock": Product.stock,
}


def create_product(session: Session, *, images: Sequence[dict[str, Any]] = (), **fields: Any) -> Product:
    """Create and return a product row with its images."""
    product = Product(**fields)
    product.images = [ProductImage(**image) for image in images]
    session.add(product)
    session.flush()
    session.refresh(product)
    return product


def get_product(session: Session, product_id: UUID) -> Product | None:
    """Fetch a product by id."""
    return session.get(Product, product_id)


def get_product_by_slug(session: Session, slug: str) -> Product | None:
    return session.scalars(select(Product).where(Product.slug == slug)).first()


def _filtered(
    stmt: Select[Any],
    *,
    search: str | None = None,
    category_id: UUID | None = None,
    is_active: bool | None = None,
    is_featured: bool | None = None,
    is_best_seller: bool | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
) -> Select[Any]:
    if search:
        pattern = f"%{search.lower()}%"
        stmt = stmt.where(
            or_(
                func.lower(Product.name).like(pattern),
                func.lower(Product.sku).like(pattern),
                func.lower(Product.description).like(pattern),
                func.lower(Product.short_description).like(pattern),
                func.lower(cast(Product.tags, String)).like(pattern),
            )
        )
    if category_id is not None:
        stmt = stmt.where(Product.category_id == category_id)
    if is_active is not None:
        stmt = stmt.where(Product.is_active == is_active)
    if is_featured is not None:
        stmt = stmt.where(Product.is_featured == is_featured)
    if is_best_seller is not None:
        stmt = stmt.where(Product.is_best_seller == is_best_seller)
    if min_price is not None:
        stmt = stmt.where(Product.price >= min_price)
    if max_price is not None:
        stmt = stmt.where(Product.price <= max_price)
    return stmt


def list_products(
    session: Session,
    *,
    limit: int,
    offset: int,
    sort_by: str = "createdAt",
    sort_order: str = "desc",
    **filters: Any,
) -> tuple[list[Product], int]:
    """Return one page of products matching ``filters`` and the total match count."""
    column = SORT_COLUMNS.get(sort_by, Product.created_at)
    ordering = column.asc() if sort_order == "asc" else column.desc()
    stmt = _filtered(select(Product), **filters).order_by(ordering).limit(limit).offset(offset)
    total_stmt = _filtered(select(func.count()).select_from(Product), **filters)
    products = list(session.scalars(stmt).unique())
    total = int(session.scalar(total_stmt) or 0)
    return products, total


def update_product(
    session: Session,
    product: Product,
    *,
    images: Sequence[dict[str, Any]] | None = None,
    **fields: Any,
) -> Product:
    """Apply field values and, when given, replace the image list."""
    for name, value in fields.items():
        setattr(product, name, value)
    if images is not None:
        product.images = [ProductImage(**image) for image in images]
    session.flush()
    session.refresh(product)
    return product


def delete_product(session: Session, product: Product) -> None:
    session.delete(product)
    session.flush()
