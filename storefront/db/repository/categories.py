"""Repository primitives for category entities."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import func
from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.db.models.category import Category


def create_category(session: Session, **fields: Any) -> Category:
    """Create and return a category row."""
    category = Category(**fields)
    session.add(category)
    session.flush()
    session.refresh(category)
    return category


def get_category(session: Session, category_id: UUID) -> Category | None:
    """Fetch a category by id."""
    return session.get(Category, category_id)


def get_category_by_slug(session: Session, slug: str) -> Category | None:
    return session.scalars(select(Category).where(Category.slug == slug)).first()


def get_category_by_name(session: Session, name: str) -> Category | None:
    return session.scalars(select(Category).where(Category.name == name)).first()


def list_categories(session: Session, *, is_active: bool | None = None) -> list[Category]:
    """List categories ordered by name with optional active-state filtering."""
    stmt = select(Category)
    if is_active is not None:
        stmt = stmt.where(Category.is_active == is_active)
    stmt = stmt.order_by(Category.name.asc())
    return list(session.scalars(stmt))


def count_children(session: Session, category_id: UUID) -> int:
    stmt = select(func.count()).select_from(Category).where(Category.parent_id == category_id)
    return int(session.scalar(stmt) or 0)


def update_category(session: Session, category: Category, **fields: Any) -> Category:
    """Apply the given field values to a category."""
    for name, value in fields.items():
        setattr(category, name, value)
    session.flush()
    session.refresh(category)
    return category


def delete_category(session: Session, category: Category) -> None:
    session.delete(category)
    session.flush()
