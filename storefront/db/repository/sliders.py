"""Repository primitives for slider entities."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.db.models.slider import Slider


def create_slider(session: Session, **fields: Any) -> Slider:
    """Create and return a slider row."""
    slider = Slider(**fields)
    session.add(slider)
    session.flush()
    session.refresh(slider)
    return slider


def get_slider(session: Session, slider_id: UUID) -> Slider | None:
    return session.get(Slider, slider_id)


def list_sliders(session: Session, *, include_inactive: bool = False) -> list[Slider]:
    """List sliders by display order, newest first within the same position."""
    stmt = select(Slider)
    if not include_inactive:
        stmt = stmt.where(Slider.is_active.is_(True))
    stmt = stmt.order_by(Slider.order.asc(), Slider.created_at.desc())
    return list(session.scalars(stmt))


def update_slider(session: Session, slider: Slider, **fields: Any) -> Slider:
    for name, value in fields.items():
        setattr(slider, name, value)
    session.flush()
    session.refresh(slider)
    return slider


def delete_slider(session: Session, slider: Slider) -> None:
    session.delete(slider)
    session.flush()
