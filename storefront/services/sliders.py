"""Service helpers for slider API operations."""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from storefront.core.errors import NotFoundError
from storefront.core.errors import UploadRejectedError
from storefront.db.models.slider import Slider
from storefront.db.repository.sliders import create_slider
from storefront.db.repository.sliders import delete_slider
from storefront.db.repository.sliders import get_slider
from storefront.db.repository.sliders import list_sliders
from storefront.db.repository.sliders import update_slider
from storefront.media.storage import ImageStorage
from storefront.media.uploads import ImageUpload
from storefront.schemas.slider import SliderCreate
from storefront.schemas.slider import SliderUpdate

logger = logging.getLogger(__name__)

SLIDER_IMAGE_FOLDER = "slider"


def list_sliders_service(session: Session, *, include_inactive: bool = False) -> list[Slider]:
    return list_sliders(session, include_inactive=include_inactive)


def get_slider_service(session: Session, slider_id: UUID) -> Slider:
    slider = get_slider(session, slider_id)
    if slider is None:
        raise NotFoundError("Slider image not found")
    return slider


async def create_slider_service(
    session: Session,
    storage: ImageStorage,
    payload: SliderCreate,
    image: ImageUpload | None,
) -> Slider:
    """Upload the slide image, then persist the slide pointing at it."""
    if image is None:
        raise UploadRejectedError("No image file provided")

    result = await storage.upload_buffer(image.content, folder=SLIDER_IMAGE_FOLDER)
    slider = create_slider(
        session,
        image_url=result["secure_url"],
        public_id=result["public_id"],
        alt_text=payload.alt_text or payload.title,
        title=payload.title,
        subtitle=payload.subtitle,
        button_text=payload.button_text,
        button_link=payload.button_link,
        order=payload.order,
        is_active=payload.is_active,
    )
    session.commit()
    logger.info("Created slider id=%s public_id=%s", slider.id, slider.public_id)
    return slider


def update_slider_service(session: Session, slider_id: UUID, payload: SliderUpdate) -> Slider:
    slider = get_slider_service(session, slider_id)
    fields = payload.model_dump(exclude_unset=True, exclude_none=True)
    slider = update_slider(session, slider, **fields)
    session.commit()
    return slider


async def delete_slider_service(session: Session, storage: ImageStorage, slider_id: UUID) -> Slider:
    """Remove the hosted image first so a failing image service leaves the record intact."""
    slider = get_slider_service(session, slider_id)
    await storage.delete(slider.public_id)
    delete_slider(session, slider)
    session.commit()
    return slider
