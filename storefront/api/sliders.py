"""Slider API routes."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter
from fastapi import Depends
from fastapi import Request
from sqlalchemy.orm import Session

from storefront.api.dependencies import get_app_settings
from storefront.api.dependencies import parse_body
from storefront.api.dependencies import single_image
from storefront.core.config import Settings
from storefront.db.base import get_db_session
from storefront.media.storage import ImageStorage
from storefront.media.storage import get_image_storage
from storefront.schemas.common import ApiResponse
from storefront.schemas.common import DeletedResource
from storefront.schemas.slider import Slider
from storefront.schemas.slider import SliderCreate
from storefront.schemas.slider import SliderUpdate
from storefront.services.sliders import create_slider_service
from storefront.services.sliders import delete_slider_service
from storefront.services.sliders import list_sliders_service
from storefront.services.sliders import update_slider_service
from storefront.validation.gate import read_body
from storefront.validation.gate import validate_request
from storefront.validation.rules import ID_RULES
from storefront.validation.rules import SLIDER_RULES

router = APIRouter(prefix="/api/slider", tags=["slider"])


@router.get("", response_model=ApiResponse[list[Slider]])
def list_sliders_endpoint(admin: bool = False, session: Session = Depends(get_db_session)) -> ApiResponse[list[Slider]]:
    """List active slides; ``admin=true`` includes inactive ones."""
    sliders = list_sliders_service(session, include_inactive=admin)
    return ApiResponse[list[Slider]](count=len(sliders), data=sliders)


@router.post(
    "",
    status_code=201,
    response_model=ApiResponse[Slider],
    dependencies=[Depends(validate_request(SLIDER_RULES))],
)
async def create_slider_endpoint(
    request: Request,
    session: Session = Depends(get_db_session),
    storage: ImageStorage = Depends(get_image_storage),
    settings: Settings = Depends(get_app_settings),
) -> ApiResponse[Slider]:
    """Upload a slide image with its caption fields."""
    payload = parse_body(SliderCreate, await read_body(request))
    image = await single_image(request, settings)
    slider = await create_slider_service(session, storage, payload, image)
    return ApiResponse[Slider](message="Slider image uploaded successfully", data=slider)


@router.put(
    "/{id}",
    response_model=ApiResponse[Slider],
    dependencies=[Depends(validate_request(ID_RULES))],
)
def update_slider_endpoint(
    id: UUID,
    payload: SliderUpdate,
    session: Session = Depends(get_db_session),
) -> ApiResponse[Slider]:
    """Update a slide's caption, order or visibility."""
    slider = update_slider_service(session, id, payload)
    return ApiResponse[Slider](message="Slider updated successfully", data=slider)


@router.delete(
    "/{id}",
    response_model=ApiResponse[DeletedResource],
    dependencies=[Depends(validate_request(ID_RULES))],
)
async def delete_slider_endpoint(
    id: UUID,
    session: Session = Depends(get_db_session),
    storage: ImageStorage = Depends(get_image_storage),
) -> ApiResponse[DeletedResource]:
    """Delete a slide and its hosted image."""
    slider = await delete_slider_service(session, storage, id)
    return ApiResponse[DeletedResource](
        message="Slider image deleted successfully",
        data=DeletedResource(id=str(slider.id), name=slider.title),
    )
