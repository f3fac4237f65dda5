"""Category API routes."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter
from fastapi import Depends
from fastapi import Query
from fastapi import Request
from sqlalchemy.orm import Session

from storefront.api.dependencies import get_app_settings
from storefront.api.dependencies import parse_body
from storefront.api.dependencies import single_image
from storefront.core.config import Settings
from storefront.db.base import get_db_session
from storefront.media.storage import ImageStorage
from storefront.media.storage import get_image_storage
from storefront.schemas.category import Category
from storefront.schemas.category import CategoryCreate
from storefront.schemas.category import CategoryNode
from storefront.schemas.category import CategoryUpdate
from storefront.schemas.common import ApiResponse
from storefront.schemas.common import DeletedResource
from storefront.services.categories import create_category_service
from storefront.services.categories import delete_category_service
from storefront.services.categories import get_category_by_slug_service
from storefront.services.categories import get_category_service
from storefront.services.categories import get_category_tree_service
from storefront.services.categories import list_categories_service
from storefront.services.categories import update_category_service
from storefront.validation.gate import read_body
from storefront.validation.gate import validate_request
from storefront.validation.rules import CATEGORY_RULES
from storefront.validation.rules import ID_RULES

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=ApiResponse[list[Category]])
def list_categories_endpoint(
    is_active: bool | None = Query(default=None, alias="isActive"),
    session: Session = Depends(get_db_session),
) -> ApiResponse[list[Category]]:
    """List categories with optional active-state filter."""
    categories = list_categories_service(session, is_active=is_active)
    return ApiResponse[list[Category]](count=len(categories), data=categories)


@router.get("/tree", response_model=ApiResponse[list[CategoryNode]])
def get_category_tree_endpoint(session: Session = Depends(get_db_session)) -> ApiResponse[list[CategoryNode]]:
    """Get active categories nested by parent."""
    tree = get_category_tree_service(session)
    return ApiResponse[list[CategoryNode]](count=len(tree), data=tree)


@router.get("/slug/{slug}", response_model=ApiResponse[Category])
def get_category_by_slug_endpoint(slug: str, session: Session = Depends(get_db_session)) -> ApiResponse[Category]:
    """Get a single category by slug."""
    return ApiResponse[Category](data=get_category_by_slug_service(session, slug))


@router.get(
    "/{id}",
    response_model=ApiResponse[Category],
    dependencies=[Depends(validate_request(ID_RULES))],
)
def get_category_endpoint(id: UUID, session: Session = Depends(get_db_session)) -> ApiResponse[Category]:
    """Get a single category by id."""
    return ApiResponse[Category](data=get_category_service(session, id))


@router.post(
    "",
    status_code=201,
    response_model=ApiResponse[Category],
    dependencies=[Depends(validate_request(CATEGORY_RULES))],
)
async def create_category_endpoint(
    request: Request,
    session: Session = Depends(get_db_session),
    storage: ImageStorage = Depends(get_image_storage),
    settings: Settings = Depends(get_app_settings),
) -> ApiResponse[Category]:
    """Create a category from JSON or a multipart form with an optional ``image``."""
    payload = parse_body(CategoryCreate, await read_body(request))
    image = await single_image(request, settings)
    category = await create_category_service(session, storage, payload, image)
    return ApiResponse[Category](message="Category created successfully", data=category)


@router.put(
    "/{id}",
    response_model=ApiResponse[Category],
    dependencies=[Depends(validate_request(ID_RULES))],
)
async def update_category_endpoint(
    id: UUID,
    request: Request,
    session: Session = Depends(get_db_session),
    storage: ImageStorage = Depends(get_image_storage),
    settings: Settings = Depends(get_app_settings),
) -> ApiResponse[Category]:
    """Update a category; a new ``image`` part replaces the stored one."""
    payload = parse_body(CategoryUpdate, await read_body(request), partial=True)
    image = await single_image(request, settings)
    category = await update_category_service(session, storage, id, payload, image)
    return ApiResponse[Category](message="Category updated successfully", data=category)


@router.delete(
    "/{id}",
    response_model=ApiResponse[DeletedResource],
    dependencies=[Depends(validate_request(ID_RULES))],
)
def delete_category_endpoint(id: UUID, session: Session = Depends(get_db_session)) -> ApiResponse[DeletedResource]:
    """Delete a category without subcategories."""
    category = delete_category_service(session, id)
    return ApiResponse[DeletedResource](
        message="Category deleted successfully",
        data=DeletedResource(id=str(category.id), name=category.name),
    )
