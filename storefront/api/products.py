"""Product API routes."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter
from fastapi import Depends
from fastapi import Query
from fastapi import Request
from sqlalchemy.orm import Session

from storefront.api.dependencies import get_app_settings
from storefront.core.config import Settings
from storefront.db.base import get_db_session
from storefront.media.storage import ImageStorage
from storefront.media.storage import get_image_storage
from storefront.media.uploads import collect_images
from storefront.schemas.common import ApiResponse
from storefront.schemas.common import DeletedResource
from storefront.schemas.product import Product
from storefront.schemas.product import ProductCreate
from storefront.schemas.product import ProductFilters
from storefront.schemas.product import ProductPage
from storefront.schemas.product import ProductUpdate
from storefront.schemas.product import SortField
from storefront.schemas.product import SortOrder
from storefront.schemas.product import UploadedImage
from storefront.services.products import DEFAULT_PAGE_SIZE
from storefront.services.products import create_product_service
from storefront.services.products import delete_product_service
from storefront.services.products import get_product_by_slug_service
from storefront.services.products import get_product_service
from storefront.services.products import list_products_service
from storefront.services.products import update_product_service
from storefront.services.products import upload_product_images_service
from storefront.validation.gate import validate_request
from storefront.validation.rules import ID_RULES
from storefront.validation.rules import PAGINATION_RULES
from storefront.validation.rules import PRODUCT_RULES

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get(
    "",
    response_model=ApiResponse[ProductPage],
    dependencies=[Depends(validate_request(PAGINATION_RULES))],
)
def list_products_endpoint(
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    search: str | None = None,
    category_id: UUID | None = Query(default=None, alias="categoryId"),
    is_active: bool | None = Query(default=None, alias="isActive"),
    is_featured: bool | None = Query(default=None, alias="isFeatured"),
    is_best_seller: bool | None = Query(default=None, alias="isBestSeller"),
    min_price: float | None = Query(default=None, alias="minPrice"),
    max_price: float | None = Query(default=None, alias="maxPrice"),
    sort_by: SortField = Query(default="createdAt", alias="sortBy"),
    sort_order: SortOrder = Query(default="desc", alias="sortOrder"),
    session: Session = Depends(get_db_session),
) -> ApiResponse[ProductPage]:
    """List products with filters, sorting and pagination."""
    filters = ProductFilters(
        search=search,
        category_id=category_id,
        is_active=is_active,
        is_featured=is_featured,
        is_best_seller=is_best_seller,
        min_price=min_price,
        max_price=max_price,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    result = list_products_service(session, filters, page=page, limit=limit)
    return ApiResponse[ProductPage](data=result)


@router.get("/slug/{slug}", response_model=ApiResponse[Product])
def get_product_by_slug_endpoint(slug: str, session: Session = Depends(get_db_session)) -> ApiResponse[Product]:
    """Get a single product by slug."""
    return ApiResponse[Product](data=get_product_by_slug_service(session, slug))


@router.get(
    "/{id}",
    response_model=ApiResponse[Product],
    dependencies=[Depends(validate_request(ID_RULES))],
)
def get_product_endpoint(id: UUID, session: Session = Depends(get_db_session)) -> ApiResponse[Product]:
    """Get a single product by id."""
    return ApiResponse[Product](data=get_product_service(session, id))


@router.post(
    "",
    status_code=201,
    response_model=ApiResponse[Product],
    dependencies=[Depends(validate_request(PRODUCT_RULES))],
)
def create_product_endpoint(
    payload: ProductCreate,
    session: Session = Depends(get_db_session),
) -> ApiResponse[Product]:
    """Create a product."""
    product = create_product_service(session, payload)
    return ApiResponse[Product](message="Product created successfully", data=product)


@router.put(
    "/{id}",
    response_model=ApiResponse[Product],
    dependencies=[Depends(validate_request(ID_RULES))],
)
def update_product_endpoint(
    id: UUID,
    payload: ProductUpdate,
    session: Session = Depends(get_db_session),
) -> ApiResponse[Product]:
    """Update a product."""
    product = update_product_service(session, id, payload)
    return ApiResponse[Product](message="Product updated successfully", data=product)


@router.delete(
    "/{id}",
    response_model=ApiResponse[DeletedResource],
    dependencies=[Depends(validate_request(ID_RULES))],
)
async def delete_product_endpoint(
    id: UUID,
    session: Session = Depends(get_db_session),
    storage: ImageStorage = Depends(get_image_storage),
) -> ApiResponse[DeletedResource]:
    """Delete a product and its hosted images."""
    product = await delete_product_service(session, storage, id)
    return ApiResponse[DeletedResource](
        message="Product deleted successfully",
        data=DeletedResource(id=str(product.id), name=product.name),
    )


@router.post("/upload-images", response_model=ApiResponse[list[UploadedImage]])
async def upload_product_images_endpoint(
    request: Request,
    storage: ImageStorage = Depends(get_image_storage),
    settings: Settings = Depends(get_app_settings),
) -> ApiResponse[list[UploadedImage]]:
    """Forward multipart ``images`` to the image service."""
    images = await collect_images(
        request,
        "images",
        max_count=settings.max_upload_files,
        max_bytes=settings.max_upload_bytes,
    )
    uploaded = await upload_product_images_service(storage, images, folder=settings.upload_folder)
    return ApiResponse[list[UploadedImage]](
        message=f"{len(uploaded)} image(s) uploaded successfully",
        count=len(uploaded),
        data=uploaded,
    )
