"""Service helpers for product API operations."""

from __future__ import annotations

from collections.abc import Sequence
import logging
import math
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from storefront.core.errors import BadRequestError
from storefront.core.errors import NotFoundError
from storefront.core.errors import UploadRejectedError
from storefront.db.models.product import Product
from storefront.db.repository.categories import get_category
from storefront.db.repository.products import create_product
from storefront.db.repository.products import delete_product
from storefront.db.repository.products import get_product
from storefront.db.repository.products import get_product_by_slug
from storefront.db.repository.products import list_products
from storefront.db.repository.products import update_product
from storefront.media.storage import ImageStorage
from storefront.media.uploads import ImageUpload
from storefront.schemas.product import ProductCreate
from storefront.schemas.product import ProductFilters
from storefront.schemas.product import ProductImageIn
from storefront.schemas.product import ProductPage
from storefront.schemas.product import ProductUpdate
from storefront.schemas.product import UploadedImage
from storefront.services.slugs import slugify

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 12


def list_products_service(
    session: Session,
    filters: ProductFilters,
    *,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
) -> ProductPage:
    """Return one page of products matching the filters."""
    products, total = list_products(
        session,
        limit=limit,
        offset=(page - 1) * limit,
        sort_by=filters.sort_by,
        sort_order=filters.sort_order,
        search=filters.search,
        category_id=filters.category_id,
        is_active=filters.is_active,
        is_featured=filters.is_featured,
        is_best_seller=filters.is_best_seller,
        min_price=filters.min_price,
        max_price=filters.max_price,
    )
    return ProductPage.model_validate(
        {
            "products": products,
            "total": total,
            "total_pages": math.ceil(total / limit),
            "page": page,
            "limit": limit,
        },
        from_attributes=True,
    )


def get_product_service(session: Session, product_id: UUID) -> Product:
    """Fetch a product or raise not found."""
    product = get_product(session, product_id)
    if product is None:
        raise NotFoundError("Product not found")
    return product


def get_product_by_slug_service(session: Session, slug: str) -> Product:
    product = get_product_by_slug(session, slug)
    if product is None:
        raise NotFoundError("Product not found")
    return product


def _ensure_unique_slug(session: Session, slug: str, *, exclude_id: UUID | None = None) -> None:
    existing = get_product_by_slug(session, slug)
    if existing is not None and existing.id != exclude_id:
        raise BadRequestError("Product with this name already exists")


def _ensure_category_exists(session: Session, category_id: UUID) -> None:
    if get_category(session, category_id) is None:
        raise BadRequestError("Category not found")


def _image_rows(images: Sequence[ProductImageIn]) -> list[dict[str, Any]]:
    """Serialize images, marking the first one primary when none is."""
    rows = [image.model_dump() for image in images]
    if rows and not any(row["is_primary"] for row in rows):
        rows[0]["is_primary"] = True
    return rows


def create_product_service(session: Session, payload: ProductCreate) -> Product:
    """Create a product under an existing category."""
    slug = slugify(payload.name)
    _ensure_unique_slug(session, slug)
    _ensure_category_exists(session, payload.category)

    product = create_product(
        session,
        images=_image_rows(payload.images),
        name=payload.name,
        slug=slug,
        sku=payload.sku,
        description=payload.description,
        short_description=payload.short_description,
        price=payload.price,
        compare_at_price=payload.compare_at_price,
        stock=payload.stock,
        category_id=payload.category,
        tags=list(payload.tags),
        is_active=payload.is_active,
        is_featured=payload.is_featured,
        is_best_seller=payload.is_best_seller,
    )
    session.commit()
    logger.info("Created product id=%s slug=%s", product.id, product.slug)
    return product


def update_product_service(session: Session, product_id: UUID, payload: ProductUpdate) -> Product:
    """Update provided product fields; the slug follows the name."""
    product = get_product_service(session, product_id)
    provided = payload.model_fields_set
    fields = payload.model_dump(
        include=provided - {"category", "images", "name"},
        exclude_none=True,
    )

    if payload.name is not None and payload.name != product.name:
        slug = slugify(payload.name)
        _ensure_unique_slug(session, slug, exclude_id=product.id)
        fields["name"] = payload.name
        fields["slug"] = slug
    if "category" in provided:
        if payload.category is not None:
            _ensure_category_exists(session, payload.category)
        fields["category_id"] = payload.category

    images = _image_rows(payload.images) if payload.images is not None else None
    product = update_product(session, product, images=images, **fields)
    session.commit()
    return product


async def delete_product_service(session: Session, storage: ImageStorage, product_id: UUID) -> Product:
    """Remove a product and its hosted images; image service failures abort the delete."""
    product = get_product_service(session, product_id)
    public_ids = [image.public_id for image in product.images if image.public_id]
    if public_ids:
        await storage.delete_many(public_ids)
    delete_product(session, product)
    session.commit()
    logger.info("Deleted product id=%s with %d hosted images", product.id, len(public_ids))
    return product


async def upload_product_images_service(
    storage: ImageStorage,
    images: Sequence[ImageUpload],
    *,
    folder: str,
) -> list[UploadedImage]:
    """Forward each image to the image service in order; the first becomes primary."""
    if not images:
        raise UploadRejectedError("No files uploaded")

    uploaded: list[UploadedImage] = []
    for position, image in enumerate(images):
        result = await storage.upload_buffer(image.content, folder=folder)
        uploaded.append(
            UploadedImage(
                url=result["secure_url"],
                public_id=result["public_id"],
                alt_text=image.filename,
                is_primary=position == 0,
                order=position,
                format=result.get("format"),
                width=result.get("width"),
                height=result.get("height"),
            )
        )
    logger.info("Uploaded %d product images to folder=%s", len(uploaded), folder)
    return uploaded
