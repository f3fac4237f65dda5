"""Service helpers for category API operations."""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from storefront.core.errors import BadRequestError
from storefront.core.errors import NotFoundError
from storefront.db.models.category import Category
from storefront.db.repository.categories import count_children
from storefront.db.repository.categories import create_category
from storefront.db.repository.categories import delete_category
from storefront.db.repository.categories import get_category
from storefront.db.repository.categories import get_category_by_name
from storefront.db.repository.categories import get_category_by_slug
from storefront.db.repository.categories import list_categories
from storefront.db.repository.categories import update_category
from storefront.media.storage import ImageStorage
from storefront.media.uploads import ImageUpload
from storefront.schemas.category import CategoryCreate
from storefront.schemas.category import CategoryNode
from storefront.schemas.category import CategoryUpdate
from storefront.services.slugs import slugify

logger = logging.getLogger(__name__)

CATEGORY_IMAGE_FOLDER = "categories"


def list_categories_service(session: Session, *, is_active: bool | None = None) -> list[Category]:
    return list_categories(session, is_active=is_active)


def build_category_tree(categories: list[Category], parent_id: UUID | None = None) -> list[CategoryNode]:
    """Nest categories under their parents, keeping the input order at each level."""
    nodes: list[CategoryNode] = []
    for category in categories:
        if category.parent_id != parent_id:
            continue
        node = CategoryNode.model_validate(category)
        node.children = build_category_tree(categories, category.id)
        nodes.append(node)
    return nodes


def get_category_tree_service(session: Session) -> list[CategoryNode]:
    """Return active categories nested by parent."""
    return build_category_tree(list_categories(session, is_active=True))


def get_category_service(session: Session, category_id: UUID) -> Category:
    """Fetch a category or raise not found."""
    category = get_category(session, category_id)
    if category is None:
        raise NotFoundError("Category not found")
    return category


def get_category_by_slug_service(session: Session, slug: str) -> Category:
    category = get_category_by_slug(session, slug)
    if category is None:
        raise NotFoundError("Category not found")
    return category


def _ensure_unique_name(session: Session, name: str, *, exclude_id: UUID | None = None) -> None:
    existing = get_category_by_name(session, name)
    if existing is not None and existing.id != exclude_id:
        raise BadRequestError("Category with this name already exists")


def _ensure_unique_slug(session: Session, slug: str, *, exclude_id: UUID | None = None) -> None:
    """Refuse a slug already held by another category."""
    existing = get_category_by_slug(session, slug)
    if existing is not None and existing.id != exclude_id:
        raise BadRequestError("Category with this name already exists")


def _ensure_parent_exists(session: Session, parent_id: UUID) -> None:
    if get_category(session, parent_id) is None:
        raise BadRequestError("Parent category not found")


async def _store_image(storage: ImageStorage, image: ImageUpload, alt_text: str) -> dict[str, str]:
    result = await storage.upload_buffer(image.content, folder=CATEGORY_IMAGE_FOLDER)
    return {
        "image_url": result["secure_url"],
        "image_public_id": result["public_id"],
        "image_alt_text": alt_text,
    }


async def create_category_service(
    session: Session,
    storage: ImageStorage,
    payload: CategoryCreate,
    image: ImageUpload | None = None,
) -> Category:
    """Create a category, forwarding its optional image to the image service."""
    slug = slugify(payload.name)
    _ensure_unique_name(session, payload.name)
    _ensure_unique_slug(session, slug)
    if payload.parent is not None:
        _ensure_parent_exists(session, payload.parent)

    fields = {
        "name": payload.name,
        "slug": slug,
        "description": payload.description,
        "parent_id": payload.parent,
        "is_active": payload.is_active,
        "show_in_menu": payload.show_in_menu,
    }
    if image is not None:
        fields.update(await _store_image(storage, image, payload.name))

    category = create_category(session, **fields)
    session.commit()
    logger.info("Created category id=%s slug=%s", category.id, category.slug)
    return category


async def update_category_service(
    session: Session,
    storage: ImageStorage,
    category_id: UUID,
    payload: CategoryUpdate,
    image: ImageUpload | None = None,
) -> Category:
    """Update provided category fields; the slug follows the name."""
    category = get_category_service(session, category_id)
    provided = payload.model_fields_set
    fields: dict[str, object] = {}

    if payload.name is not None and payload.name != category.name:
        slug = slugify(payload.name)
        _ensure_unique_name(session, payload.name, exclude_id=category.id)
        _ensure_unique_slug(session, slug, exclude_id=category.id)
        fields["name"] = payload.name
        fields["slug"] = slug
    if payload.description is not None:
        fields["description"] = payload.description
    if payload.is_active is not None:
        fields["is_active"] = payload.is_active
    if payload.show_in_menu is not None:
        fields["show_in_menu"] = payload.show_in_menu
    if "parent" in provided:
        if payload.parent is not None:
            if payload.parent == category.id:
                raise BadRequestError("Category cannot be its own parent")
            _ensure_parent_exists(session, payload.parent)
        fields["parent_id"] = payload.parent

    if image is not None:
        fields.update(await _store_image(storage, image, payload.name or category.name))
    elif payload.remove_image:
        fields.update({"image_url": None, "image_public_id": None, "image_alt_text": ""})

    category = update_category(session, category, **fields)
    session.commit()
    return category


def delete_category_service(session: Session, category_id: UUID) -> Category:
    """Delete a leaf category; categories with subcategories are refused."""
    category = get_category_service(session, category_id)
    if count_children(session, category.id) > 0:
        raise BadRequestError(
            "Cannot delete category that has subcategories. Please delete subcategories first."
        )
    delete_category(session, category)
    session.commit()
    return category
