"""Declarative field constraints for each resource kind."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from storefront.validation.checks import Check
from storefront.validation.checks import is_array
from storefront.validation.checks import is_boolean
from storefront.validation.checks import is_float
from storefront.validation.checks import is_identifier
from storefront.validation.checks import is_int
from storefront.validation.checks import is_url
from storefront.validation.checks import max_length
from storefront.validation.checks import not_empty

Location = Literal["body", "query", "path"]


@dataclass(frozen=True)
class FieldConstraint:
    """One rule checked against one request field."""

    location: Location
    field: str
    check: Check
    message: str
    optional: bool = False


RuleSet = tuple[FieldConstraint, ...]


def _rules(
    location: Location,
    field: str,
    *checks: tuple[Check, str],
    optional: bool = False,
) -> RuleSet:
    return tuple(
        FieldConstraint(location=location, field=field, check=check, message=message, optional=optional)
        for check, message in checks
    )


def _flag(field: str) -> RuleSet:
    return _rules("body", field, (is_boolean, f"{field} must be a boolean"), optional=True)


PRODUCT_RULES: RuleSet = (
    *_rules(
        "body",
        "name",
        (not_empty, "Product name is required"),
        (max_length(200), "Product name cannot exceed 200 characters"),
    ),
    *_rules(
        "body",
        "description",
        (not_empty, "Description is required"),
        (max_length(2000), "Description cannot exceed 2000 characters"),
    ),
    *_rules(
        "body",
        "price",
        (not_empty, "Price is required"),
        (is_float(minimum=0), "Price must be a positive number"),
    ),
    *_rules(
        "body",
        "stock",
        (not_empty, "Stock is required"),
        (is_int(minimum=0), "Stock must be a non-negative integer"),
    ),
    *_rules(
        "body",
        "sku",
        (not_empty, "SKU is required"),
        (max_length(50), "SKU cannot exceed 50 characters"),
    ),
    *_rules(
        "body",
        "category",
        (not_empty, "Category is required"),
        (is_identifier, "Invalid category ID"),
    ),
    *_rules("body", "tags", (is_array, "Tags must be an array"), optional=True),
    *_flag("isActive"),
    *_flag("isFeatured"),
    *_flag("isBestSeller"),
)

CATEGORY_RULES: RuleSet = (
    *_rules(
        "body",
        "name",
        (not_empty, "Category name is required"),
        (max_length(100), "Category name cannot exceed 100 characters"),
    ),
    *_rules(
        "body",
        "description",
        (max_length(500), "Description cannot exceed 500 characters"),
        optional=True,
    ),
    *_rules("body", "parent", (is_identifier, "Invalid parent category ID"), optional=True),
    *_flag("isActive"),
    *_flag("showInMenu"),
)

SLIDER_RULES: RuleSet = (
    *_rules(
        "body",
        "title",
        (not_empty, "Title is required"),
        (max_length(100), "Title cannot exceed 100 characters"),
    ),
    *_rules("body", "subtitle", (max_length(200), "Subtitle cannot exceed 200 characters"), optional=True),
    *_rules("body", "buttonText", (max_length(30), "Button text cannot exceed 30 characters"), optional=True),
    *_rules("body", "buttonLink", (is_url, "Button link must be a valid URL"), optional=True),
    *_flag("isActive"),
    *_rules("body", "order", (is_int(), "Order must be an integer"), optional=True),
)

ID_RULES: RuleSet = _rules(
    "path",
    "id",
    (not_empty, "ID is required"),
    (is_identifier, "Invalid ID format"),
)

PAGINATION_RULES: RuleSet = (
    *_rules("query", "page", (is_int(minimum=1), "Page must be a positive integer"), optional=True),
    *_rules("query", "limit", (is_int(minimum=1, maximum=100), "Limit must be between 1 and 100"), optional=True),
)
