"""Model module imports for SQLAlchemy relationship registration."""

from storefront.db.models.category import Base
from storefront.db.models.category import Category
from storefront.db.models.product import Product
from storefront.db.models.product import ProductImage
from storefront.db.models.slider import Slider

__all__ = [
    "Base",
    "Category",
    "Product",
    "ProductImage",
    "Slider",
]
