"""SQLAlchemy ORM models."""

from store_api.models.base import Base
from store_api.models.product import Product
from store_api.models.user import Role, User

__all__ = ["Base", "Product", "Role", "User"]
