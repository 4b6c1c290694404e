"""ORM model for catalog products."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)

from store_api.models.base import Base

# Largest value an Integer column holds on PostgreSQL.
MAX_INTEGER = 2_147_483_647


class Product(Base):
    """
    Catalog item. created_at/updated_at are set by the catalog service on every
    mutation; (name, category) is unique at the storage layer.
    """

    __tablename__ = "products"
    __table_args__ = (
        UniqueConstraint("name", "category", name="uq_products_name_category"),
        CheckConstraint("price > 0", name="ck_products_price_positive"),
        CheckConstraint("stock_quantity >= 0", name="ck_products_stock_non_negative"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, index=True)
    description = Column(String(500), nullable=True)
    price = Column(Numeric(12, 2), nullable=False)
    category = Column(String(50), nullable=False, index=True)
    stock_quantity = Column(Integer, nullable=False, default=0)
    brand = Column(String(50), nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        return (
            f"Product(id={self.id!r}, name={self.name!r}, price={self.price!r}, "
            f"category={self.category!r}, active={self.active!r})"
        )
