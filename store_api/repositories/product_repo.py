"""Queries over the products table. Callers own the transaction."""

from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from store_api.models import Product


def get_product(db: Session, product_id: int) -> Product | None:
    return db.get(Product, product_id)


def get_product_by_name_and_category(db: Session, name: str, category: str) -> Product | None:
    return (
        db.query(Product)
        .filter(Product.name == name, Product.category == category)
        .first()
    )


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def search_by_name(db: Session, fragment: str) -> list[Product]:
    """Case-insensitive substring match on name."""
    pattern = f"%{_escape_like(fragment)}%"
    return (
        db.query(Product)
        .filter(Product.name.ilike(pattern, escape="\\"))
        .order_by(Product.id)
        .all()
    )


def list_by_category(db: Session, category: str) -> list[Product]:
    return db.query(Product).filter(Product.category == category).order_by(Product.id).all()


def list_by_price_range(db: Session, min_price: Decimal, max_price: Decimal) -> list[Product]:
    """Products with min_price <= price <= max_price."""
    return (
        db.query(Product)
        .filter(Product.price.between(min_price, max_price))
        .order_by(Product.price, Product.id)
        .all()
    )


def list_low_stock(db: Session, threshold: int) -> list[Product]:
    """Products with stock_quantity strictly below threshold."""
    return (
        db.query(Product)
        .filter(Product.stock_quantity < threshold)
        .order_by(Product.stock_quantity, Product.id)
        .all()
    )


def list_page(
    db: Session,
    offset: int,
    limit: int,
    order_by: list[ColumnElement],
) -> list[Product]:
    return db.query(Product).order_by(*order_by).offset(offset).limit(limit).all()


def count_products(db: Session) -> int:
    return db.query(func.count(Product.id)).scalar() or 0


def list_categories(db: Session) -> list[str]:
    rows = db.query(Product.category).distinct().order_by(Product.category).all()
    return [row[0] for row in rows]


def total_stock_quantity(db: Session) -> int:
    return db.query(func.coalesce(func.sum(Product.stock_quantity), 0)).scalar() or 0
