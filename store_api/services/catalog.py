"""
Catalog business rules on top of the products table.

All functions take a Session and commit their own writes. Input is validated
before any field is touched, so a rejected call leaves the stored row as it was.
"""

from __future__ import annotations

import logging
import math
from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from store_api.core.config import get_settings
from store_api.core.exceptions import (
    ConflictError,
    ProductNotFoundError,
    ValidationFailedError,
)
from store_api.models import Product
from store_api.models.product import MAX_INTEGER
from store_api.repositories import product_repo
from store_api.schemas.product import (
    InventorySummary,
    ProductCreate,
    ProductPage,
    ProductResponse,
    validate_price,
)

if TYPE_CHECKING:
    from store_api.core.config import Settings

logger = logging.getLogger(__name__)

DUPLICATE_PRODUCT_MESSAGE = "Product already exists with this name and category"

# Public sort keys (camelCase, as exposed by the API) -> ORM columns.
SORT_FIELDS = {
    "id": Product.id,
    "name": Product.name,
    "price": Product.price,
    "category": Product.category,
    "stockQuantity": Product.stock_quantity,
    "brand": Product.brand,
    "createdAt": Product.created_at,
    "updatedAt": Product.updated_at,
}
DEFAULT_SORT = "name"


def _now() -> datetime:
    return datetime.now(UTC)


def _get_or_raise(db: Session, product_id: int) -> Product:
    product = None
    if 1 <= product_id <= MAX_INTEGER:
        product = product_repo.get_product(db, product_id)
    if product is None:
        logger.warning("Product not found", extra={"product_id": product_id})
        raise ProductNotFoundError(product_id)
    return product


def _save(db: Session, product: Product) -> Product:
    product.updated_at = _now()
    db.commit()
    db.refresh(product)
    return product


def add_product(db: Session, data: ProductCreate) -> Product:
    """
    Persist a new product. Raises ConflictError when (name, category) is taken,
    whether detected by the lookup or by the unique constraint at commit.
    """
    existing = product_repo.get_product_by_name_and_category(db, data.name, data.category)
    if existing is not None:
        logger.warning(
            "Duplicate product rejected",
            extra={"product_name": data.name, "category": data.category},
        )
        raise ConflictError(DUPLICATE_PRODUCT_MESSAGE)

    now = _now()
    product = Product(
        name=data.name,
        description=data.description,
        price=data.price,
        category=data.category,
        stock_quantity=data.stock_quantity,
        brand=data.brand,
        active=data.active,
        created_at=now,
        updated_at=now,
    )
    db.add(product)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(
            "Duplicate product rejected at commit",
            extra={"product_name": data.name, "category": data.category},
        )
        raise ConflictError(DUPLICATE_PRODUCT_MESSAGE) from e
    db.refresh(product)
    logger.info("Product created", extra={"product_id": product.id})
    return product


def find_product(db: Session, product_id: int) -> Product:
    return _get_or_raise(db, product_id)


def find_products_by_name(db: Session, name: str) -> list[Product]:
    """Case-insensitive substring search on product name; a blank term matches all."""
    return product_repo.search_by_name(db, (name or "").strip())


def find_products_by_category(db: Session, category: str) -> list[Product]:
    return product_repo.list_by_category(db, category)


def parse_sort(sort: str | None) -> tuple[str, bool]:
    """
    Parse 'field' or 'field,asc|desc' into (field, descending).
    Raises ValidationFailedError for unknown fields or directions.
    """
    if sort is None or not sort.strip():
        return DEFAULT_SORT, False
    field, _, direction = (part.strip() for part in sort.partition(","))
    if field not in SORT_FIELDS:
        raise ValidationFailedError.for_field(
            "sort", f"Unsupported sort field {field!r}; use one of {sorted(SORT_FIELDS)}"
        )
    direction = direction.lower() or "asc"
    if direction not in ("asc", "desc"):
        raise ValidationFailedError.for_field("sort", "Sort direction must be 'asc' or 'desc'")
    return field, direction == "desc"


def list_products(
    db: Session,
    page: int = 0,
    size: int | None = None,
    sort: str | None = None,
    settings: Settings | None = None,
) -> ProductPage:
    """
    Return one zero-based page of products ordered by the requested key.
    Ties are broken by id so pagination is stable.
    """
    settings = settings or get_settings()
    if size is None:
        size = settings.DEFAULT_PAGE_SIZE
    if page < 0:
        raise ValidationFailedError.for_field("page", "Page index must not be negative")
    if size < 1 or size > settings.MAX_PAGE_SIZE:
        raise ValidationFailedError.for_field(
            "size", f"Page size must be between 1 and {settings.MAX_PAGE_SIZE}"
        )
    if page * size > MAX_INTEGER:
        raise ValidationFailedError.for_field("page", "Page index is too large")
    field, descending = parse_sort(sort)
    column = SORT_FIELDS[field]
    order_by = [column.desc() if descending else column.asc()]
    if field != "id":
        order_by.append(Product.id.asc())

    total = product_repo.count_products(db)
    rows = product_repo.list_page(db, offset=page * size, limit=size, order_by=order_by)
    total_pages = math.ceil(total / size) if total else 0
    return ProductPage(
        content=[ProductResponse.model_validate(p) for p in rows],
        page=page,
        size=size,
        total_elements=total,
        total_pages=total_pages,
        first=page == 0,
        last=page >= total_pages - 1,
    )


def change_price(db: Session, product_id: int, new_price: Decimal) -> Product:
    product = _get_or_raise(db, product_id)
    try:
        validate_price(new_price)
    except ValueError as e:
        raise ValidationFailedError.for_field("newPrice", str(e)) from e

    old_price = product.price
    product.price = new_price
    _save(db, product)
    logger.info(
        "Product price changed",
        extra={"product_id": product_id, "old_price": str(old_price), "new_price": str(new_price)},
    )
    return product


def set_stock(db: Session, product_id: int, quantity: int) -> Product:
    product = _get_or_raise(db, product_id)
    if quantity is None or quantity < 0:
        raise ValidationFailedError.for_field("quantity", "Stock quantity cannot be negative")
    if quantity > MAX_INTEGER:
        raise ValidationFailedError.for_field(
            "quantity", f"Stock quantity cannot exceed {MAX_INTEGER}"
        )

    old_quantity = product.stock_quantity
    product.stock_quantity = quantity
    _save(db, product)
    logger.info(
        "Product stock set",
        extra={"product_id": product_id, "old_quantity": old_quantity, "new_quantity": quantity},
    )
    return product


def increment_stock(db: Session, product_id: int, amount: int) -> Product:
    product = _get_or_raise(db, product_id)
    if amount is None or amount < 0:
        raise ValidationFailedError.for_field("amount", "Amount to increment cannot be negative")
    if amount > MAX_INTEGER - product.stock_quantity:
        raise ValidationFailedError.for_field(
            "amount", f"Stock quantity cannot exceed {MAX_INTEGER}"
        )

    product.stock_quantity += amount
    _save(db, product)
    logger.info(
        "Product stock incremented",
        extra={"product_id": product_id, "amount": amount, "new_quantity": product.stock_quantity},
    )
    return product


def decrement_stock(db: Session, product_id: int, amount: int) -> Product:
    product = _get_or_raise(db, product_id)
    if amount is None or amount < 0:
        raise ValidationFailedError.for_field("amount", "Amount to decrement cannot be negative")
    if amount > product.stock_quantity:
        raise ValidationFailedError.for_field("amount", "Insufficient stock quantity")

    product.stock_quantity -= amount
    _save(db, product)
    logger.info(
        "Product stock decremented",
        extra={"product_id": product_id, "amount": amount, "new_quantity": product.stock_quantity},
    )
    return product


def delete_product(db: Session, product_id: int) -> None:
    product = _get_or_raise(db, product_id)
    db.delete(product)
    db.commit()
    logger.info("Product deleted", extra={"product_id": product_id})


def find_products_by_price_range(
    db: Session, min_price: Decimal, max_price: Decimal
) -> list[Product]:
    """Inclusive price range query."""
    if min_price < 0 or max_price < 0:
        raise ValidationFailedError.for_field("minPrice", "Price bounds cannot be negative")
    if min_price > max_price:
        raise ValidationFailedError(
            "minPrice must not exceed maxPrice",
            details={"minPrice": "must not exceed maxPrice", "maxPrice": "must not be below minPrice"},
        )
    return product_repo.list_by_price_range(db, min_price, max_price)


def find_low_stock_products(db: Session, threshold: int) -> list[Product]:
    """Products whose stock is strictly below threshold."""
    if threshold < 0:
        raise ValidationFailedError.for_field("threshold", "Threshold cannot be negative")
    if threshold > MAX_INTEGER:
        raise ValidationFailedError.for_field("threshold", f"Threshold cannot exceed {MAX_INTEGER}")
    return product_repo.list_low_stock(db, threshold)


def list_categories(db: Session) -> list[str]:
    return product_repo.list_categories(db)


def inventory_summary(db: Session) -> InventorySummary:
    return InventorySummary(
        product_count=product_repo.count_products(db),
        total_stock_quantity=product_repo.total_stock_quantity(db),
        category_count=len(product_repo.list_categories(db)),
    )
