"""Product catalog endpoints. Role checks live in core.authorization; handlers only map HTTP to the catalog service."""

import logging
from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from store_api.core.authorization import get_current_principal
from store_api.core.config import settings
from store_api.core.database import get_db
from store_api.schemas.auth import Principal
from store_api.schemas.product import (
    InventorySummary,
    PriceUpdate,
    ProductCreate,
    ProductPage,
    ProductResponse,
)
from store_api.services import catalog

logger = logging.getLogger(__name__)
router = APIRouter()

DbSession = Annotated[Session, Depends(get_db)]
CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def add_product(
    body: ProductCreate,
    db: DbSession,
    principal: CurrentPrincipal,
) -> ProductResponse:
    """Create a product. Returns 409 if the (name, category) pair is already taken."""
    product = catalog.add_product(db, body)
    logger.info(
        "Product added",
        extra={"product_id": product.id, "username": principal.username},
    )
    return ProductResponse.model_validate(product)


@router.get("", response_model=ProductPage)
def list_products(
    db: DbSession,
    page: Annotated[int, Query(description="Zero-based page index")] = 0,
    size: Annotated[int, Query(description="Page size")] = settings.DEFAULT_PAGE_SIZE,
    sort: Annotated[str, Query(description="'field' or 'field,asc|desc'")] = catalog.DEFAULT_SORT,
) -> ProductPage:
    """Paginated product list, ordered by sort key then id."""
    return catalog.list_products(db, page=page, size=size, sort=sort)


@router.get("/search", response_model=list[ProductResponse])
def search_products(
    db: DbSession,
    name: Annotated[str, Query(description="Case-insensitive name fragment")],
) -> list[ProductResponse]:
    products = catalog.find_products_by_name(db, name)
    return [ProductResponse.model_validate(p) for p in products]


@router.get("/categories", response_model=list[str])
def list_categories(db: DbSession) -> list[str]:
    """Distinct categories, sorted."""
    return catalog.list_categories(db)


@router.get("/summary", response_model=InventorySummary)
def get_inventory_summary(db: DbSession) -> InventorySummary:
    return catalog.inventory_summary(db)


@router.get("/category/{category}", response_model=list[ProductResponse])
def find_by_category(category: str, db: DbSession) -> list[ProductResponse]:
    products = catalog.find_products_by_category(db, category)
    return [ProductResponse.model_validate(p) for p in products]


@router.get("/price-range", response_model=list[ProductResponse])
def find_by_price_range(
    db: DbSession,
    min_price: Annotated[Decimal, Query(alias="minPrice")],
    max_price: Annotated[Decimal, Query(alias="maxPrice")],
) -> list[ProductResponse]:
    """Products priced between minPrice and maxPrice, inclusive."""
    products = catalog.find_products_by_price_range(db, min_price, max_price)
    return [ProductResponse.model_validate(p) for p in products]


@router.get("/low-stock", response_model=list[ProductResponse])
def find_low_stock(
    db: DbSession,
    threshold: Annotated[int, Query(description="Stock strictly below this")] = settings.LOW_STOCK_THRESHOLD,
) -> list[ProductResponse]:
    products = catalog.find_low_stock_products(db, threshold)
    return [ProductResponse.model_validate(p) for p in products]


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: int, db: DbSession) -> ProductResponse:
    return ProductResponse.model_validate(catalog.find_product(db, product_id))


@router.put("/{product_id}/price", response_model=ProductResponse)
def change_price(
    product_id: int,
    body: PriceUpdate,
    db: DbSession,
) -> ProductResponse:
    product = catalog.change_price(db, product_id, body.new_price)
    return ProductResponse.model_validate(product)


@router.put("/{product_id}/stock", response_model=ProductResponse)
def set_stock(
    product_id: int,
    db: DbSession,
    quantity: Annotated[int, Query(description="New stock quantity, at least 0")],
) -> ProductResponse:
    product = catalog.set_stock(db, product_id, quantity)
    return ProductResponse.model_validate(product)


@router.post("/{product_id}/stock/increment", response_model=ProductResponse)
def increment_stock(
    product_id: int,
    db: DbSession,
    amount: Annotated[int, Query(description="Units to add, at least 0")],
) -> ProductResponse:
    product = catalog.increment_stock(db, product_id, amount)
    return ProductResponse.model_validate(product)


@router.post("/{product_id}/stock/decrement", response_model=ProductResponse)
def decrement_stock(
    product_id: int,
    db: DbSession,
    amount: Annotated[int, Query(description="Units to remove, at most current stock")],
) -> ProductResponse:
    product = catalog.decrement_stock(db, product_id, amount)
    return ProductResponse.model_validate(product)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(product_id: int, db: DbSession) -> Response:
    catalog.delete_product(db, product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
