"""Pydantic schemas for catalog products: create/update requests, responses and pages."""

from datetime import datetime
from decimal import Decimal

from pydantic import Field, field_serializer, field_validator

from store_api.models.product import MAX_INTEGER
from store_api.schemas.base import CamelModel

NAME_MIN_LEN = 2
NAME_MAX_LEN = 100
DESCRIPTION_MAX_LEN = 500
CATEGORY_MIN_LEN = 2
CATEGORY_MAX_LEN = 50
BRAND_MAX_LEN = 50
# Numeric(12, 2): at most 10 integer digits and 2 fraction digits.
PRICE_MAX_INTEGER_DIGITS = 10
PRICE_MAX_FRACTION_DIGITS = 2


def coerce_decimal(value: object) -> object:
    """JSON numbers arrive as floats; go through str so 9.99 stays 9.99."""
    if isinstance(value, float):
        return Decimal(str(value))
    return value


def validate_price(value: Decimal | None) -> Decimal:
    """Ensure price is present, positive and fits Numeric(12, 2)."""
    if value is None:
        raise ValueError("Price is required")
    if not value.is_finite():
        raise ValueError("Price must be a finite number")
    if value <= 0:
        raise ValueError("Price must be greater than 0")
    sign, digits, exponent = value.normalize().as_tuple()
    fraction_digits = max(0, -exponent)
    integer_digits = max(0, len(digits) + exponent)
    if integer_digits > PRICE_MAX_INTEGER_DIGITS or fraction_digits > PRICE_MAX_FRACTION_DIGITS:
        raise ValueError(
            "Price must have at most 10 integer digits and 2 decimal places"
        )
    return value


def _validate_text(value: str | None, label: str, min_len: int, max_len: int) -> str:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(f"{label} is required")
    if not isinstance(value, str):
        raise ValueError(f"{label} must be a string")
    value = value.strip()
    if not min_len <= len(value) <= max_len:
        raise ValueError(f"{label} must be between {min_len} and {max_len} characters")
    return value


class ProductCreate(CamelModel):
    """Body for POST /products."""

    name: str = Field(..., description="Product name (2-100 chars)")
    description: str | None = Field(default=None, description="Optional, at most 500 chars")
    price: Decimal = Field(..., description="Unit price, greater than 0")
    category: str = Field(..., description="Category (2-50 chars)")
    stock_quantity: int = Field(..., description="Units in stock, at least 0")
    brand: str | None = Field(default=None, description="Optional, at most 50 chars")
    active: bool = True

    @field_validator("name", mode="before")
    @classmethod
    def name_length(cls, v: str | None) -> str:
        return _validate_text(v, "Product name", NAME_MIN_LEN, NAME_MAX_LEN)

    @field_validator("category", mode="before")
    @classmethod
    def category_length(cls, v: str | None) -> str:
        return _validate_text(v, "Category", CATEGORY_MIN_LEN, CATEGORY_MAX_LEN)

    @field_validator("description")
    @classmethod
    def description_length(cls, v: str | None) -> str | None:
        if v is not None and len(v) > DESCRIPTION_MAX_LEN:
            raise ValueError("Description cannot exceed 500 characters")
        return v

    @field_validator("brand")
    @classmethod
    def brand_length(cls, v: str | None) -> str | None:
        if v is not None and len(v.strip()) > BRAND_MAX_LEN:
            raise ValueError("Brand cannot exceed 50 characters")
        return v.strip() if v is not None else None

    @field_validator("price", mode="before")
    @classmethod
    def price_from_json(cls, v: object) -> object:
        return coerce_decimal(v)

    @field_validator("price")
    @classmethod
    def price_range(cls, v: Decimal) -> Decimal:
        return validate_price(v)

    @field_validator("stock_quantity")
    @classmethod
    def stock_in_range(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Stock quantity cannot be negative")
        if v > MAX_INTEGER:
            raise ValueError(f"Stock quantity cannot exceed {MAX_INTEGER}")
        return v


class PriceUpdate(CamelModel):
    """Body for PUT /products/{id}/price."""

    new_price: Decimal = Field(..., description="New unit price, greater than 0")

    @field_validator("new_price", mode="before")
    @classmethod
    def price_from_json(cls, v: object) -> object:
        return coerce_decimal(v)

    @field_validator("new_price")
    @classmethod
    def price_range(cls, v: Decimal) -> Decimal:
        return validate_price(v)


class ProductResponse(CamelModel):
    """Product as returned by the API."""

    id: int
    name: str
    description: str | None = None
    price: Decimal
    category: str
    stock_quantity: int
    brand: str | None = None
    active: bool
    created_at: datetime
    updated_at: datetime

    @field_serializer("price")
    def serialize_price(self, price: Decimal) -> float:
        return float(price)


class ProductPage(CamelModel):
    """One page of products. page is zero-based."""

    content: list[ProductResponse]
    page: int
    size: int
    total_elements: int
    total_pages: int
    first: bool
    last: bool


class InventorySummary(CamelModel):
    """Aggregate stock figures across the catalog."""

    product_count: int
    total_stock_quantity: int
    category_count: int
