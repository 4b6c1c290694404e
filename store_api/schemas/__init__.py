"""Pydantic request/response schemas."""

from store_api.schemas.auth import (
    AuthResponse,
    LoginRequest,
    LogoutResponse,
    Principal,
    TokenClaims,
    UserListItem,
    UsersListResponse,
)
from store_api.schemas.errors import ErrorResponse
from store_api.schemas.health import HealthResponse
from store_api.schemas.product import (
    InventorySummary,
    PriceUpdate,
    ProductCreate,
    ProductPage,
    ProductResponse,
)

__all__ = [
    "AuthResponse",
    "ErrorResponse",
    "HealthResponse",
    "InventorySummary",
    "LoginRequest",
    "LogoutResponse",
    "PriceUpdate",
    "Principal",
    "ProductCreate",
    "ProductPage",
    "ProductResponse",
    "TokenClaims",
    "UserListItem",
    "UsersListResponse",
]
