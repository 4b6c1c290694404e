"""Request/response schemas for auth endpoints."""

from datetime import datetime

from pydantic import Field, field_validator

from store_api.models.user import Role
from store_api.schemas.base import CamelModel


def _require_non_blank(value: str, label: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{label} is required")
    return value


class LoginRequest(CamelModel):
    """Credentials for login."""

    username: str = Field(..., max_length=50, description="Username")
    password: str = Field(..., max_length=128, description="Password")

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, v: str) -> str:
        return _require_non_blank(v, "Username").strip()

    @field_validator("password")
    @classmethod
    def password_not_blank(cls, v: str) -> str:
        return _require_non_blank(v, "Password")


class AuthResponse(CamelModel):
    """Bearer token returned after successful login."""

    token: str = Field(..., description="Signed JWT")
    type: str = Field(default="Bearer", description="Token type")
    expires_in: int = Field(..., description="Token lifetime in seconds")
    username: str
    role: Role


class LogoutResponse(CamelModel):
    """Tokens are stateless; logout only tells the client to discard its token."""

    message: str = "Logout successful. Please discard your token."


class TokenClaims(CamelModel):
    """Validated claims carried by a bearer token."""

    username: str
    role: Role
    user_id: int
    issued_at: datetime
    expires_at: datetime


class Principal(CamelModel):
    """Authenticated caller (from token claims) for dependency injection."""

    user_id: int
    username: str
    role: Role


class UserListItem(CamelModel):
    """User entry for admin list (no password)."""

    id: int
    username: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    role: Role
    enabled: bool


class UsersListResponse(CamelModel):
    """Response for GET /admin/users (admin only)."""

    users: list[UserListItem]
