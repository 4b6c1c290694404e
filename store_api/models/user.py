"""ORM model for application users (auth and RBAC)."""

import enum

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func

from store_api.models.base import Base


class Role(str, enum.Enum):
    """
    User roles, ordered by privilege level.

    The level is informational; endpoint access is decided by role set
    membership, so MANAGER does not implicitly include USER.
    """

    USER = "USER"
    MANAGER = "MANAGER"
    ADMIN = "ADMIN"

    @property
    def level(self) -> int:
        return _ROLE_LEVELS[self]


_ROLE_LEVELS = {Role.USER: 1, Role.MANAGER: 2, Role.ADMIN: 3}


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    role: one of Role values, stored as its string name.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), nullable=False, unique=True, index=True)
    email = Column(String(100), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(50), nullable=True)
    last_name = Column(String(50), nullable=True)
    role = Column(String(16), nullable=False, default=Role.USER.value)
    enabled = Column(Boolean, nullable=False, default=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, username={self.username!r}, role={self.role!r})"
