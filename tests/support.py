"""Shared test helpers: fresh schema per test and quick user/product builders."""

import unittest
from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy.orm import Session

from store_api.core.database import SessionLocal, engine
from store_api.core.security import hash_password, issue_token
from store_api.models import Base, Product, Role, User

TEST_PASSWORD = "secret123"
# Hash once; bcrypt at 12 rounds is slow.
TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD)


def make_user(
    db: Session,
    username: str = "alice",
    role: Role = Role.USER,
    enabled: bool = True,
) -> User:
    user = User(
        username=username,
        email=f"{username}@example.com",
        password_hash=TEST_PASSWORD_HASH,
        first_name=username.title(),
        last_name="Test",
        role=role.value,
        enabled=enabled,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_product(
    db: Session,
    name: str = "Widget",
    category: str = "Tools",
    price: str = "9.99",
    stock_quantity: int = 5,
    **kwargs: object,
) -> Product:
    now = datetime.now(UTC)
    product = Product(
        name=name,
        category=category,
        price=Decimal(price),
        stock_quantity=stock_quantity,
        created_at=now,
        updated_at=now,
        **kwargs,
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


def auth_header(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {issue_token(user)}"}


class DatabaseTestCase(unittest.TestCase):
    """Creates all tables before each test and drops them afterwards."""

    def setUp(self) -> None:
        Base.metadata.create_all(engine)
        self.db = SessionLocal()

    def tearDown(self) -> None:
        self.db.close()
        Base.metadata.drop_all(engine)
