"""
Load default accounts and sample products into an empty database:

  python -m store_api.scripts.seed

Users are only inserted when the users table is empty, products only when the
products table is empty, so the command is safe to run repeatedly.
"""

import logging
import sys
from decimal import Decimal

from sqlalchemy.orm import Session

from store_api.core.config import settings
from store_api.core.database import SessionLocal
from store_api.models.user import Role
from store_api.repositories import product_repo, user_repo
from store_api.schemas.product import ProductCreate
from store_api.scripts.create_user import create_user
from store_api.services.catalog import add_product

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

# (username, password, role, first name)
DEFAULT_USERS = (
    ("admin", "admin123", Role.ADMIN, "Admin"),
    ("manager", "manager123", Role.MANAGER, "Manager"),
    ("user", "user123", Role.USER, "Regular"),
)

# (name, description, price, category, stock)
SAMPLE_PRODUCTS = (
    ("Gaming Laptop", "High-performance gaming laptop with RTX graphics", "1299.99", "Electronics", 15),
    ("Smartphone Pro", "Latest smartphone with advanced camera features", "899.99", "Electronics", 25),
    ("Wireless Headphones", "Noise-cancelling wireless headphones", "249.99", "Electronics", 30),
    ("Premium Jeans", "High-quality denim jeans", "89.99", "Clothing", 50),
    ("Cotton T-Shirt", "Comfortable cotton t-shirt", "19.99", "Clothing", 100),
    ("FastAPI in Practice", "Hands-on guide to building APIs with FastAPI", "49.99", "Books", 20),
    ("Science Fiction Novel", "Bestselling science fiction adventure", "14.99", "Books", 35),
    ("Automatic Coffee Maker", "Programmable coffee maker with timer", "129.99", "Home & Garden", 12),
    ("Indoor Plant", "Low-maintenance indoor plant", "24.99", "Home & Garden", 8),
    ("Running Shoes", "Professional running shoes", "119.99", "Sports", 40),
)


def seed_users(db: Session) -> int:
    """Create the default accounts if no user exists yet. Returns the number created."""
    if user_repo.count_users(db) > 0:
        logger.info("Users already present; skipping default users.")
        return 0
    for username, password, role, first_name in DEFAULT_USERS:
        create_user(
            db,
            username,
            f"{username}@storemanagement.com",
            password,
            role,
            first_name=first_name,
            last_name="User",
        )
        logger.info("Created default user", extra={"username": username, "role": role.value})
    return len(DEFAULT_USERS)


def seed_products(db: Session) -> int:
    """Create the sample catalog if no product exists yet. Returns the number created."""
    if product_repo.count_products(db) > 0:
        logger.info("Products already present; skipping sample products.")
        return 0
    for name, description, price, category, stock in SAMPLE_PRODUCTS:
        add_product(
            db,
            ProductCreate(
                name=name,
                description=description,
                price=Decimal(price),
                category=category,
                stock_quantity=stock,
            ),
        )
    logger.info("Sample products created", extra={"count": len(SAMPLE_PRODUCTS)})
    return len(SAMPLE_PRODUCTS)


def main() -> int:
    db = SessionLocal()
    try:
        users = seed_users(db)
        products = seed_products(db)
        logger.info("Seed completed: users_created=%s, products_created=%s", users, products)
        return 0
    except Exception as e:
        logger.exception("Seed failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
