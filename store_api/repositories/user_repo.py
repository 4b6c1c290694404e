"""Lookups over the users table."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from store_api.models import Role, User


def get_user_by_username(db: Session, username: str) -> User | None:
    return db.query(User).filter(User.username == username).first()


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def username_exists(db: Session, username: str) -> bool:
    return get_user_by_username(db, username) is not None


def email_exists(db: Session, email: str) -> bool:
    return get_user_by_email(db, email) is not None


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.id).all()


def list_users_by_role(db: Session, role: Role) -> list[User]:
    return db.query(User).filter(User.role == role.value).order_by(User.id).all()


def count_users(db: Session) -> int:
    return db.query(func.count(User.id)).scalar() or 0

