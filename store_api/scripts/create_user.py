"""
Create a user account (there is no registration endpoint). Run from project root:
  python -m store_api.scripts.create_user USERNAME EMAIL PASSWORD [role]
Example:
  python -m store_api.scripts.create_user admin admin@example.com your-secure-password ADMIN
"""
import argparse
import sys

from sqlalchemy.orm import Session

from store_api.core.database import SessionLocal
from store_api.core.security import hash_password
from store_api.models.user import Role, User
from store_api.repositories import user_repo

USERNAME_MAX_LEN = 50
EMAIL_MAX_LEN = 100
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128


def create_user(
    db: Session,
    username: str,
    email: str,
    password: str,
    role: Role = Role.USER,
    first_name: str | None = None,
    last_name: str | None = None,
) -> User:
    """Insert one user. Raises ValueError for invalid input or a taken username/email."""
    username = username.strip()
    email = email.strip()
    if not username or len(username) > USERNAME_MAX_LEN:
        raise ValueError("Invalid username length.")
    if "@" not in email or len(email) > EMAIL_MAX_LEN:
        raise ValueError("Invalid email address.")
    if not PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN:
        raise ValueError(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters."
        )
    if user_repo.username_exists(db, username):
        raise ValueError(f"User '{username}' already exists.")
    if user_repo.email_exists(db, email):
        raise ValueError(f"Email '{email}' is already registered.")

    user = User(
        username=username,
        email=email,
        password_hash=hash_password(password),
        first_name=first_name,
        last_name=last_name,
        role=role.value,
        enabled=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a store user (no registration UI).")
    parser.add_argument("username", help="Username (1-50 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (6-128 chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.USER.value,
        choices=[r.value for r in Role],
    )
    parser.add_argument("--first-name", default=None)
    parser.add_argument("--last-name", default=None)
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        try:
            create_user(
                db,
                args.username,
                args.email,
                args.password,
                Role(args.role),
                first_name=args.first_name,
                last_name=args.last_name,
            )
        except ValueError as e:
            print(str(e), file=sys.stderr)
            return 1
        print(f"Created user '{args.username.strip()}' with role '{args.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
