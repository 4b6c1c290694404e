"""Password hashing and JWT issuance/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any, Protocol

import bcrypt
import jwt

from store_api.core.config import settings
from store_api.core.exceptions import InvalidTokenError
from store_api.schemas.auth import TokenClaims

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Claims every token must carry besides sub.
REQUIRED_CLAIMS = ["sub", "exp", "iat"]


class TokenSubject(Protocol):
    """Anything with the identity fields a token embeds (e.g. the User model)."""

    id: Any
    username: Any
    role: Any


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def _role_name(role: Any) -> str:
    return getattr(role, "value", role)


def issue_token(user: TokenSubject, now: datetime | None = None) -> str:
    """
    Create a signed JWT: sub=username, role and userId claims, iat=now and
    exp=now + JWT_EXPIRE_SECONDS.
    """
    issued_at = now or datetime.now(UTC)
    expire = issued_at + timedelta(seconds=settings.JWT_EXPIRE_SECONDS)
    payload: dict[str, Any] = {
        "sub": user.username,
        "role": _role_name(user.role),
        "userId": int(user.id),
        "iat": issued_at,
        "exp": expire,
    }
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def parse_token(token: str) -> TokenClaims:
    """
    Verify signature and expiry, then return the typed claims.
    Raises InvalidTokenError on a bad signature, malformed token, expired token,
    or missing/ill-typed claims.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError as e:
        raise InvalidTokenError("Token has expired") from e
    except jwt.PyJWTError as e:
        raise InvalidTokenError() from e

    try:
        return TokenClaims(
            username=payload["sub"],
            role=payload["role"],
            user_id=payload["userId"],
            issued_at=datetime.fromtimestamp(payload["iat"], UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidTokenError("Invalid token payload") from e


def is_token_valid(token: str) -> bool:
    """True iff the token parses and its expiry is still in the future."""
    try:
        claims = parse_token(token)
    except InvalidTokenError:
        return False
    return claims.expires_at > datetime.now(UTC)
