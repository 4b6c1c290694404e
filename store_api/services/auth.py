"""Credential check and token issuance for the login endpoint."""

import logging

from sqlalchemy.orm import Session

from store_api.core.config import settings
from store_api.core.exceptions import InvalidCredentialsError
from store_api.core.security import issue_token, verify_password
from store_api.repositories import user_repo
from store_api.schemas.auth import AuthResponse

logger = logging.getLogger(__name__)


def authenticate(db: Session, username: str, password: str) -> AuthResponse:
    """
    Verify username/password and return a bearer token with the user's role.

    Raises InvalidCredentialsError for an unknown username, a wrong password or a
    disabled account; callers cannot tell these apart. Only the log line differs.
    """
    user = user_repo.get_user_by_username(db, username)
    if user is None:
        logger.warning("Login failed: unknown user", extra={"username": username})
        raise InvalidCredentialsError()
    if not verify_password(password, user.password_hash):
        logger.warning("Login failed: bad password", extra={"username": username})
        raise InvalidCredentialsError()
    if not user.enabled:
        logger.warning("Login failed: account disabled", extra={"username": username})
        raise InvalidCredentialsError()

    token = issue_token(user)
    logger.info("User authenticated", extra={"username": user.username, "role": user.role})
    return AuthResponse(
        token=token,
        type="Bearer",
        expires_in=settings.JWT_EXPIRE_SECONDS,
        username=user.username,
        role=user.role,
    )
