"""Login and logout. Both are public; tokens are stateless."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from store_api.core.database import get_db
from store_api.schemas.auth import AuthResponse, LoginRequest, LogoutResponse
from store_api.services.auth import authenticate

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """
    Authenticate with username and password; returns a signed bearer token.
    Include the token in the Authorization header as: Bearer <token>
    """
    return authenticate(db, body.username, body.password)


@router.post("/logout", response_model=LogoutResponse)
def logout() -> LogoutResponse:
    """Acknowledge logout. The server keeps no session; the client discards its token."""
    logger.info("Logout request received")
    return LogoutResponse()
