"""Administrative endpoints (ADMIN role only, enforced by the access table)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from store_api.core.database import get_db
from store_api.models import Role
from store_api.repositories import user_repo
from store_api.schemas.auth import UserListItem, UsersListResponse

router = APIRouter()


@router.get("/users", response_model=UsersListResponse)
def list_users(
    db: Annotated[Session, Depends(get_db)],
    role: Annotated[Role | None, Query(description="Only users with this role")] = None,
) -> UsersListResponse:
    """List users without password hashes, optionally filtered by role."""
    if role is None:
        users = user_repo.list_users(db)
    else:
        users = user_repo.list_users_by_role(db, role)
    return UsersListResponse(users=[UserListItem.model_validate(u) for u in users])
