"""
Central request authorization: an ordered (method, path pattern) -> role set table.

Patterns are relative to API_PREFIX. '*' matches exactly one path segment and
'**' matches any remainder (including nothing). The first matching rule wins.
A rule with roles=None is public. Requests that match no rule need a valid
token with any role.
"""

import logging
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from store_api.core.config import settings
from store_api.core.exceptions import ForbiddenError, UnauthorizedError
from store_api.core.security import parse_token
from store_api.models.user import Role
from store_api.schemas.auth import Principal

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

ANY_ROLE = frozenset(Role)
STAFF = frozenset({Role.ADMIN, Role.MANAGER})
ADMIN_ONLY = frozenset({Role.ADMIN})


@dataclass(frozen=True)
class AccessRule:
    method: str  # HTTP method or "*"
    pattern: str
    roles: frozenset[Role] | None

    def matches(self, method: str, path: str) -> bool:
        if self.method != "*" and self.method != method.upper():
            return False
        return path_matches(self.pattern, path)


ACCESS_RULES: tuple[AccessRule, ...] = (
    AccessRule("*", "/auth/**", None),
    AccessRule("GET", "/health/**", None),
    AccessRule("GET", "/products/low-stock", STAFF),
    AccessRule("GET", "/products/**", ANY_ROLE),
    AccessRule("POST", "/products", STAFF),
    AccessRule("PUT", "/products/*/price", STAFF),
    AccessRule("PUT", "/products/*/stock", STAFF),
    AccessRule("POST", "/products/*/stock/increment", STAFF),
    AccessRule("POST", "/products/*/stock/decrement", STAFF),
    AccessRule("DELETE", "/products/*", ADMIN_ONLY),
    AccessRule("*", "/admin/**", ADMIN_ONLY),
)

# Routes outside the API prefix that need no token.
PUBLIC_ROOT_PATHS = frozenset({"/"})


def _segments(path: str) -> list[str]:
    return [s for s in path.strip("/").split("/") if s]


def path_matches(pattern: str, path: str) -> bool:
    """Segment-wise glob match supporting '*' (one segment) and trailing '**'."""
    pat = _segments(pattern)
    segs = _segments(path)
    for i, p in enumerate(pat):
        if p == "**":
            return True
        if i >= len(segs):
            return False
        if p != "*" and p != segs[i]:
            return False
    return len(segs) == len(pat)


def strip_api_prefix(path: str, prefix: str | None = None) -> str | None:
    """Return path relative to the API prefix, or None when outside it."""
    prefix = settings.API_PREFIX if prefix is None else prefix
    if not prefix:
        return path
    if path == prefix or path.startswith(prefix + "/"):
        return path[len(prefix):] or "/"
    return None


def required_roles(method: str, path: str) -> frozenset[Role] | None:
    """
    Allowed roles for a request, None when the path is public.
    path is the full request path (including the API prefix).
    """
    relative = strip_api_prefix(path)
    if relative is None:
        return None if path in PUBLIC_ROOT_PATHS else ANY_ROLE
    for rule in ACCESS_RULES:
        if rule.matches(method, relative):
            return rule.roles
    return ANY_ROLE


def authorize_request(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> None:
    """
    Global dependency: enforce the access table for the current request.
    Raises UnauthorizedError (missing/invalid token) or ForbiddenError (role not allowed).
    On success the caller is stored as request.state.principal.
    """
    roles = required_roles(request.method, request.url.path)
    if roles is None:
        return
    if credentials is None:
        raise UnauthorizedError("Authentication required")
    claims = parse_token(credentials.credentials)
    if claims.role not in roles:
        logger.warning(
            "Access denied",
            extra={
                "username": claims.username,
                "role": claims.role.value,
                "method": request.method,
                "path": request.url.path,
            },
        )
        raise ForbiddenError()
    request.state.principal = Principal(
        user_id=claims.user_id,
        username=claims.username,
        role=claims.role,
    )


def get_current_principal(request: Request) -> Principal:
    """Dependency: the caller authenticated by authorize_request."""
    principal = getattr(request.state, "principal", None)
    if principal is None:
        raise UnauthorizedError("Authentication required")
    return principal
