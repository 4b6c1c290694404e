"""Exception handlers translating every failure into the uniform ErrorResponse body."""

import logging
from datetime import UTC, datetime
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from store_api.core.exceptions import StoreAPIError, UnauthorizedError
from store_api.schemas.errors import ErrorResponse

logger = logging.getLogger(__name__)

# Pydantic prefixes messages from ValueError raised in validators.
_VALUE_ERROR_PREFIX = "Value error, "


def error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    details: dict[str, str] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        timestamp=datetime.now(UTC),
        status=status_code,
        error=error,
        message=message,
        path=request.url.path,
        details=details or None,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
        headers=headers,
    )


def _field_name(loc: tuple[Any, ...]) -> str:
    """('body', 'price') -> 'price'; ('query', 'quantity') -> 'quantity'; nested -> dotted."""
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "header", "cookie")]
    return ".".join(parts) or "request"


def validation_details(errors: list[dict[str, Any]]) -> dict[str, str]:
    """Collapse Pydantic errors into field -> first message."""
    details: dict[str, str] = {}
    for err in errors:
        msg = str(err.get("msg", "Invalid value"))
        if msg.startswith(_VALUE_ERROR_PREFIX):
            msg = msg[len(_VALUE_ERROR_PREFIX):]
        details.setdefault(_field_name(tuple(err.get("loc", ()))), msg)
    return details


async def store_api_error_handler(request: Request, exc: StoreAPIError) -> JSONResponse:
    logger.warning(
        "%s: %s",
        exc.error,
        exc.message,
        extra={"status_code": exc.status_code, "path": request.url.path},
    )
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return error_response(
        request,
        exc.status_code,
        exc.error,
        exc.message,
        details=exc.details,
        headers=headers,
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = validation_details(list(exc.errors()))
    logger.warning(
        "Validation failed",
        extra={"path": request.url.path, "fields": sorted(details)},
    )
    return error_response(
        request,
        HTTPStatus.BAD_REQUEST.value,
        "Validation Failed",
        "Invalid input parameters",
        details=details,
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    try:
        phrase = HTTPStatus(exc.status_code).phrase
    except ValueError:
        phrase = "Error"
    message = exc.detail if isinstance(exc.detail, str) else phrase
    return error_response(
        request,
        exc.status_code,
        phrase,
        message,
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(
        request,
        HTTPStatus.INTERNAL_SERVER_ERROR.value,
        "Internal Server Error",
        "An unexpected error occurred",
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StoreAPIError, store_api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
