"""Domain exceptions. Each carries the HTTP status and reason phrase it maps to."""

from typing import Any


class StoreAPIError(Exception):
    """Base class for errors translated into the uniform error response."""

    status_code: int = 500
    error: str = "Internal Server Error"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationFailedError(StoreAPIError):
    """Malformed or out-of-range input. details maps field name -> message."""

    status_code = 400
    error = "Validation Failed"

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationFailedError":
        return cls(message, details={field: message})


class ConflictError(StoreAPIError):
    """Resource would duplicate an existing one."""

    status_code = 409
    error = "Conflict"


class NotFoundError(StoreAPIError):
    status_code = 404
    error = "Not Found"


class ProductNotFoundError(NotFoundError):
    def __init__(self, product_id: int) -> None:
        self.product_id = product_id
        super().__init__(f"Product not found with ID: {product_id}")



class UnauthorizedError(StoreAPIError):
    """Missing, invalid or expired credentials."""

    status_code = 401
    error = "Unauthorized"


class InvalidCredentialsError(UnauthorizedError):
    def __init__(self, message: str = "Invalid username or password") -> None:
        super().__init__(message)


class InvalidTokenError(UnauthorizedError):
    def __init__(self, message: str = "Invalid or expired token") -> None:
        super().__init__(message)


class ForbiddenError(StoreAPIError):
    """Authenticated, but the role is not allowed for the request."""

    status_code = 403
    error = "Forbidden"

    def __init__(self, message: str = "Access denied: insufficient privileges") -> None:
        super().__init__(message)
