"""
API error hierarchy and RFC 7807-style error envelopes.
"""

from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from commerce_validation.observability.logger import get_logger

logger = get_logger(__name__)


class FieldError(BaseModel):
    """
    One normalized payload validation failure.

    Attributes:
        field: Dotted path to the offending field ("" for the payload itself)
        message: User-facing message
        value: The rejected input, when there was one
    """

    field: str
    message: str
    value: Any = None


class ApiError(Exception):
    """Base class for errors that map onto an HTTP error response."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_type: str = "INTERNAL_SERVER_ERROR",
    ):
        self.message = message
        self.status_code = status_code
        self.error_type = error_type
        super().__init__(message)


class RequestValidationError(ApiError):
    """Raised when a request payload fails schema validation."""

    def __init__(self, message: str = "Validation failed", errors: list[FieldError] | None = None):
        super().__init__(message, 422, "VALIDATION_ERROR")
        self.errors = list(errors or [])


class NotFoundError(ApiError):
    def __init__(self, resource: str = "Resource"):
        super().__init__(f"{resource} not found", 404, "NOT_FOUND")


class UnauthorizedError(ApiError):
    def __init__(self, message: str = "Unauthorized access"):
        super().__init__(message, 401, "UNAUTHORIZED")


class ForbiddenError(ApiError):
    def __init__(self, message: str = "Forbidden access"):
        super().__init__(message, 403, "FORBIDDEN")


class ConflictError(ApiError):
    def __init__(self, message: str = "Resource conflict"):
        super().__init__(message, 409, "CONFLICT")


def error_response(exc: Exception, instance: str | None = None) -> dict[str, Any]:
    """
    Build the error envelope for an exception.

    ApiError subclasses keep their status and type; a bare pydantic
    ValidationError becomes a 422; anything else is an internal error.

    Args:
        exc: The exception to report
        instance: Identifier of the failing request (usually its path)

    Returns:
        {"success": False, "error": {type, title, status, detail, instance?, errors?}}
    """
    from .payload import normalize_errors

    errors: list[FieldError] | None = None

    if isinstance(exc, ApiError):
        status, error_type, title = exc.status_code, exc.error_type, exc.message
        if isinstance(exc, RequestValidationError):
            errors = exc.errors
    elif isinstance(exc, PydanticValidationError):
        status, error_type, title = 422, "VALIDATION_ERROR", "Validation failed"
        errors = normalize_errors(exc)
    else:
        status, error_type, title = 500, "INTERNAL_SERVER_ERROR", "Internal server error"

    log_extra = {"status": status, "instance": instance, "error_message": str(exc)}
    if status >= 500:
        logger.error(f"{error_type}: {title}", extra=log_extra, exc_info=exc)
    else:
        logger.warning(f"{error_type}: {title}", extra=log_extra)

    details: dict[str, Any] = {
        "type": error_type,
        "title": title,
        "status": status,
        "detail": str(exc),
    }
    if instance is not None:
        details["instance"] = instance
    if errors is not None:
        details["errors"] = [error.model_dump() for error in errors]

    return {"success": False, "error": details}
