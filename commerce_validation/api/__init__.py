"""
Server-side payload validation and API error responses.
"""

from .errors import (
    ApiError,
    ConflictError,
    FieldError,
    ForbiddenError,
    NotFoundError,
    RequestValidationError,
    UnauthorizedError,
    error_response,
)
from .payload import get_schema, normalize_errors, validate_payload
from .schemas import SCHEMAS

__all__ = [
    "ApiError",
    "RequestValidationError",
    "NotFoundError",
    "UnauthorizedError",
    "ForbiddenError",
    "ConflictError",
    "FieldError",
    "error_response",
    "validate_payload",
    "normalize_errors",
    "get_schema",
    "SCHEMAS",
]
