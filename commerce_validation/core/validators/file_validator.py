"""
File rules for upload fields.

A file is any object exposing ``size`` (bytes) and ``type`` (MIME type), or a
mapping with those keys. ``None`` means no file was chosen and always passes.
"""

from collections.abc import Iterable
from typing import Any

from commerce_validation.core.models import CustomRule

from .base_validator import file_attribute, format_number

BYTES_PER_MB = 1024 * 1024


def file_size(max_mb: float, message: str | None = None) -> CustomRule:
    """Create a rule limiting a file to ``max_mb`` megabytes."""
    failure = message or f"File size must be less than {format_number(max_mb)}MB"
    max_bytes = max_mb * BYTES_PER_MB

    def check_size(file: Any) -> str | None:
        if file is None:
            return None
        size = file_attribute(file, "size")
        if size is None or size > max_bytes:
            return failure
        return None

    return CustomRule(check=check_size, message=failure)


def file_type(allowed_types: Iterable[str], message: str | None = None) -> CustomRule:
    """Create a rule restricting a file's MIME type to ``allowed_types``."""
    allowed = tuple(allowed_types)
    if not allowed:
        raise ValueError("file_type requires at least one allowed type")

    failure = message or f"File type must be one of: {', '.join(allowed)}"

    def check_type(file: Any) -> str | None:
        if file is None:
            return None
        return None if file_attribute(file, "type") in allowed else failure

    return CustomRule(check=check_type, message=failure)
