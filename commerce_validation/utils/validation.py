"""
Input hygiene utilities.

Provides XSS stripping for request payloads and path checks for files
handed to the command-line tools.
"""

import re
from typing import Any

import bleach


class ValidationError(ValueError):
    """Raised when input validation fails."""
    pass


_SCRIPT_BLOCK = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_JAVASCRIPT_SCHEME = re.compile(r"javascript:", re.IGNORECASE)
_INLINE_HANDLER = re.compile(r"on\w+\s*=", re.IGNORECASE)


def sanitize_string(value: str) -> str:
    """
    Strip markup from a string.

    Script blocks are dropped with their contents, then bleach removes every
    remaining tag and escapes stray ``<``, ``>`` and ``&``. ``javascript:``
    schemes and inline event handlers left in the text are removed last.

    Examples:
        >>> sanitize_string('hi<script>alert(1)</script>')
        'hi'
        >>> sanitize_string('<a href="javascript:run()">x</a>')
        'x'
        >>> sanitize_string('<scr<script>x</script>ipt>alert(1)</script>')
        'alert(1)'
    """
    value = _SCRIPT_BLOCK.sub("", value)
    value = bleach.clean(value, tags=[], attributes={}, strip=True, strip_comments=True)
    value = _JAVASCRIPT_SCHEME.sub("", value)
    return _INLINE_HANDLER.sub("", value)


def sanitize_input(data: Any) -> Any:
    """
    Recursively sanitize every string inside dicts, lists and tuples.

    Non-string leaves are returned unchanged; the input is not mutated.
    """
    if isinstance(data, str):
        return sanitize_string(data)
    if isinstance(data, list):
        return [sanitize_input(item) for item in data]
    if isinstance(data, tuple):
        return tuple(sanitize_input(item) for item in data)
    if isinstance(data, dict):
        return {key: sanitize_input(value) for key, value in data.items()}
    return data


def validate_file_path(file_path: str, field_name: str = "file_path") -> str:
    """
    Validate a file path for security.

    Prevents path traversal and rejects unreasonable paths.

    Args:
        file_path: The file path to validate
        field_name: Name of the field (for error messages)

    Returns:
        The validated file path (stripped of whitespace)

    Raises:
        ValidationError: If validation fails

    Examples:
        >>> validate_file_path("/data/rules.yaml")
        '/data/rules.yaml'
        >>> validate_file_path("../../../etc/passwd")  # doctest: +SKIP
        ValidationError: file_path contains path traversal characters
    """
    if not file_path or not isinstance(file_path, str):
        raise ValidationError(f"{field_name} must be a non-empty string")

    file_path = file_path.strip()

    if not file_path:
        raise ValidationError(f"{field_name} cannot be empty or whitespace-only")

    # Prevent path traversal
    if ".." in file_path:
        raise ValidationError(f"{field_name} contains path traversal characters (..)")

    # Check for null bytes (security)
    if "\x00" in file_path:
        raise ValidationError(f"{field_name} contains null bytes")

    # Prevent excessively long paths
    if len(file_path) > 4096:  # Linux PATH_MAX
        raise ValidationError(f"{field_name} exceeds maximum length of 4096 characters")

    return file_path
