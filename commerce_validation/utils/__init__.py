"""
Utility functions for input hygiene.
"""

from .validation import ValidationError, sanitize_input, sanitize_string, validate_file_path

__all__ = [
    "ValidationError",
    "sanitize_input",
    "sanitize_string",
    "validate_file_path",
]
