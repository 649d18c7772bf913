"""
Shared value helpers for the rule factories and the evaluator.

Emptiness, length, numeric coercion, date parsing and file attribute access
are defined once here so every rule family interprets values the same way.
"""

import math
from collections.abc import Mapping, Sized
from datetime import date, datetime
from decimal import Decimal
from typing import Any

# Formats accepted by the date rules, tried in order before ISO datetimes.
DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y")

NOT_A_NUMBER_MESSAGE = "Must be a number"


def is_empty(value: Any) -> bool:
    """
    Return True when a value counts as "not provided".

    None, blank strings and empty collections are empty; 0 and False are not.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        return len(value) == 0
    return False


def value_length(value: Any) -> int:
    """Length used by the min/max length rules."""
    if isinstance(value, str):
        return len(value)
    if isinstance(value, Sized):
        return len(value)
    return len(str(value))


def coerce_number(value: Any) -> float | int | Decimal | None:
    """
    Interpret a value as a number.

    Numbers (except bool) are returned unchanged; strings are stripped and
    parsed with float(). Returns None when the value is not numeric.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return None if value.is_nan() else value
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return None if math.isnan(value) else value
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        return None if math.isnan(number) else number
    return None


def format_number(number: float | int | Decimal) -> str:
    """Render a bound for a message: 10.0 -> "10", 0.5 -> "0.5"."""
    if isinstance(number, float) and number.is_integer():
        return str(int(number))
    return str(number)


def parse_date(value: Any) -> date | None:
    """
    Parse a calendar date.

    Accepts date/datetime instances, "YYYY-MM-DD", "MM/DD/YYYY" and ISO 8601
    datetimes. Returns None when the value cannot be read as a date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def file_attribute(file: Any, name: str) -> Any:
    """Read ``size`` / ``type`` from a file-like object or a mapping."""
    if isinstance(file, Mapping):
        return file.get(name)
    return getattr(file, name, None)
