"""
Numeric bound rules.

Each rule first checks that the value reads as a number and reports
"Must be a number" when it does not, so callers can tell wrong input apart
from an out-of-range one.
"""

from typing import Any

from commerce_validation.core.models import CustomRule

from .base_validator import NOT_A_NUMBER_MESSAGE, coerce_number, format_number


def min_value(minimum: float, message: str | None = None) -> CustomRule:
    """Create a rule requiring ``number(value) >= minimum``."""
    failure = message or f"Must be at least {format_number(minimum)}"

    def check_min(value: Any) -> str | None:
        number = coerce_number(value)
        if number is None:
            return NOT_A_NUMBER_MESSAGE
        return None if number >= minimum else failure

    return CustomRule(check=check_min, message=failure)


def max_value(maximum: float, message: str | None = None) -> CustomRule:
    """Create a rule requiring ``number(value) <= maximum``."""
    failure = message or f"Must be no more than {format_number(maximum)}"

    def check_max(value: Any) -> str | None:
        number = coerce_number(value)
        if number is None:
            return NOT_A_NUMBER_MESSAGE
        return None if number <= maximum else failure

    return CustomRule(check=check_max, message=failure)


def value_range(minimum: float, maximum: float, message: str | None = None) -> CustomRule:
    """
    Create a rule requiring ``minimum <= number(value) <= maximum``.

    Raises:
        ValueError: If ``minimum`` is greater than ``maximum``
    """
    if minimum > maximum:
        raise ValueError(f"Range minimum {minimum} is greater than maximum {maximum}")

    failure = message or f"Must be between {format_number(minimum)} and {format_number(maximum)}"

    def check_range(value: Any) -> str | None:
        number = coerce_number(value)
        if number is None:
            return NOT_A_NUMBER_MESSAGE
        if number < minimum or number > maximum:
            return failure
        return None

    return CustomRule(check=check_range, message=failure)
