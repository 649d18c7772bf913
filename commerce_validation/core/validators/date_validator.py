"""
Date rules.

All date rules pass on empty values; pair them with ``required`` when the
date is mandatory. ``future_date`` and ``past_date`` compare at day
granularity and let unparseable values through (pair them with ``date``).
"""

from collections.abc import Callable
from datetime import date as Date
from typing import Any

from commerce_validation.core.models import CustomRule

from .base_validator import is_empty, parse_date

Today = Callable[[], Date]


def date(message: str | None = None) -> CustomRule:
    """Create a rule requiring a parseable calendar date."""
    failure = message or "Please enter a valid date"

    def check_date(value: Any) -> str | None:
        if is_empty(value):
            return None
        return None if parse_date(value) is not None else failure

    return CustomRule(check=check_date, message=failure)


def future_date(message: str | None = None, today: Today | None = None) -> CustomRule:
    """
    Create a rule requiring a date strictly after today.

    Args:
        message: Failure message
        today: Callable returning the current date, defaults to ``date.today``
    """
    failure = message or "Date must be in the future"
    current_date = today or Date.today

    def check_future(value: Any) -> str | None:
        if is_empty(value):
            return None
        parsed = parse_date(value)
        if parsed is None:
            return None
        return None if parsed > current_date() else failure

    return CustomRule(check=check_future, message=failure)


def past_date(message: str | None = None, today: Today | None = None) -> CustomRule:
    """
    Create a rule rejecting dates after today.

    Today itself passes: the rule checks "not in the future".
    """
    failure = message or "Date cannot be in the future"
    current_date = today or Date.today

    def check_not_future(value: Any) -> str | None:
        if is_empty(value):
            return None
        parsed = parse_date(value)
        if parsed is None:
            return None
        return failure if parsed > current_date() else None

    return CustomRule(check=check_not_future, message=failure)
