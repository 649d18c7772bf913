"""
Length rules - inclusive bounds on the length of a value.
"""

from commerce_validation.core.models import MaxLengthRule, MinLengthRule


def min_length(length: int, message: str | None = None) -> MinLengthRule:
    """Create a rule that fails when the value is shorter than ``length``."""
    return MinLengthRule(
        min_length=length,
        message=message or f"Must be at least {length} characters",
    )


def max_length(length: int, message: str | None = None) -> MaxLengthRule:
    """Create a rule that fails when the value is longer than ``length``."""
    return MaxLengthRule(
        max_length=length,
        message=message or f"Must be no more than {length} characters",
    )
