"""
Presence rule - the value must be provided.
"""

from commerce_validation.core.models import RequiredRule


def required(message: str | None = None) -> RequiredRule:
    """
    Create a rule that fails on empty values.

    What counts as empty is defined by ``base_validator.is_empty``: None,
    blank strings and empty collections.
    """
    return RequiredRule(message=message or "This field is required")
