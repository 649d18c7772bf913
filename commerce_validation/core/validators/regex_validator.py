"""
Pattern rules - the value, as a string, must match a regular expression.

Email, URL and phone checks are pattern rules with fixed expressions.
"""

import re
from re import Pattern

from commerce_validation.core.models import PatternRule

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+\Z")

URL_PATTERN = re.compile(
    r"^https?://(www\.)?[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b"
    r"([-a-zA-Z0-9()@:%_+.~#?&/=]*)\Z"
)

# US numbers: optional +1, optional parentheses around the area code,
# space or dash separators, ten digits in total.
PHONE_PATTERN = re.compile(r"^(\+1\s?)?(\([0-9]{3}\)|[0-9]{3})[\s\-]?[0-9]{3}[\s\-]?[0-9]{4}\Z")


def pattern(regex: str | Pattern, message: str | None = None, flags: int = 0) -> PatternRule:
    """
    Create a rule that fails when ``regex`` finds no match in the value.

    Args:
        regex: Regular expression (string or compiled Pattern)
        message: Failure message, defaults to "Invalid format"
        flags: Regex flags applied when ``regex`` is a string

    Raises:
        ValueError: If the expression does not compile
    """
    if isinstance(regex, str):
        try:
            regex = re.compile(regex, flags)
        except re.error as e:
            raise ValueError(f"Invalid regex pattern: {e}")
    elif not isinstance(regex, Pattern):
        raise ValueError(f"Pattern must be string or compiled Pattern, got {type(regex)}")

    return PatternRule(pattern=regex, message=message or "Invalid format")


def email(message: str | None = None) -> PatternRule:
    return pattern(EMAIL_PATTERN, message or "Please enter a valid email address")


def url(message: str | None = None) -> PatternRule:
    return pattern(URL_PATTERN, message or "Please enter a valid URL")


def phone(message: str | None = None) -> PatternRule:
    return pattern(PHONE_PATTERN, message or "Please enter a valid phone number")
