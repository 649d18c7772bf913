"""
Predefined rule lists for common commerce form fields, and per-form rule
sets for the login, registration, contact and profile forms.

Each preset reports a single message for every constraint it bundles, so the
user sees one consistent hint for the field.
"""

from typing import Any

from commerce_validation.core.models import Rule
from commerce_validation.core.validators import (
    custom,
    max_length,
    min_length,
    past_date,
    pattern,
    required,
)
from commerce_validation.core.validators.base_validator import coerce_number
from commerce_validation.core.validators.regex_validator import (
    EMAIL_PATTERN,
    PHONE_PATTERN,
    URL_PATTERN,
)

EMAIL_MESSAGE = "Please enter a valid email address"
PASSWORD_MESSAGE = "Password must be at least 8 characters with at least one letter and one number"
STRONG_PASSWORD_MESSAGE = (
    "Password must contain at least 8 characters with uppercase, lowercase, "
    "number, and special character"
)
NAME_MESSAGE = "Name must contain only letters, spaces, hyphens, and apostrophes"
CREDIT_CARD_MESSAGE = "Please enter a valid credit card number"

PASSWORD_PATTERN = r"^(?=.*[A-Za-z])(?=.*\d)[A-Za-z\d@$!%*#?&]"
STRONG_PASSWORD_PATTERN = r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]"
NAME_PATTERN = r"^[a-zA-Z\s\-']+\Z"


def luhn_checksum_valid(number: str) -> bool:
    """Check a card number against the Luhn checksum. Spaces and dashes are ignored."""
    digits = number.replace(" ", "").replace("-", "")
    if not digits.isdigit():
        return False

    total = 0
    for index, char in enumerate(reversed(digits)):
        digit = int(char)
        if index % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


def _check_card(value: Any) -> str | None:
    return None if luhn_checksum_valid(str(value)) else CREDIT_CARD_MESSAGE


def _check_age(value: Any) -> str | None:
    age = coerce_number(value)
    if age is None:
        return "Age must be a number"
    if age < 18:
        return "You must be at least 18 years old"
    if age > 120:
        return "Please enter a valid age"
    return None


EMAIL_RULES: tuple[Rule, ...] = (
    required(EMAIL_MESSAGE),
    pattern(EMAIL_PATTERN, EMAIL_MESSAGE),
)

PASSWORD_RULES: tuple[Rule, ...] = (
    required(PASSWORD_MESSAGE),
    min_length(8, PASSWORD_MESSAGE),
    pattern(PASSWORD_PATTERN, PASSWORD_MESSAGE),
)

STRONG_PASSWORD_RULES: tuple[Rule, ...] = (
    required(STRONG_PASSWORD_MESSAGE),
    min_length(8, STRONG_PASSWORD_MESSAGE),
    pattern(STRONG_PASSWORD_PATTERN, STRONG_PASSWORD_MESSAGE),
)

PHONE_RULES: tuple[Rule, ...] = (
    pattern(PHONE_PATTERN, "Please enter a valid phone number"),
)

URL_RULES: tuple[Rule, ...] = (
    pattern(URL_PATTERN, "Please enter a valid URL"),
)

CREDIT_CARD_RULES: tuple[Rule, ...] = (
    pattern(r"^[0-9]{13,19}\Z", CREDIT_CARD_MESSAGE),
    custom(_check_card, CREDIT_CARD_MESSAGE),
)

ZIP_CODE_RULES: tuple[Rule, ...] = (
    pattern(r"^\d{5}(-\d{4})?\Z", "Please enter a valid ZIP code"),
)

NAME_RULES: tuple[Rule, ...] = (
    required(NAME_MESSAGE),
    pattern(NAME_PATTERN, NAME_MESSAGE),
    min_length(2, NAME_MESSAGE),
    max_length(50, NAME_MESSAGE),
)

USERNAME_RULES: tuple[Rule, ...] = (
    required("Username must be 3-20 characters and contain only letters, numbers, and underscores"),
    pattern(
        r"^[a-zA-Z0-9_]{3,20}\Z",
        "Username must be 3-20 characters and contain only letters, numbers, and underscores",
    ),
)

AGE_RULES: tuple[Rule, ...] = (
    required("Please enter a valid age"),
    custom(_check_age, "Please enter a valid age"),
)

PAST_DATE_RULES: tuple[Rule, ...] = (
    past_date(),
)

REQUIRED_RULES: tuple[Rule, ...] = (
    required(),
)

NUMERIC_RULES: tuple[Rule, ...] = (
    pattern(r"^\d+\Z", "This field must contain only numbers"),
)

DECIMAL_RULES: tuple[Rule, ...] = (
    pattern(r"^\d+(\.\d{1,2})?\Z", "Please enter a valid decimal number (up to 2 decimal places)"),
)


def _person_name_rules(label: str) -> tuple[Rule, ...]:
    message = f"{label} must contain only letters, spaces, hyphens, and apostrophes"
    return (
        required(message),
        min_length(2, message),
        max_length(50, message),
        pattern(NAME_PATTERN, message),
    )


def _login_rules() -> dict[str, tuple[Rule, ...]]:
    password_message = "Password must be at least 6 characters"
    return {
        "email": EMAIL_RULES,
        "password": (required(password_message), min_length(6, password_message)),
    }


def _registration_rules() -> dict[str, tuple[Rule, ...]]:
    return {
        "firstName": _person_name_rules("First name"),
        "lastName": _person_name_rules("Last name"),
        "email": EMAIL_RULES,
        "password": PASSWORD_RULES,
        "confirmPassword": (required("Please confirm your password"),),
    }


def _bounded_text(minimum: int, maximum: int, message: str) -> tuple[Rule, ...]:
    return (required(message), min_length(minimum, message), max_length(maximum, message))


def _contact_rules() -> dict[str, tuple[Rule, ...]]:
    return {
        "name": _bounded_text(2, 100, "Name must be between 2 and 100 characters"),
        "email": EMAIL_RULES,
        "subject": _bounded_text(5, 200, "Subject must be between 5 and 200 characters"),
        "message": _bounded_text(10, 1000, "Message must be between 10 and 1000 characters"),
    }


def _profile_rules() -> dict[str, tuple[Rule, ...]]:
    return {
        "firstName": _person_name_rules("First name"),
        "lastName": _person_name_rules("Last name"),
        "email": EMAIL_RULES,
        "phone": PHONE_RULES,
        "website": URL_RULES,
    }


FORM_RULES = {
    "login": _login_rules,
    "registration": _registration_rules,
    "contact": _contact_rules,
    "profile": _profile_rules,
}


def create_form_rules(form_name: str) -> dict[str, tuple[Rule, ...]]:
    """
    Build the rule set for a named form.

    Raises:
        KeyError: If the form name is unknown
    """
    try:
        builder = FORM_RULES[form_name]
    except KeyError:
        raise KeyError(f"Unknown form: {form_name}. Available: {', '.join(sorted(FORM_RULES))}")
    return builder()
