"""
Rule factories.

Each factory builds one immutable Rule. Numeric, date, confirmation,
uniqueness and file rules are custom predicates; email, url and phone are
pattern rules.
"""

from .base_validator import coerce_number, is_empty, parse_date
from .custom_validator import confirmation, custom, unique
from .date_validator import date, future_date, past_date
from .file_validator import file_size, file_type
from .length_validator import max_length, min_length
from .range_validator import max_value, min_value, value_range
from .regex_validator import email, pattern, phone, url
from .required_field_validator import required

# Short aliases matching the rule names used in configuration files.
min = min_value  # noqa: A001
max = max_value  # noqa: A001
range = value_range  # noqa: A001

FACTORIES = {
    "required": required,
    "min_length": min_length,
    "max_length": max_length,
    "pattern": pattern,
    "custom": custom,
    "min": min_value,
    "max": max_value,
    "range": value_range,
    "email": email,
    "url": url,
    "phone": phone,
    "date": date,
    "future_date": future_date,
    "past_date": past_date,
    "confirmation": confirmation,
    "unique": unique,
    "file_size": file_size,
    "file_type": file_type,
}

__all__ = [
    "required",
    "min_length",
    "max_length",
    "pattern",
    "custom",
    "min_value",
    "max_value",
    "value_range",
    "min",
    "max",
    "range",
    "email",
    "url",
    "phone",
    "date",
    "future_date",
    "past_date",
    "confirmation",
    "unique",
    "file_size",
    "file_type",
    "is_empty",
    "coerce_number",
    "parse_date",
    "FACTORIES",
]
