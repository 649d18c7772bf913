"""
Helpers for composing rules and validating several fields at once.
"""

import asyncio
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from commerce_validation.core.models import CustomRule, Rule

from .evaluator import evaluate, run_rules

FieldRules = Mapping[str, Sequence[Rule]]


def combine_rules(*rules: Rule, message: str | None = None) -> CustomRule:
    """
    Combine several rules into one that reports the first failure.

    Useful where an interface accepts a single rule per field.
    """
    combined = tuple(rules)

    async def check_all(value: Any) -> str | None:
        failure, _ = await run_rules(value, combined)
        return failure

    return CustomRule(check=check_all, message=message or "Invalid value", run_on_empty=True)


def when(
    condition: Callable[[Any], bool],
    rules: Rule | Sequence[Rule],
    get_values: Callable[[], Any],
) -> CustomRule:
    """
    Apply ``rules`` only while ``condition(get_values())`` holds.

    When the condition is false the field is treated as valid, e.g. a
    company name required only for business accounts:

        when(lambda v: v["account_type"] == "business", [required()], lambda: form_values)
    """
    conditional = (rules,) if not isinstance(rules, Sequence) else tuple(rules)

    async def check_when(value: Any) -> str | None:
        if not condition(get_values()):
            return None
        failure, _ = await run_rules(value, conditional)
        return failure

    return CustomRule(check=check_when, message="Invalid value", run_on_empty=True)


async def validate_value(value: Any, rule: Rule) -> str | None:
    """Evaluate a single rule."""
    return await evaluate(value, [rule])


async def validate_fields(values: Mapping[str, Any], field_rules: FieldRules) -> dict[str, str]:
    """
    Evaluate every field's rules concurrently.

    Args:
        values: Field values; missing fields evaluate as None
        field_rules: Ordered rules per field

    Returns:
        Mapping of field name to failure message, "" for valid fields
    """
    field_names = list(field_rules)
    results = await asyncio.gather(
        *(evaluate(values.get(name), field_rules[name]) for name in field_names)
    )
    return {name: message or "" for name, message in zip(field_names, results)}


def has_errors(errors: Mapping[str, str]) -> bool:
    """True when any field in an errors mapping carries a message."""
    return any(errors.values())
