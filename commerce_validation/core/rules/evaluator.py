"""
Rule evaluator: applies an ordered list of rules to one value.

Rules run one after another in list order and the first failure wins, so
callers put cheap checks (required, length) ahead of remote lookups.
"""

import inspect
from collections.abc import Iterable
from typing import Any

from commerce_validation.core.models import (
    CustomRule,
    MaxLengthRule,
    MinLengthRule,
    PatternRule,
    RequiredRule,
    Rule,
)
from commerce_validation.core.validators.base_validator import is_empty, value_length
from commerce_validation.observability.logger import get_logger
from commerce_validation.observability.metrics import (
    record_evaluation,
    track_duration,
    validation_evaluation_duration_seconds,
)

logger = get_logger(__name__)


async def evaluate(value: Any, rules: Iterable[Rule]) -> str | None:
    """
    Evaluate ``value`` against ``rules``.

    Args:
        value: The field value
        rules: Rules in evaluation order

    Returns:
        The first failure message, or None when every rule passes

    Raises:
        TypeError: If an entry in ``rules`` is not a Rule
        Exception: Whatever a caller-supplied custom predicate raises
    """
    with track_duration(validation_evaluation_duration_seconds):
        try:
            message, failed_rule = await run_rules(value, rules)
        except Exception:
            record_evaluation("error")
            raise

    if message is None:
        record_evaluation("passed")
        return None

    logger.debug(
        "Rule failed",
        extra={"rule_kind": failed_rule.kind, "failure": message},
    )
    record_evaluation("failed", failed_rule.kind)
    return message


async def run_rules(value: Any, rules: Iterable[Rule]) -> tuple[str | None, Rule | None]:
    """
    Run rules in order and stop at the first failure.

    Returns:
        (message, rule) for the first failing rule, or (None, None)
    """
    for rule in rules:
        message = await apply_rule(value, rule)
        if message:
            return message, rule
    return None, None


async def apply_rule(value: Any, rule: Rule) -> str | None:
    """Run a single rule, returning its failure message or None."""
    if isinstance(rule, RequiredRule):
        return rule.message if is_empty(value) else None

    if isinstance(rule, CustomRule):
        if is_empty(value) and not rule.run_on_empty:
            return None
        result = rule.check(value)
        if inspect.isawaitable(result):
            result = await result
        return _custom_message(result, rule)

    if not isinstance(rule, (MinLengthRule, MaxLengthRule, PatternRule)):
        raise TypeError(f"Unsupported rule type: {type(rule).__name__}")

    # Emptiness is only the required rule's concern
    if is_empty(value):
        return None

    if isinstance(rule, MinLengthRule):
        return rule.message if value_length(value) < rule.min_length else None

    if isinstance(rule, MaxLengthRule):
        return rule.message if value_length(value) > rule.max_length else None

    return None if rule.pattern.search(str(value)) else rule.message


def _custom_message(result: Any, rule: CustomRule) -> str | None:
    """Normalize a predicate result into a message or None."""
    if result is False:
        return rule.message
    if result is True or not result:
        return None
    return str(result)
