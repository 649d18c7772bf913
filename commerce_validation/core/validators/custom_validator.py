"""
Predicate rules: arbitrary checks, cross-field confirmation and remote
uniqueness lookups.
"""

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from typing import Any

from commerce_validation.core.models import CheckFunc, CustomRule
from commerce_validation.observability.logger import get_logger
from commerce_validation.observability.metrics import (
    increment_counter,
    validation_unique_check_errors_total,
)

from .base_validator import is_empty

logger = get_logger(__name__)

UNVERIFIED_UNIQUENESS_MESSAGE = "Unable to verify uniqueness"

UniqueCheck = Callable[[Any], Awaitable[bool] | bool]


def custom(check: CheckFunc, message: str | None = None) -> CustomRule:
    """
    Wrap an arbitrary predicate in a rule.

    The predicate receives the value and returns None on success or the
    failure message. It may be a coroutine function. Returning False fails
    with ``message``.

    Raises:
        ValueError: If ``check`` is not callable
    """
    if not callable(check):
        raise ValueError("custom check must be callable")

    return CustomRule(check=check, message=message or "Invalid value")


def confirmation(
    original_field: str,
    get_original_value: Callable[[], Any],
    message: str | None = None,
) -> CustomRule:
    """
    Create a rule requiring the value to equal another field's value.

    ``get_original_value`` is called on every evaluation so the rule follows
    live changes to the original field.
    """
    if not callable(get_original_value):
        raise ValueError(f"confirmation of '{original_field}' requires a callable accessor")

    failure = message or "Values do not match"

    def check_confirmation(value: Any) -> str | None:
        original = get_original_value()
        # strict: 1, 1.0 and True are different values
        matches = type(value) is type(original) and value == original
        return None if matches else failure

    return CustomRule(check=check_confirmation, message=failure)


def unique(
    check: UniqueCheck,
    message: str | None = None,
    timeout: float | None = None,
) -> CustomRule:
    """
    Create an asynchronous rule asking ``check`` whether the value is free.

    ``check(value)`` returns (or resolves to) True when the value is unique.
    Empty values pass without calling ``check``. If the lookup raises or runs
    longer than ``timeout`` seconds the rule fails with "Unable to verify
    uniqueness"; an unverifiable value is never accepted.

    Args:
        check: Sync or async uniqueness lookup
        message: Failure message for taken values
        timeout: Optional limit in seconds for an async lookup
    """
    if not callable(check):
        raise ValueError("unique check must be callable")

    failure = message or "This value is already taken"

    async def check_unique(value: Any) -> str | None:
        if is_empty(value):
            return None

        try:
            is_unique = check(value)
            if inspect.isawaitable(is_unique):
                if timeout is not None:
                    is_unique = await asyncio.wait_for(is_unique, timeout)
                else:
                    is_unique = await is_unique
        except asyncio.TimeoutError:
            logger.warning(
                "Uniqueness check timed out",
                extra={"timeout_seconds": timeout},
            )
            increment_counter(validation_unique_check_errors_total, reason="timeout")
            return UNVERIFIED_UNIQUENESS_MESSAGE
        except Exception as e:
            logger.warning(
                "Uniqueness check failed",
                extra={"error_type": type(e).__name__, "error_message": str(e)},
            )
            increment_counter(validation_unique_check_errors_total, reason="exception")
            return UNVERIFIED_UNIQUENESS_MESSAGE

        return None if is_unique else failure

    return CustomRule(check=check_unique, message=failure)
