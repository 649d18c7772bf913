"""
Headless per-field validation state for form layers.

The session owns field values, error messages and touched flags, and
resolves races between overlapping asynchronous validations: every change
to a field bumps its version, and a validation result is recorded only if
the field's version is unchanged when the result arrives (last write wins).

Input events follow a validation policy: ``change`` schedules a debounced
validation when ``validate_on_change`` is set, ``blur`` validates at once
when ``validate_on_blur`` is set, and ``submit`` validates the whole form
when ``validate_on_submit`` is set.
"""

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any

from commerce_validation.core.models import Rule
from commerce_validation.core.rules.evaluator import evaluate
from commerce_validation.observability.logger import get_logger

logger = get_logger(__name__)

VALIDATION_FAILED_MESSAGE = "Validation failed"
DEFAULT_DEBOUNCE_SECONDS = 0.3

SubmitHandler = Callable[[dict[str, Any]], Awaitable[None] | None]


class FieldValidationSession:
    """
    Tracks values, errors and in-flight validations for one form.

    Attributes:
        field_rules: Ordered rules per field name
        validate_on_change: Validate (debounced) after each ``change``
        validate_on_blur: Validate a field when it loses focus
        validate_on_submit: Validate the whole form before ``on_submit`` runs
        debounce_seconds: Quiet period after the last ``change`` of a field
    """

    def __init__(
        self,
        field_rules: Mapping[str, Sequence[Rule]],
        initial_values: Mapping[str, Any] | None = None,
        *,
        validate_on_change: bool = False,
        validate_on_blur: bool = True,
        validate_on_submit: bool = True,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ):
        if debounce_seconds < 0:
            raise ValueError(f"debounce_seconds must be non-negative, got {debounce_seconds}")

        self.field_rules = {name: tuple(rules) for name, rules in field_rules.items()}
        self.validate_on_change = validate_on_change
        self.validate_on_blur = validate_on_blur
        self.validate_on_submit = validate_on_submit
        self.debounce_seconds = debounce_seconds

        self._initial_values = dict(initial_values or {})
        self._values: dict[str, Any] = dict(self._initial_values)
        self._errors: dict[str, str] = {}
        self._touched: dict[str, bool] = {}
        self._versions: dict[str, int] = {}
        self._pending: dict[str, asyncio.Task] = {}
        self._is_submitting = False

    @property
    def values(self) -> dict[str, Any]:
        return dict(self._values)

    @property
    def errors(self) -> dict[str, str]:
        return dict(self._errors)

    @property
    def touched(self) -> dict[str, bool]:
        return dict(self._touched)

    @property
    def is_valid(self) -> bool:
        """True when no field currently carries an error message."""
        return not any(self._errors.values())

    @property
    def is_submitting(self) -> bool:
        return self._is_submitting

    @property
    def pending_fields(self) -> set[str]:
        """Fields with a debounced validation still waiting to run."""
        return set(self._pending)

    def value_getter(self, field_name: str) -> Callable[[], Any]:
        """Accessor for a field's live value, for use with ``confirmation``."""
        return lambda: self._values.get(field_name)

    def set_value(self, field_name: str, value: Any) -> None:
        """Change a field's value; pending validations of it become stale."""
        self._values[field_name] = value
        self._bump(field_name)

    def touch(self, field_name: str, touched: bool = True) -> None:
        self._touched[field_name] = touched

    def set_error(self, field_name: str, message: str) -> None:
        self._errors[field_name] = message

    def clear_errors(self) -> None:
        self._errors = {}

    def reset(self, new_values: Mapping[str, Any] | None = None) -> None:
        """
        Restore initial (or given) values and drop all errors and touched flags.

        Pending debounced validations are cancelled; validations already
        running are discarded when they finish.
        """
        self.cancel_pending()
        self._values = dict(new_values if new_values is not None else self._initial_values)
        self._errors = {}
        self._touched = {}
        self._is_submitting = False
        for field_name in list(self._versions):
            self._bump(field_name)

    def cancel_pending(self) -> None:
        """Cancel every debounced validation that has not run yet."""
        for task in self._pending.values():
            task.cancel()
        self._pending = {}

    def change(self, field_name: str, value: Any) -> asyncio.Task | None:
        """
        Handle an input change.

        With ``validate_on_change`` the field is validated once no further
        change arrives within ``debounce_seconds``; each change restarts the
        wait. Must be called while an event loop is running.

        Returns:
            The scheduled validation task, or None when change validation is off
        """
        self.set_value(field_name, value)
        if not self.validate_on_change:
            return None

        previous = self._pending.pop(field_name, None)
        if previous is not None:
            previous.cancel()

        task = asyncio.get_running_loop().create_task(self._debounced_validate(field_name))
        self._pending[field_name] = task
        return task

    async def blur(self, field_name: str) -> str:
        """
        Handle a field losing focus: mark it touched and, with
        ``validate_on_blur``, validate it.

        Returns:
            The field's current message, "" when it has none
        """
        self.touch(field_name)
        if self.validate_on_blur:
            return await self.validate_field(field_name)
        return self._errors.get(field_name, "")

    async def submit(self, on_submit: SubmitHandler) -> bool:
        """
        Touch every field, validate the form when ``validate_on_submit`` is
        set, and call ``on_submit`` with the values only if the form is valid.

        ``is_submitting`` is True for the duration of the call. Errors raised
        by ``on_submit`` are logged and propagate.

        Returns:
            True when ``on_submit`` was called
        """
        self._is_submitting = True
        try:
            for field_name in self.field_rules:
                self.touch(field_name)

            if self.validate_on_submit and not await self.validate_all():
                logger.info("Form submission blocked by validation errors")
                return False

            result = on_submit(self.values)
            if inspect.isawaitable(result):
                await result
            return True
        except Exception:
            logger.error("Form submission failed", exc_info=True)
            raise
        finally:
            self._is_submitting = False

    async def _debounced_validate(self, field_name: str) -> str:
        try:
            await asyncio.sleep(self.debounce_seconds)
            return await self.validate_field(field_name)
        finally:
            if self._pending.get(field_name) is asyncio.current_task():
                del self._pending[field_name]

    async def validate_field(self, field_name: str) -> str:
        """
        Validate one field against its current value.

        A predicate that raises marks the field "Validation failed" instead
        of propagating. The result is stored only when no newer change or
        validation of the field happened meanwhile.

        Returns:
            The message computed by this call, "" when valid
        """
        version = self._bump(field_name)
        value = self._values.get(field_name)

        try:
            message = await evaluate(value, self.field_rules.get(field_name, ()))
        except Exception:
            logger.error(
                "Validation predicate raised",
                extra={"field": field_name},
                exc_info=True,
            )
            message = VALIDATION_FAILED_MESSAGE

        message = message or ""
        if self._versions.get(field_name) == version:
            self._errors[field_name] = message
        else:
            logger.debug("Discarding stale validation result", extra={"field": field_name})
        return message

    async def validate_all(self) -> bool:
        """
        Mark every ruled field touched and validate them concurrently.

        Returns:
            True when every field is valid
        """
        field_names = list(self.field_rules)
        for field_name in field_names:
            self.touch(field_name)

        await asyncio.gather(*(self.validate_field(name) for name in field_names))
        return self.is_valid

    def _bump(self, field_name: str) -> int:
        version = self._versions.get(field_name, 0) + 1
        self._versions[field_name] = version
        return version
