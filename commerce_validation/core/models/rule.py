"""
Rule models: immutable descriptions of a single validation constraint.

A rule is one of five variants, told apart by its ``kind`` discriminator:

- RequiredRule: the value must not be empty
- MinLengthRule / MaxLengthRule: inclusive length bounds
- PatternRule: the value (as a string) must match a regular expression
- CustomRule: an arbitrary, possibly asynchronous, predicate

Every other rule family (numeric bounds, dates, confirmation, uniqueness,
files) is expressed as a CustomRule built by a factory in
``commerce_validation.core.validators``.
"""

import re
from collections.abc import Awaitable, Callable
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

# Predicate signature: return None (or "") on success, a message on failure.
CheckResult = str | bool | None
CheckFunc = Callable[[Any], CheckResult | Awaitable[CheckResult]]


class BaseRule(BaseModel):
    """Fields shared by every rule variant."""

    model_config = ConfigDict(frozen=True)

    message: str = Field(..., min_length=1)


class RequiredRule(BaseRule):
    """Fails when the value is empty."""

    kind: Literal["required"] = "required"


class MinLengthRule(BaseRule):
    """Fails when the value is shorter than ``min_length``."""

    kind: Literal["min_length"] = "min_length"
    min_length: int = Field(..., ge=0)


class MaxLengthRule(BaseRule):
    """Fails when the value is longer than ``max_length``."""

    kind: Literal["max_length"] = "max_length"
    max_length: int = Field(..., ge=0)


class PatternRule(BaseRule):
    """
    Fails when the regular expression finds no match in the value.

    Strings are compiled on construction; compiled patterns keep their flags.
    """

    kind: Literal["pattern"] = "pattern"
    pattern: re.Pattern


class CustomRule(BaseRule):
    """
    Delegates the decision to ``check``.

    ``check`` may be a plain function or return an awaitable. A non-empty
    string result is the failure message; ``False`` fails with ``message``;
    ``None``, ``""`` and ``True`` pass.

    Empty values skip the predicate unless ``run_on_empty`` is set; composite
    rules set it so a nested required rule still sees the empty value.
    """

    kind: Literal["custom"] = "custom"
    check: CheckFunc
    run_on_empty: bool = False


Rule = Annotated[
    Union[RequiredRule, MinLengthRule, MaxLengthRule, PatternRule, CustomRule],
    Field(discriminator="kind"),
]

RULE_TYPES = (RequiredRule, MinLengthRule, MaxLengthRule, PatternRule, CustomRule)
