"""
Core data models for the validation rule engine.

Rules are frozen Pydantic models so they can be shared across fields and
evaluations without defensive copying.
"""

from .rule import (
    RULE_TYPES,
    BaseRule,
    CheckFunc,
    CustomRule,
    MaxLengthRule,
    MinLengthRule,
    PatternRule,
    RequiredRule,
    Rule,
)

__all__ = [
    "Rule",
    "BaseRule",
    "RequiredRule",
    "MinLengthRule",
    "MaxLengthRule",
    "PatternRule",
    "CustomRule",
    "CheckFunc",
    "RULE_TYPES",
]
