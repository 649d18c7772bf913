"""
Rule evaluation, composition, presets and configuration management.
"""

from .composition import combine_rules, has_errors, validate_fields, validate_value, when
from .evaluator import evaluate
from .presets import create_form_rules
from .rule_config import RuleConfigLoader, RuleSetBuilder, rule_summary

__all__ = [
    "evaluate",
    "combine_rules",
    "when",
    "validate_value",
    "validate_fields",
    "has_errors",
    "create_form_rules",
    "RuleConfigLoader",
    "RuleSetBuilder",
    "rule_summary",
]
