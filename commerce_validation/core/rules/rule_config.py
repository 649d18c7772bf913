"""
Rule configuration management.

Loads field rules from YAML files and provides a builder for assembling
rule sets in code.
"""

import re
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from commerce_validation.config import ValidationSettings
from commerce_validation.core.models import Rule
from commerce_validation.core.validators import (
    FACTORIES,
    max_length,
    min_length,
    pattern,
    required,
    value_range,
)
from commerce_validation.observability.logger import get_logger, log_operation

logger = get_logger(__name__)

FieldRuleMap = dict[str, list[Rule]]


class RuleConfigLoader:
    """
    Loads field rules from YAML configuration files.

    Expected YAML format:
    ```yaml
    fields:
      email:
        - type: required
        - type: email
          message: "Please provide a valid email"
        - type: unique
          params:
            check: email_available
            timeout: 2.5

      age:
        - type: range
          params:
            min: 18
            max: 120
    ```

    Functions for ``custom``, ``unique`` and ``confirmation`` rules are not
    serializable, so the YAML names them and the loader resolves the names
    from ``callables``.
    """

    def __init__(
        self,
        config_path: str | Path,
        callables: Mapping[str, Callable[..., Any]] | None = None,
        settings: ValidationSettings | None = None,
        allow_unresolved: bool = False,
    ):
        """
        Initialize the rule config loader.

        Args:
            config_path: Path to the YAML configuration file
            callables: Named functions referenced by custom/unique/confirmation rules
            settings: Defaults such as the uniqueness-check timeout
            allow_unresolved: Resolve unknown callable names to a check that always
                passes instead of failing, so a rule file can be inspected without
                its functions

        Raises:
            FileNotFoundError: If the configuration file does not exist
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Rule configuration file not found: {config_path}")
        self.callables = dict(callables or {})
        self.settings = settings or ValidationSettings()
        self.allow_unresolved = allow_unresolved

    def load_rules(self) -> FieldRuleMap:
        """
        Load and build field rules from the YAML file.

        Returns:
            Mapping of field name to its ordered rules

        Raises:
            ValueError: If the YAML is invalid or a rule cannot be built
        """
        with log_operation("Loading rule configuration", logger=logger, path=str(self.config_path)):
            with open(self.config_path) as f:
                try:
                    config = yaml.safe_load(f)
                except yaml.YAMLError as e:
                    raise ValueError(f"Invalid YAML in {self.config_path}: {e}")

            if not isinstance(config, dict) or "fields" not in config:
                raise ValueError("Configuration file must contain 'fields' section")
            if not isinstance(config["fields"], dict):
                raise ValueError("'fields' section must map field names to rule lists")

            field_rules: FieldRuleMap = {}
            for field_name, rule_defs in config["fields"].items():
                if not isinstance(rule_defs, list):
                    raise ValueError(f"Rules for field '{field_name}' must be a list")

                field_rules[field_name] = [
                    self._build_rule(field_name, rule_def)
                    for rule_def in rule_defs
                    if not isinstance(rule_def, dict) or rule_def.get("enabled", True)
                ]

        return field_rules

    def _build_rule(self, field_name: str, rule_def: dict[str, Any] | str) -> Rule:
        """
        Build a single rule from its definition.

        A bare string is shorthand for a rule type without params.

        Raises:
            ValueError: If the definition is invalid
        """
        if isinstance(rule_def, str):
            rule_def = {"type": rule_def}
        elif not isinstance(rule_def, dict):
            raise ValueError(f"Rule for field '{field_name}' must be a mapping or a type name")

        if "type" not in rule_def:
            raise ValueError(f"Rule for field '{field_name}' is missing 'type'")

        rule_type = rule_def["type"]
        if rule_type not in FACTORIES:
            raise ValueError(f"Unknown rule type '{rule_type}' for field '{field_name}'")

        params = dict(rule_def.get("params", rule_def.get("parameters")) or {})

        try:
            args, kwargs = self._factory_args(rule_type, params)
            return FACTORIES[rule_type](*args, message=rule_def.get("message"), **kwargs)
        except KeyError as e:
            raise ValueError(
                f"Rule '{rule_type}' for field '{field_name}' is missing parameter {e}"
            )
        except (TypeError, ValueError) as e:
            raise ValueError(f"Failed to create '{rule_type}' rule for field '{field_name}': {e}")

    def _factory_args(self, rule_type: str, params: dict[str, Any]) -> tuple[list[Any], dict[str, Any]]:
        """Translate YAML params into factory arguments."""
        if rule_type in ("min_length", "max_length"):
            return [params["length"]], {}
        if rule_type == "pattern":
            flags = re.IGNORECASE if params.get("ignore_case") else 0
            return [params["pattern"]], {"flags": flags}
        if rule_type == "min":
            return [params["min"]], {}
        if rule_type == "max":
            return [params["max"]], {}
        if rule_type == "range":
            return [params["min"], params["max"]], {}
        if rule_type == "file_size":
            return [params["max_mb"]], {}
        if rule_type == "file_type":
            return [params["allowed_types"]], {}
        if rule_type == "custom":
            return [self._resolve(params["check"])], {}
        if rule_type == "unique":
            timeout = params.get("timeout", self.settings.unique_timeout)
            return [self._resolve(params["check"])], {"timeout": timeout}
        if rule_type == "confirmation":
            return [params["field"], self._resolve(params["source"])], {}
        return [], {}

    def _resolve(self, name: str) -> Callable[..., Any]:
        if name not in self.callables:
            if self.allow_unresolved:
                logger.debug(f"Using placeholder for unresolved callable '{name}'")
                return _placeholder
            raise ValueError(f"Unresolved callable '{name}'")
        return self.callables[name]


def _placeholder(*args: Any, **kwargs: Any) -> bool:
    return True


class RuleSetBuilder:
    """
    Programmatically build field rule sets (for tests or dynamic forms).
    """

    def __init__(self):
        """Initialize an empty rule set."""
        self.rules: FieldRuleMap = {}

    def add(self, field_name: str, *rules: Rule) -> "RuleSetBuilder":
        """Append rules to a field."""
        self.rules.setdefault(field_name, []).extend(rules)
        return self

    def required(self, field_name: str, message: str | None = None) -> "RuleSetBuilder":
        """Add a required rule."""
        return self.add(field_name, required(message))

    def length(
        self,
        field_name: str,
        minimum: int | None = None,
        maximum: int | None = None,
    ) -> "RuleSetBuilder":
        """Add length bounds."""
        if minimum is not None:
            self.add(field_name, min_length(minimum))
        if maximum is not None:
            self.add(field_name, max_length(maximum))
        return self

    def pattern(self, field_name: str, regex: str, message: str | None = None) -> "RuleSetBuilder":
        """Add a pattern rule."""
        return self.add(field_name, pattern(regex, message))

    def range(
        self,
        field_name: str,
        minimum: float,
        maximum: float,
        message: str | None = None,
    ) -> "RuleSetBuilder":
        """Add a numeric range rule."""
        return self.add(field_name, value_range(minimum, maximum, message))

    def build(self) -> FieldRuleMap:
        """Return the assembled rule set."""
        return {name: list(rules) for name, rules in self.rules.items()}


def rule_summary(field_rules: Mapping[str, Sequence[Rule]]) -> dict[str, Any]:
    """
    Summarize a rule set.

    Returns:
        Dictionary with total rule count, per-field counts and counts by kind
    """
    rules_by_kind: dict[str, int] = {}
    for rules in field_rules.values():
        for rule in rules:
            rules_by_kind[rule.kind] = rules_by_kind.get(rule.kind, 0) + 1

    return {
        "total_rules": sum(len(rules) for rules in field_rules.values()),
        "rules_by_field": {name: len(rules) for name, rules in field_rules.items()},
        "rules_by_kind": rules_by_kind,
    }
