"""
Command-line interface for checking values and payloads against rules.

Usage:
    python -m commerce_validation.cli check-values --rules <rules.yaml> --values <values.json>
    python -m commerce_validation.cli check-payload --schema <name> --payload <body.json>
    python -m commerce_validation.cli list-rules --rules <rules.yaml>
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from commerce_validation.api import RequestValidationError, error_response, get_schema, validate_payload
from commerce_validation.api.schemas import SCHEMAS
from commerce_validation.config import ValidationSettings
from commerce_validation.core.rules import RuleConfigLoader, rule_summary, validate_fields
from commerce_validation.observability.logger import get_logger, setup_logger
from commerce_validation.observability.metrics import get_metrics
from commerce_validation.utils.validation import validate_file_path

logger = get_logger(__name__)


def load_json(file_path: str, field_name: str):
    """Read a JSON document from a validated path."""
    path = Path(validate_file_path(file_path, field_name))
    if not path.exists():
        raise FileNotFoundError(f"{field_name} file not found: {file_path}")
    with open(path) as f:
        return json.load(f)


def check_values_command(args, settings: ValidationSettings) -> int:
    """
    Validate a JSON object of field values against YAML rules.

    Every field in the values file is also available by name as a callable
    source, so confirmation rules can write ``source: password``.

    Returns:
        Exit code: 0 when every field passes, 1 otherwise
    """
    values = load_json(args.values, "values")
    if not isinstance(values, dict):
        raise ValueError("values file must contain a JSON object")

    callables = {name: (lambda value=value: value) for name, value in values.items()}
    loader = RuleConfigLoader(validate_file_path(args.rules, "rules"), callables=callables, settings=settings)
    field_rules = loader.load_rules()

    logger.info(f"Checking {len(field_rules)} field(s) from {args.values}")
    results = asyncio.run(validate_fields(values, field_rules))
    errors = {name: message for name, message in results.items() if message}

    print(json.dumps({"valid": not errors, "errors": errors}, indent=2))
    logger.info(f"Field check complete: {len(errors)} failing field(s)")
    return 1 if errors else 0


def check_payload_command(args, settings: ValidationSettings) -> int:
    """
    Validate a JSON request payload against a named schema.

    Prints the validated payload, or the error envelope on failure.
    """
    schema = get_schema(args.schema)
    payload = load_json(args.payload, "payload")

    try:
        model = validate_payload(schema, payload, sanitize=args.sanitize)
    except RequestValidationError as e:
        print(json.dumps(error_response(e, instance=args.payload), indent=2, default=str))
        return 1

    print(json.dumps({"success": True, "data": model.model_dump(mode="json", by_alias=True)}, indent=2))
    return 0


def list_rules_command(args, settings: ValidationSettings) -> int:
    """Print a summary of the rules in a YAML rule file."""
    loader = RuleConfigLoader(validate_file_path(args.rules, "rules"), settings=settings, allow_unresolved=True)
    summary = rule_summary(loader.load_rules())

    print(f"\n{'=' * 60}")
    print(f"RULES: {args.rules}")
    print(f"{'=' * 60}\n")
    print(f"Total rules: {summary['total_rules']}\n")

    print("Rules by Field:")
    for field_name, count in summary["rules_by_field"].items():
        print(f"  {field_name:<30} {count:>8}")

    print("\nRules by Kind:")
    for kind, count in sorted(summary["rules_by_kind"].items(), key=lambda item: item[1], reverse=True):
        print(f"  {kind:<30} {count:>8}")

    print(f"\n{'=' * 60}\n")
    return 0


COMMANDS = {
    "check-values": check_values_command,
    "check-payload": check_payload_command,
    "list-rules": list_rules_command,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="commerce-validation",
        description="Check field values and request payloads against validation rules",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check form values against a rule file
  python -m commerce_validation.cli check-values --rules config/rules.example.yaml \\
      --values data/signup.json

  # Check a registration request body
  python -m commerce_validation.cli check-payload --schema user.register --payload body.json

  # Summarize a rule file
  python -m commerce_validation.cli list-rules --rules config/rules.example.yaml
        """
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: LOG_LEVEL or INFO)"
    )
    parser.add_argument(
        "--log-format",
        choices=["json", "text"],
        help="Log format (default: LOG_FORMAT or json)"
    )
    parser.add_argument(
        "--metrics",
        action="store_true",
        help="Print Prometheus metrics to stderr when the command finishes"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    values_parser = subparsers.add_parser("check-values", help="Validate field values against YAML rules")
    values_parser.add_argument("--rules", required=True, help="Path to rules YAML file")
    values_parser.add_argument("--values", required=True, help="Path to JSON object of field values")

    payload_parser = subparsers.add_parser("check-payload", help="Validate a request payload")
    payload_parser.add_argument(
        "--schema",
        required=True,
        choices=sorted(SCHEMAS),
        help="Request schema name"
    )
    payload_parser.add_argument("--payload", required=True, help="Path to JSON payload")
    payload_parser.add_argument(
        "--sanitize",
        action="store_true",
        help="Strip script injection from strings before validating"
    )

    list_parser = subparsers.add_parser("list-rules", help="Summarize a rules YAML file")
    list_parser.add_argument("--rules", required=True, help="Path to rules YAML file")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    settings = ValidationSettings.from_env()
    setup_logger(
        level=args.log_level or settings.log_level,
        format_type=args.log_format or settings.log_format,
    )

    try:
        exit_code = COMMANDS[args.command](args, settings)
    except (FileNotFoundError, KeyError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"\nError: {e}", file=sys.stderr)
        exit_code = 2

    if args.metrics:
        print(get_metrics(), file=sys.stderr)

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
