"""
Server-side request payload validation.

Runs a request schema over raw input, collects every error rather than
stopping at the first, and reports them as FieldError entries with dotted
field paths.
"""

from typing import Any, TypeVar

from pydantic import ValidationError as PydanticValidationError

from commerce_validation.observability.logger import get_logger
from commerce_validation.observability.metrics import increment_counter, payload_validations_total
from commerce_validation.utils.validation import sanitize_input

from .errors import FieldError, RequestValidationError
from .schemas import SCHEMAS, RequestSchema

logger = get_logger(__name__)

SchemaT = TypeVar("SchemaT", bound=RequestSchema)


def get_schema(name: str) -> type[RequestSchema]:
    """
    Look up a request schema by its registry name (e.g. ``"user.register"``).

    Raises:
        KeyError: If no schema is registered under the name
    """
    if name not in SCHEMAS:
        raise KeyError(f"Unknown schema '{name}'. Available: {', '.join(sorted(SCHEMAS))}")
    return SCHEMAS[name]


def normalize_errors(
    exc: PydanticValidationError,
    schema: type[RequestSchema] | None = None,
) -> list[FieldError]:
    """
    Convert a pydantic ValidationError into FieldError entries.

    Messages come from the schema's ``error_messages`` when it has one for
    the field and error type, otherwise from pydantic.
    """
    messages = schema.error_messages if schema is not None else {}
    field_errors = []

    for error in exc.errors():
        loc = error["loc"]
        field = ".".join(str(part) for part in loc)
        key_path = ".".join(str(part) for part in loc if not isinstance(part, int))
        error_type = error["type"]

        message = (
            messages.get(f"{key_path}.{error_type}" if key_path else error_type)
            or messages.get(error_type)
            or error["msg"]
        )
        # For missing fields pydantic reports the enclosing object as input
        value = None if error_type == "missing" else error.get("input")

        field_errors.append(FieldError(field=field, message=message, value=value))

    return field_errors


def validate_payload(
    schema: type[SchemaT],
    data: Any,
    sanitize: bool = False,
) -> SchemaT:
    """
    Validate a request payload against a schema.

    Args:
        schema: Request schema class
        data: Raw decoded payload (usually a dict)
        sanitize: Strip script injection from strings before validating

    Returns:
        The validated model, unknown fields removed

    Raises:
        RequestValidationError: Carrying every FieldError found
    """
    schema_name = schema.__name__
    if sanitize:
        data = sanitize_input(data)

    try:
        model = schema.model_validate(data)
    except PydanticValidationError as e:
        errors = normalize_errors(e, schema)
        increment_counter(payload_validations_total, schema=schema_name, status="invalid")
        logger.info(
            "Payload validation failed",
            extra={
                "schema": schema_name,
                "error_count": len(errors),
                "fields": [error.field for error in errors],
            },
        )
        raise RequestValidationError("Validation failed", errors) from e

    increment_counter(payload_validations_total, schema=schema_name, status="valid")
    return model
