"""Validation gate applying command descriptors to raw request bodies."""

import logging
from typing import Any

from pydantic import ValidationError

from instance_api.commands.results import Ok, ValidationFailed
from instance_api.models.requests import COMMAND_SCHEMAS

logger = logging.getLogger(__name__)

_MESSAGES_BY_TYPE = {
    "missing": "is required",
    "string_type": "must be a string",
    "string_too_short": "is not allowed to be empty",
    "bool_type": "must be a boolean",
    "bool_parsing": "must be a boolean",
    "float_type": "must be a number",
    "float_parsing": "must be a number",
    "finite_number": "must be a finite number",
    "list_type": "must be an array",
    "model_type": "must be an object",
    "model_attributes_type": "must be an object",
    "dict_type": "must be an object",
}


def format_validation_error(error: ValidationError) -> str:
    """Describe the first violated constraint, naming the field by its wire path."""
    first = error.errors(include_url=False)[0]
    label = ".".join(str(part) for part in first["loc"]) or "value"
    error_type = first["type"]
    ctx = first.get("ctx") or {}

    if error_type == "value_error" and "error" in ctx:
        message = str(ctx["error"])
    elif error_type == "enum":
        message = f"must be one of {ctx.get('expected', '')}".rstrip()
    else:
        message = _MESSAGES_BY_TYPE.get(error_type, first["msg"])

    return f'"{label}" {message}'


def validate_body(command: str, body: Any) -> Ok | ValidationFailed:
    """Validate a raw body against the descriptor registered for a command.

    Args:
        command: Command name, a key of COMMAND_SCHEMAS
        body: Parsed JSON body

    Returns:
        Ok carrying the parsed request with defaults applied, or
        ValidationFailed describing the first violation

    Raises:
        KeyError: If no descriptor is registered for the command
    """
    schema = COMMAND_SCHEMAS[command]
    try:
        return Ok(schema.model_validate(body))
    except ValidationError as e:
        message = format_validation_error(e)
        logger.debug(f"Rejected {command} body: {message}")
        return ValidationFailed(message)
