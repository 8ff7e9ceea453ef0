"""Command pipeline: validation, content transformation and dispatch."""

from instance_api.commands.dispatcher import CommandDispatcher
from instance_api.commands.results import (
    CommandResult,
    DispatchFailed,
    InstanceNotFound,
    Ok,
    ValidationFailed,
    envelope,
)
from instance_api.commands.validation import format_validation_error, validate_body

__all__ = [
    "CommandDispatcher",
    "CommandResult",
    "DispatchFailed",
    "InstanceNotFound",
    "Ok",
    "ValidationFailed",
    "envelope",
    "format_validation_error",
    "validate_body",
]
