"""Result values produced by the command pipeline."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Ok:
    """Successful command; value is the validated request or the response payload."""

    value: Any


@dataclass(frozen=True)
class ValidationFailed:
    message: str


@dataclass(frozen=True)
class InstanceNotFound:
    instance_id: str


@dataclass(frozen=True)
class DispatchFailed:
    """The messaging client raised while carrying out the command."""

    message: str
    stack: str


CommandResult = Ok | ValidationFailed | InstanceNotFound | DispatchFailed


def envelope(instance_id: str, name: str, message_id: str | None = None) -> dict[str, str]:
    """Build the success payload shared by all instance commands."""
    if message_id is None:
        return {"instanceId": instance_id, "name": name}
    return {"instanceId": instance_id, "messageId": message_id, "name": name}
