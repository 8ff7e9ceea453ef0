"""Command dispatcher routing validated commands to instances."""

import logging
import traceback
from collections.abc import Awaitable, Callable
from typing import Any

from instance_api.commands.results import (
    CommandResult,
    DispatchFailed,
    InstanceNotFound,
    Ok,
    ValidationFailed,
    envelope,
)
from instance_api.commands.transform import build_location_content, build_text_content
from instance_api.commands.validation import validate_body
from instance_api.errors import ContentTransformError, InstanceNotFoundError
from instance_api.models.requests import (
    ArchiveRequest,
    ConversationRequest,
    DeletionRequest,
    LocationRequest,
    MessageUpdateRequest,
    MuteRequest,
    PingRequest,
    ReactionRequest,
    TextRequest,
)
from instance_api.services.instance_service import InstanceService

logger = logging.getLogger(__name__)

Handler = Callable[[str, Any], Awaitable[Any]]


class CommandDispatcher:
    """Runs one command through validate, lookup, transform and dispatch.

    Every failure is turned into a result value, so each command ends in
    exactly one response and nothing propagates past dispatch().
    """

    def __init__(self, service: InstanceService):
        self.service = service
        self._handlers: dict[str, Handler] = {
            "archive": self._archive,
            "mute": self._mute,
            "clear": self._clear,
            "delete": self._delete,
            "deleteEverywhere": self._delete_everywhere,
            "getMessages": self._get_messages,
            "sendLocation": self._send_location,
            "sendText": self._send_text,
            "sendPing": self._send_ping,
            "sendReaction": self._send_reaction,
            "updateText": self._update_text,
        }

    @property
    def commands(self) -> list[str]:
        return list(self._handlers)

    async def dispatch(self, command: str, instance_id: str, body: Any) -> CommandResult:
        """Run a command for an instance.

        Args:
            command: Command name (e.g. "archive", "sendText")
            instance_id: Target instance id from the request path
            body: Parsed JSON request body

        Returns:
            Ok with the response payload, or the failure that ended the command

        Raises:
            KeyError: If the command is unknown
        """
        handler = self._handlers[command]

        validated = validate_body(command, body)
        if isinstance(validated, ValidationFailed):
            return validated

        if not self.service.instance_exists(instance_id):
            logger.warning(f'{command}: instance "{instance_id}" not found')
            return InstanceNotFound(instance_id)

        try:
            payload = await handler(instance_id, validated.value)
        except ContentTransformError as e:
            logger.debug(f"{command}: content rejected: {e}")
            return ValidationFailed(str(e))
        except InstanceNotFoundError as e:
            # Removed between the existence check and the call
            return InstanceNotFound(e.instance_id)
        except Exception as e:
            logger.error(f"{command} failed for instance {instance_id}: {e}", exc_info=True)
            return DispatchFailed(message=str(e), stack=traceback.format_exc())

        return Ok(payload)

    def _instance_name(self, instance_id: str) -> str:
        return self.service.get_instance(instance_id).name

    async def _archive(self, instance_id: str, request: ArchiveRequest) -> dict[str, str]:
        name = await self.service.toggle_archive_conversation(
            instance_id, request.conversation_id, request.archive
        )
        return envelope(instance_id, name)

    async def _mute(self, instance_id: str, request: MuteRequest) -> dict[str, str]:
        name = await self.service.toggle_mute_conversation(
            instance_id, request.conversation_id, request.mute
        )
        return envelope(instance_id, name)

    async def _clear(self, instance_id: str, request: ConversationRequest) -> dict[str, str]:
        name = await self.service.clear_conversation(instance_id, request.conversation_id)
        return envelope(instance_id, name)

    async def _delete(self, instance_id: str, request: DeletionRequest) -> dict[str, str]:
        name = await self.service.delete_message_local(
            instance_id, request.conversation_id, request.message_id
        )
        return envelope(instance_id, name)

    async def _delete_everywhere(
        self, instance_id: str, request: DeletionRequest
    ) -> dict[str, str]:
        name = await self.service.delete_message_everyone(
            instance_id, request.conversation_id, request.message_id
        )
        return envelope(instance_id, name)

    async def _get_messages(
        self, instance_id: str, request: ConversationRequest
    ) -> list[dict[str, Any]]:
        return await self.service.get_messages(instance_id, request.conversation_id)

    async def _send_location(self, instance_id: str, request: LocationRequest) -> dict[str, str]:
        location = build_location_content(request)
        message_id = await self.service.send_location(
            instance_id, request.conversation_id, location, request.message_timer
        )
        return envelope(instance_id, self._instance_name(instance_id), message_id)

    async def _send_text(self, instance_id: str, request: TextRequest) -> dict[str, str]:
        content = build_text_content(request)
        message_id = await self.service.send_text(
            instance_id, request.conversation_id, content, request.message_timer
        )
        return envelope(instance_id, self._instance_name(instance_id), message_id)

    async def _send_ping(self, instance_id: str, request: PingRequest) -> dict[str, str]:
        message_id = await self.service.send_ping(
            instance_id,
            request.conversation_id,
            request.expects_read_confirmation,
            request.message_timer,
        )
        return envelope(instance_id, self._instance_name(instance_id), message_id)

    async def _send_reaction(self, instance_id: str, request: ReactionRequest) -> dict[str, str]:
        message_id = await self.service.send_reaction(
            instance_id, request.conversation_id, request.original_message_id, request.type
        )
        return envelope(instance_id, self._instance_name(instance_id), message_id)

    async def _update_text(
        self, instance_id: str, request: MessageUpdateRequest
    ) -> dict[str, str]:
        content = build_text_content(request)
        message_id = await self.service.send_edited_text(
            instance_id, request.conversation_id, request.first_message_id, content
        )
        return envelope(instance_id, self._instance_name(instance_id), message_id)
