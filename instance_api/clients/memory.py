"""In-memory messaging client for development and testing."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from instance_api.clients.base import MessagingClient
from instance_api.errors import MessagingClientError
from instance_api.models.content import LinkPreviewContent, LocationContent, TextContent
from instance_api.models.requests import ReactionType

logger = logging.getLogger(__name__)


def utc_now() -> str:
    """Get current UTC time as an ISO 8601 string."""
    return datetime.now(UTC).isoformat()


@dataclass
class ConversationState:
    """Local view of one conversation."""

    archived: bool = False
    muted: bool = False
    messages: list[dict[str, Any]] = field(default_factory=list)
    deleted_for_everyone: set[str] = field(default_factory=set)


def _serialize_link_preview(preview: LinkPreviewContent) -> dict[str, Any]:
    serialized: dict[str, Any] = {
        "permanentUrl": preview.permanent_url,
        "url": preview.url,
        "urlOffset": preview.url_offset,
        "title": preview.title,
        "summary": preview.summary,
        "tweet": None,
        "image": None,
    }
    if preview.tweet is not None:
        serialized["tweet"] = {"author": preview.tweet.author, "username": preview.tweet.username}
    if preview.image is not None:
        # Image bytes are not echoed back, only their shape
        serialized["image"] = {
            "width": preview.image.width,
            "height": preview.image.height,
            "type": preview.image.type,
            "size": len(preview.image.data),
        }
    return serialized


def _serialize_text(content: TextContent) -> dict[str, Any]:
    return {
        "text": content.text,
        "mentions": [
            {"userId": m.user_id, "start": m.start, "length": m.length} for m in content.mentions
        ],
        "quote": (
            {
                "quotedMessageId": content.quote.quoted_message_id,
                "quotedMessageSha256": content.quote.quoted_message_sha256.hex(),
            }
            if content.quote
            else None
        ),
        "linkPreview": (
            _serialize_link_preview(content.link_preview) if content.link_preview else None
        ),
    }


class InMemoryMessagingClient(MessagingClient):
    """Messaging client keeping all conversation state in process memory.

    Conversations are created on first use. Deletions and reactions that
    reference an unknown message are still sent; editing a message the
    conversation does not hold raises MessagingClientError.
    """

    def __init__(self, user_id: str | None = None):
        self.user_id = user_id or str(uuid4())
        self.conversations: dict[str, ConversationState] = {}
        self.call_count = 0

    def _conversation(self, conversation_id: str) -> ConversationState:
        self.call_count += 1
        if conversation_id not in self.conversations:
            self.conversations[conversation_id] = ConversationState()
        return self.conversations[conversation_id]

    def _index_of(self, state: ConversationState, message_id: str) -> int | None:
        for index, message in enumerate(state.messages):
            if message["id"] == message_id:
                return index
        return None

    def _append(
        self,
        conversation_id: str,
        message_type: str,
        content: dict[str, Any],
        expects_read_confirmation: bool = False,
        message_timer: float = 0,
    ) -> str:
        state = self._conversation(conversation_id)
        message_id = str(uuid4())
        state.messages.append(
            {
                "id": message_id,
                "conversationId": conversation_id,
                "from": self.user_id,
                "type": message_type,
                "content": content,
                "expectsReadConfirmation": expects_read_confirmation,
                "messageTimer": message_timer,
                "reaction": None,
                "timestamp": utc_now(),
            }
        )
        logger.debug(f"Stored {message_type} message {message_id} in {conversation_id}")
        return message_id

    async def toggle_archive_conversation(self, conversation_id: str, archive: bool) -> None:
        self._conversation(conversation_id).archived = archive

    async def toggle_mute_conversation(self, conversation_id: str, mute: bool) -> None:
        self._conversation(conversation_id).muted = mute

    async def clear_conversation(self, conversation_id: str) -> None:
        self._conversation(conversation_id).messages.clear()

    async def delete_message_local(self, conversation_id: str, message_id: str) -> None:
        state = self._conversation(conversation_id)
        index = self._index_of(state, message_id)
        if index is not None:
            del state.messages[index]

    async def delete_message_everyone(self, conversation_id: str, message_id: str) -> None:
        state = self._conversation(conversation_id)
        index = self._index_of(state, message_id)
        if index is not None:
            del state.messages[index]
        # Remote participants are told even when the local copy is already gone
        state.deleted_for_everyone.add(message_id)

    async def get_messages(self, conversation_id: str) -> list[dict[str, Any]] | None:
        state = self.conversations.get(conversation_id)
        if state is None:
            return None
        return list(state.messages)

    async def send_text(
        self,
        conversation_id: str,
        content: TextContent,
        message_timer: float = 0,
    ) -> str:
        return self._append(
            conversation_id,
            "text",
            _serialize_text(content),
            expects_read_confirmation=content.expects_read_confirmation,
            message_timer=message_timer,
        )

    async def send_edited_text(
        self,
        conversation_id: str,
        first_message_id: str,
        content: TextContent,
    ) -> str:
        state = self._conversation(conversation_id)
        index = self._index_of(state, first_message_id)
        if index is None:
            raise MessagingClientError(
                f'Message "{first_message_id}" not found in conversation "{conversation_id}".'
            )
        original = state.messages[index]
        if original["type"] != "text":
            raise MessagingClientError(f'Message "{first_message_id}" is not a text message.')

        message_id = str(uuid4())
        state.messages[index] = {
            **original,
            "id": message_id,
            "content": _serialize_text(content),
            "expectsReadConfirmation": content.expects_read_confirmation,
            "replacingMessageId": first_message_id,
            "timestamp": utc_now(),
        }
        return message_id

    async def send_location(
        self,
        conversation_id: str,
        location: LocationContent,
        message_timer: float = 0,
    ) -> str:
        return self._append(
            conversation_id,
            "location",
            {
                "latitude": location.latitude,
                "longitude": location.longitude,
                "name": location.name,
                "zoom": location.zoom,
            },
            expects_read_confirmation=location.expects_read_confirmation,
            message_timer=message_timer,
        )

    async def send_ping(
        self,
        conversation_id: str,
        expects_read_confirmation: bool = False,
        message_timer: float = 0,
    ) -> str:
        return self._append(
            conversation_id,
            "ping",
            {},
            expects_read_confirmation=expects_read_confirmation,
            message_timer=message_timer,
        )

    async def send_reaction(
        self,
        conversation_id: str,
        original_message_id: str,
        reaction_type: ReactionType,
    ) -> str:
        state = self._conversation(conversation_id)
        index = self._index_of(state, original_message_id)
        if index is not None:
            state.messages[index]["reaction"] = (
                None if reaction_type == ReactionType.NONE else reaction_type.value
            )
        return str(uuid4())
