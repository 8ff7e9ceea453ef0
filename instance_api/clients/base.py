"""Base messaging client interface consumed by the instance service."""

from abc import ABC, abstractmethod
from typing import Any

from instance_api.models.content import LocationContent, TextContent
from instance_api.models.requests import ReactionType


class MessagingClient(ABC):
    """Session-bound client of the messaging backend.

    One client belongs to exactly one instance. Transport, encryption and
    persistence live behind this interface; callers only see conversation
    operations and the message ids they produce.
    """

    # CONVERSATION STATE
    @abstractmethod
    async def toggle_archive_conversation(self, conversation_id: str, archive: bool) -> None:
        """Archive or unarchive a conversation.

        Args:
            conversation_id: Conversation to update
            archive: True to archive, False to unarchive
        """
        pass

    @abstractmethod
    async def toggle_mute_conversation(self, conversation_id: str, mute: bool) -> None:
        """Mute or unmute a conversation.

        Args:
            conversation_id: Conversation to update
            mute: True to mute, False to unmute
        """
        pass

    @abstractmethod
    async def clear_conversation(self, conversation_id: str) -> None:
        """Clear the local message history of a conversation."""
        pass

    # DELETION
    @abstractmethod
    async def delete_message_local(self, conversation_id: str, message_id: str) -> None:
        """Remove a message from this device's view only."""
        pass

    @abstractmethod
    async def delete_message_everyone(self, conversation_id: str, message_id: str) -> None:
        """Remove a message for every participant of the conversation."""
        pass

    # READING
    @abstractmethod
    async def get_messages(self, conversation_id: str) -> list[dict[str, Any]] | None:
        """Return the messages held for a conversation.

        Returns:
            Message list, or None if the client holds nothing for it
        """
        pass

    # SENDING
    @abstractmethod
    async def send_text(
        self,
        conversation_id: str,
        content: TextContent,
        message_timer: float = 0,
    ) -> str:
        """Send a text message.

        Args:
            conversation_id: Target conversation
            content: Text with optional link preview, mentions and quote
            message_timer: Ephemeral timer in milliseconds, 0 for none

        Returns:
            message_id: Id generated for the sent message
        """
        pass

    @abstractmethod
    async def send_edited_text(
        self,
        conversation_id: str,
        first_message_id: str,
        content: TextContent,
    ) -> str:
        """Replace the text of an earlier message.

        Args:
            conversation_id: Target conversation
            first_message_id: Id of the message being edited
            content: New text content

        Returns:
            message_id: Id generated for the edited version
        """
        pass

    @abstractmethod
    async def send_location(
        self,
        conversation_id: str,
        location: LocationContent,
        message_timer: float = 0,
    ) -> str:
        """Send a location message and return its id."""
        pass

    @abstractmethod
    async def send_ping(
        self,
        conversation_id: str,
        expects_read_confirmation: bool = False,
        message_timer: float = 0,
    ) -> str:
        """Send a ping (knock) and return its id."""
        pass

    @abstractmethod
    async def send_reaction(
        self,
        conversation_id: str,
        original_message_id: str,
        reaction_type: ReactionType,
    ) -> str:
        """React to a message and return the id of the reaction message."""
        pass
