"""Service routing conversation operations to an instance's messaging client."""

import logging
from typing import Any

from instance_api.models.content import LocationContent, TextContent
from instance_api.models.requests import ReactionType
from instance_api.services.instance_registry import Instance, InstanceRegistry

logger = logging.getLogger(__name__)


class InstanceService:
    """Runs conversation operations against the instance named by id.

    State-changing operations without a result return the instance name;
    send operations return the id of the generated message.
    """

    def __init__(self, registry: InstanceRegistry | None = None):
        self.registry = registry or InstanceRegistry()

    def instance_exists(self, instance_id: str) -> bool:
        return self.registry.exists(instance_id)

    def get_instance(self, instance_id: str) -> Instance:
        return self.registry.get(instance_id)

    async def toggle_archive_conversation(
        self, instance_id: str, conversation_id: str, archive: bool
    ) -> str:
        instance = self.get_instance(instance_id)
        await instance.client.toggle_archive_conversation(conversation_id, archive)
        return instance.name

    async def toggle_mute_conversation(
        self, instance_id: str, conversation_id: str, mute: bool
    ) -> str:
        instance = self.get_instance(instance_id)
        await instance.client.toggle_mute_conversation(conversation_id, mute)
        return instance.name

    async def clear_conversation(self, instance_id: str, conversation_id: str) -> str:
        instance = self.get_instance(instance_id)
        await instance.client.clear_conversation(conversation_id)
        return instance.name

    async def delete_message_local(
        self, instance_id: str, conversation_id: str, message_id: str
    ) -> str:
        instance = self.get_instance(instance_id)
        await instance.client.delete_message_local(conversation_id, message_id)
        return instance.name

    async def delete_message_everyone(
        self, instance_id: str, conversation_id: str, message_id: str
    ) -> str:
        instance = self.get_instance(instance_id)
        await instance.client.delete_message_everyone(conversation_id, message_id)
        return instance.name

    async def get_messages(self, instance_id: str, conversation_id: str) -> list[dict[str, Any]]:
        """Get the messages held for a conversation, empty if there are none."""
        instance = self.get_instance(instance_id)
        return await instance.client.get_messages(conversation_id) or []

    async def send_text(
        self,
        instance_id: str,
        conversation_id: str,
        content: TextContent,
        message_timer: float = 0,
    ) -> str:
        instance = self.get_instance(instance_id)
        message_id = await instance.client.send_text(conversation_id, content, message_timer)
        logger.info(f"Instance {instance_id} sent text {message_id} to {conversation_id}")
        return message_id

    async def send_edited_text(
        self,
        instance_id: str,
        conversation_id: str,
        first_message_id: str,
        content: TextContent,
    ) -> str:
        instance = self.get_instance(instance_id)
        message_id = await instance.client.send_edited_text(
            conversation_id, first_message_id, content
        )
        logger.info(
            f"Instance {instance_id} edited {first_message_id} as {message_id} in {conversation_id}"
        )
        return message_id

    async def send_location(
        self,
        instance_id: str,
        conversation_id: str,
        location: LocationContent,
        message_timer: float = 0,
    ) -> str:
        instance = self.get_instance(instance_id)
        return await instance.client.send_location(conversation_id, location, message_timer)

    async def send_ping(
        self,
        instance_id: str,
        conversation_id: str,
        expects_read_confirmation: bool = False,
        message_timer: float = 0,
    ) -> str:
        instance = self.get_instance(instance_id)
        return await instance.client.send_ping(
            conversation_id, expects_read_confirmation, message_timer
        )

    async def send_reaction(
        self,
        instance_id: str,
        conversation_id: str,
        original_message_id: str,
        reaction_type: ReactionType,
    ) -> str:
        instance = self.get_instance(instance_id)
        return await instance.client.send_reaction(
            conversation_id, original_message_id, reaction_type
        )
