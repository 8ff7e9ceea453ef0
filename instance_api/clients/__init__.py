"""Messaging clients bound to instances."""

from instance_api.clients.base import MessagingClient
from instance_api.clients.memory import ConversationState, InMemoryMessagingClient

__all__ = [
    "ConversationState",
    "InMemoryMessagingClient",
    "MessagingClient",
]
