"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from instance_api.api.conversations import get_instance_service
from instance_api.clients.memory import InMemoryMessagingClient
from instance_api.main import app
from instance_api.models.content import LocationContent, TextContent
from instance_api.services.instance_registry import Instance, InstanceRegistry
from instance_api.services.instance_service import InstanceService

CONVERSATION_ID = "11111111-1111-1111-1111-111111111111"
MESSAGE_ID = "22222222-2222-2222-2222-222222222222"
USER_ID = "33333333-3333-3333-3333-333333333333"
UNKNOWN_INSTANCE_ID = "does-not-exist"


class RecordingMessagingClient(InMemoryMessagingClient):
    """In-memory client that also keeps the content objects it was handed."""

    def __init__(self) -> None:
        super().__init__()
        self.text_contents: list[TextContent] = []
        self.locations: list[tuple[LocationContent, float]] = []
        self.timers: list[float] = []

    async def send_text(self, conversation_id, content, message_timer=0):
        self.text_contents.append(content)
        self.timers.append(message_timer)
        return await super().send_text(conversation_id, content, message_timer)

    async def send_edited_text(self, conversation_id, first_message_id, content):
        self.text_contents.append(content)
        return await super().send_edited_text(conversation_id, first_message_id, content)

    async def send_location(self, conversation_id, location, message_timer=0):
        self.locations.append((location, message_timer))
        return await super().send_location(conversation_id, location, message_timer)


class FailingMessagingClient(InMemoryMessagingClient):
    """Client whose sends always fail, as a broken backend would."""

    async def send_text(self, conversation_id, content, message_timer=0):
        raise RuntimeError("backend unavailable")

    async def toggle_archive_conversation(self, conversation_id, archive):
        raise RuntimeError(f"conversation {conversation_id} is unknown")


@pytest.fixture
def registry() -> InstanceRegistry:
    """Private registry so tests never touch the global one."""
    return InstanceRegistry(instances={})


@pytest.fixture
def messaging_client() -> RecordingMessagingClient:
    return RecordingMessagingClient()


@pytest.fixture
def instance(registry: InstanceRegistry, messaging_client: RecordingMessagingClient) -> Instance:
    return registry.register("alice", messaging_client)


@pytest.fixture
def failing_instance(registry: InstanceRegistry) -> Instance:
    return registry.register("broken", FailingMessagingClient())


@pytest.fixture
def service(registry: InstanceRegistry) -> InstanceService:
    return InstanceService(registry)


@pytest.fixture
def client(service: InstanceService) -> Iterator[TestClient]:
    """Test client with the instance service swapped for the test one."""
    app.dependency_overrides[get_instance_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
