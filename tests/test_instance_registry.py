from __future__ import annotations

import asyncio

import pytest

from conftest import CONVERSATION_ID, MESSAGE_ID
from instance_api.clients.memory import InMemoryMessagingClient
from instance_api.errors import InstanceNotFoundError, MessagingClientError
from instance_api.models.content import TextContent
from instance_api.models.requests import ReactionType
from instance_api.services.instance_registry import InstanceRegistry


def test_register_generates_ids(registry):
    first = registry.register("one", InMemoryMessagingClient())
    second = registry.register("two", InMemoryMessagingClient())

    assert first.id != second.id
    assert registry.exists(first.id)
    assert registry.get(second.id).name == "two"
    assert {i.name for i in registry.list_instances()} == {"one", "two"}


def test_register_with_explicit_id(registry):
    instance = registry.register("fixed", InMemoryMessagingClient(), instance_id="instance-1")

    assert instance.id == "instance-1"
    assert registry.get("instance-1") is instance


def test_lookup_reflects_removal(registry, instance):
    registry.remove(instance.id)

    assert not registry.exists(instance.id)
    with pytest.raises(InstanceNotFoundError) as excinfo:
        registry.get(instance.id)
    assert str(excinfo.value) == f'Instance "{instance.id}" not found.'


def test_remove_unknown_instance_raises(registry):
    with pytest.raises(InstanceNotFoundError):
        registry.remove("missing")


def test_private_registries_are_isolated():
    left = InstanceRegistry(instances={})
    right = InstanceRegistry(instances={})
    instance = left.register("left", InMemoryMessagingClient())

    assert left.exists(instance.id)
    assert not right.exists(instance.id)


def test_service_returns_instance_name(service, instance):
    name = asyncio.run(service.clear_conversation(instance.id, CONVERSATION_ID))

    assert name == "alice"


def test_service_get_messages_defaults_to_empty_list(service, instance):
    assert asyncio.run(service.get_messages(instance.id, CONVERSATION_ID)) == []


def test_clear_keeps_conversation_flags():
    client = InMemoryMessagingClient()

    async def scenario():
        await client.toggle_archive_conversation(CONVERSATION_ID, True)
        await client.send_ping(CONVERSATION_ID)
        await client.clear_conversation(CONVERSATION_ID)
        return await client.get_messages(CONVERSATION_ID)

    assert asyncio.run(scenario()) == []
    assert client.conversations[CONVERSATION_ID].archived is True


def test_delete_everyone_is_recorded_even_for_unknown_message():
    client = InMemoryMessagingClient()

    asyncio.run(client.delete_message_everyone(CONVERSATION_ID, MESSAGE_ID))

    assert MESSAGE_ID in client.conversations[CONVERSATION_ID].deleted_for_everyone


def test_local_delete_keeps_other_messages():
    client = InMemoryMessagingClient()

    async def scenario():
        keep = await client.send_text(CONVERSATION_ID, TextContent(text="keep"))
        drop = await client.send_text(CONVERSATION_ID, TextContent(text="drop"))
        await client.delete_message_local(CONVERSATION_ID, drop)
        return keep, await client.get_messages(CONVERSATION_ID)

    keep, messages = asyncio.run(scenario())

    assert [m["id"] for m in messages] == [keep]
    assert client.conversations[CONVERSATION_ID].deleted_for_everyone == set()


def test_reaction_none_clears_like():
    client = InMemoryMessagingClient()

    async def scenario():
        message_id = await client.send_text(CONVERSATION_ID, TextContent(text="hi"))
        await client.send_reaction(CONVERSATION_ID, message_id, ReactionType.LIKE)
        await client.send_reaction(CONVERSATION_ID, message_id, ReactionType.NONE)
        return await client.get_messages(CONVERSATION_ID)

    messages = asyncio.run(scenario())

    assert messages[0]["reaction"] is None


def test_editing_a_ping_is_rejected():
    client = InMemoryMessagingClient()

    async def scenario():
        ping_id = await client.send_ping(CONVERSATION_ID)
        await client.send_edited_text(CONVERSATION_ID, ping_id, TextContent(text="no"))

    with pytest.raises(MessagingClientError):
        asyncio.run(scenario())
