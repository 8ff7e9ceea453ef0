"""Request descriptors for instance commands using Pydantic."""

import re
from enum import Enum
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Strict, StrictBool, StringConstraints
from pydantic.alias_generators import to_camel

UUID_PATTERN = re.compile(r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}")
SHA256_HEX_PATTERN = re.compile(r"[A-Fa-f0-9]{64}")


def _check_uuid(value: str) -> str:
    if not UUID_PATTERN.fullmatch(value):
        raise ValueError("must be a valid GUID")
    return value


def _check_sha256_hex(value: str) -> str:
    if not SHA256_HEX_PATTERN.fullmatch(value):
        raise ValueError("must be a 64 character hexadecimal string")
    return value


NonEmptyStr = Annotated[str, StringConstraints(min_length=1)]
UuidStr = Annotated[str, AfterValidator(_check_uuid)]
Sha256HexStr = Annotated[str, AfterValidator(_check_sha256_hex)]
Number = Annotated[float, Strict()]


class ReactionType(str, Enum):
    """Reactions an instance can place on a message."""

    LIKE = "LIKE"
    NONE = "NONE"


class CommandModel(BaseModel):
    """Base for request bodies; wire names are camelCase, unknown keys are ignored.

    Booleans and numbers are not coerced from other JSON types, and numbers must be finite.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore", allow_inf_nan=False
    )


# Nested content
class LinkPreviewImageRequest(CommandModel):
    """Link preview image carried as base64 text."""

    data: NonEmptyStr
    height: Number
    type: NonEmptyStr
    width: Number


class TweetRequest(CommandModel):
    author: NonEmptyStr | None = None
    username: NonEmptyStr | None = None


class LinkPreviewRequest(CommandModel):
    """Link preview attached to a text message."""

    image: LinkPreviewImageRequest | None = None
    permanent_url: NonEmptyStr
    summary: NonEmptyStr | None = None
    title: NonEmptyStr | None = None
    tweet: TweetRequest | None = None
    url: NonEmptyStr
    url_offset: Number


class MentionRequest(CommandModel):
    length: Number
    start: Number
    user_id: UuidStr


class QuoteRequest(CommandModel):
    """Quote of an earlier message, identified by id and hex SHA-256 digest."""

    quoted_message_id: UuidStr
    quoted_message_sha256: Sha256HexStr


# Commands
class ConversationRequest(CommandModel):
    """Request that only targets a conversation (clear, getMessages)."""

    conversation_id: UuidStr


class ArchiveRequest(ConversationRequest):
    archive: StrictBool


class MuteRequest(ConversationRequest):
    mute: StrictBool


class DeletionRequest(ConversationRequest):
    """Used for both local and everywhere deletion."""

    message_id: UuidStr


class PingRequest(ConversationRequest):
    expects_read_confirmation: StrictBool = False
    message_timer: Number = 0


class LocationRequest(ConversationRequest):
    expects_read_confirmation: StrictBool = False
    latitude: Number
    location_name: NonEmptyStr | None = None
    longitude: Number
    message_timer: Number = 0
    zoom: Number | None = None


class TextFields(ConversationRequest):
    expects_read_confirmation: StrictBool = False
    link_preview: LinkPreviewRequest | None = None
    mentions: list[MentionRequest] | None = None
    quote: QuoteRequest | None = None
    text: NonEmptyStr


class TextRequest(TextFields):
    message_timer: Number = 0


class MessageUpdateRequest(TextFields):
    """Edit of an earlier text message; edits carry no timer."""

    first_message_id: UuidStr


class ReactionRequest(ConversationRequest):
    original_message_id: UuidStr
    type: ReactionType


# Schema registry: one descriptor per command name
COMMAND_SCHEMAS: dict[str, type[CommandModel]] = {
    "archive": ArchiveRequest,
    "mute": MuteRequest,
    "clear": ConversationRequest,
    "delete": DeletionRequest,
    "deleteEverywhere": DeletionRequest,
    "getMessages": ConversationRequest,
    "sendLocation": LocationRequest,
    "sendText": TextRequest,
    "sendPing": PingRequest,
    "sendReaction": ReactionRequest,
    "updateText": MessageUpdateRequest,
}
