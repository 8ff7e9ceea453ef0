"""Request descriptors and content models."""

from instance_api.models.content import (
    ImageContent,
    LinkPreviewContent,
    LocationContent,
    MentionContent,
    QuoteContent,
    TextContent,
    TweetContent,
)
from instance_api.models.requests import (
    COMMAND_SCHEMAS,
    ArchiveRequest,
    CommandModel,
    ConversationRequest,
    DeletionRequest,
    LinkPreviewImageRequest,
    LinkPreviewRequest,
    LocationRequest,
    MentionRequest,
    MessageUpdateRequest,
    MuteRequest,
    PingRequest,
    QuoteRequest,
    ReactionRequest,
    ReactionType,
    TextRequest,
    TweetRequest,
)

__all__ = [
    "COMMAND_SCHEMAS",
    "ArchiveRequest",
    "CommandModel",
    "ConversationRequest",
    "DeletionRequest",
    "ImageContent",
    "LinkPreviewContent",
    "LinkPreviewImageRequest",
    "LinkPreviewRequest",
    "LocationContent",
    "LocationRequest",
    "MentionContent",
    "MentionRequest",
    "MessageUpdateRequest",
    "MuteRequest",
    "PingRequest",
    "QuoteContent",
    "QuoteRequest",
    "ReactionRequest",
    "ReactionType",
    "TextContent",
    "TextRequest",
    "TweetContent",
    "TweetRequest",
]
