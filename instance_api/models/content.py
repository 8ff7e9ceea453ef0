"""Content objects handed to the messaging client."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ImageContent:
    """Decoded image bytes with their declared dimensions and MIME type."""

    data: bytes
    width: float
    height: float
    type: str


@dataclass(frozen=True)
class TweetContent:
    author: str | None = None
    username: str | None = None


@dataclass(frozen=True)
class LinkPreviewContent:
    permanent_url: str
    url: str
    url_offset: float
    title: str | None = None
    summary: str | None = None
    tweet: TweetContent | None = None
    image: ImageContent | None = None


@dataclass(frozen=True)
class MentionContent:
    user_id: str
    start: float
    length: float


@dataclass(frozen=True)
class QuoteContent:
    """Quoted message reference; the digest is the raw 32-byte SHA-256."""

    quoted_message_id: str
    quoted_message_sha256: bytes


@dataclass(frozen=True)
class LocationContent:
    latitude: float
    longitude: float
    name: str | None = None
    zoom: float | None = None
    expects_read_confirmation: bool = False


@dataclass(frozen=True)
class TextContent:
    """Everything a text message or an edit carries besides its timer."""

    text: str
    link_preview: LinkPreviewContent | None = None
    mentions: tuple[MentionContent, ...] = field(default_factory=tuple)
    quote: QuoteContent | None = None
    expects_read_confirmation: bool = False
