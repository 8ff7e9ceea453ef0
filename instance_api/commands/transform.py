"""Transform validated requests into messaging content objects."""

import base64
import binascii
import re

from instance_api.errors import ContentTransformError
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
    LinkPreviewImageRequest,
    LinkPreviewRequest,
    LocationRequest,
    MentionRequest,
    QuoteRequest,
    TextFields,
)

SHA256_DIGEST_SIZE = 32

_WHITESPACE = re.compile(r"\s+")
_URL_SAFE = str.maketrans("-_", "+/")


def decode_base64(data: str) -> bytes:
    """Decode base64 text, accepting missing padding and the URL-safe alphabet.

    Raises:
        ContentTransformError: If the text is not base64
    """
    cleaned = _WHITESPACE.sub("", data).translate(_URL_SAFE).rstrip("=")
    cleaned += "=" * (-len(cleaned) % 4)
    try:
        return base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ContentTransformError(f"Invalid base64 image data: {e}") from e


def decode_sha256_hex(digest: str) -> bytes:
    """Convert a 64 character hex digest into its 32 raw bytes.

    Raises:
        ContentTransformError: If the digest is not hex or not 32 bytes long
    """
    try:
        raw = bytes.fromhex(digest)
    except ValueError as e:
        raise ContentTransformError(f"Invalid SHA-256 digest: {e}") from e
    if len(raw) != SHA256_DIGEST_SIZE:
        raise ContentTransformError(
            f"SHA-256 digest must be {SHA256_DIGEST_SIZE} bytes, got {len(raw)}"
        )
    return raw


def build_image(image: LinkPreviewImageRequest) -> ImageContent:
    return ImageContent(
        data=decode_base64(image.data),
        width=image.width,
        height=image.height,
        type=image.type,
    )


def build_link_preview(preview: LinkPreviewRequest) -> LinkPreviewContent:
    tweet = None
    if preview.tweet is not None:
        tweet = TweetContent(author=preview.tweet.author, username=preview.tweet.username)

    return LinkPreviewContent(
        permanent_url=preview.permanent_url,
        url=preview.url,
        url_offset=preview.url_offset,
        title=preview.title,
        summary=preview.summary,
        tweet=tweet,
        image=build_image(preview.image) if preview.image is not None else None,
    )


def build_quote(quote: QuoteRequest) -> QuoteContent:
    return QuoteContent(
        quoted_message_id=quote.quoted_message_id,
        quoted_message_sha256=decode_sha256_hex(quote.quoted_message_sha256),
    )


def build_mentions(mentions: list[MentionRequest] | None) -> tuple[MentionContent, ...]:
    return tuple(
        MentionContent(user_id=m.user_id, start=m.start, length=m.length) for m in mentions or []
    )


def build_text_content(request: TextFields) -> TextContent:
    """Build text content for a send or an edit.

    Decodes the link preview image and the quote digest; mentions pass
    through unchanged.
    """
    return TextContent(
        text=request.text,
        link_preview=(
            build_link_preview(request.link_preview) if request.link_preview is not None else None
        ),
        mentions=build_mentions(request.mentions),
        quote=build_quote(request.quote) if request.quote is not None else None,
        expects_read_confirmation=request.expects_read_confirmation,
    )


def build_location_content(request: LocationRequest) -> LocationContent:
    return LocationContent(
        latitude=request.latitude,
        longitude=request.longitude,
        name=request.location_name,
        zoom=request.zoom,
        expects_read_confirmation=request.expects_read_confirmation,
    )
