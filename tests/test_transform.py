from __future__ import annotations

import base64
import hashlib

import pytest

from conftest import CONVERSATION_ID, MESSAGE_ID, USER_ID
from instance_api.commands.transform import (
    build_link_preview,
    build_location_content,
    build_quote,
    build_text_content,
    decode_base64,
    decode_sha256_hex,
)
from instance_api.errors import ContentTransformError
from instance_api.models.requests import (
    LinkPreviewRequest,
    LocationRequest,
    MessageUpdateRequest,
    QuoteRequest,
    TextRequest,
)

IMAGE_BYTES = b"\x89PNG\r\n\x1a\n" + bytes(range(256))


def test_sha256_hex_decodes_to_32_bytes_and_round_trips():
    digest = hashlib.sha256(b"original message").hexdigest()

    raw = decode_sha256_hex(digest)

    assert len(raw) == 32
    assert raw.hex() == digest


def test_uppercase_digest_round_trips_case_insensitively():
    digest = hashlib.sha256(b"x").hexdigest().upper()

    assert decode_sha256_hex(digest).hex() == digest.lower()


@pytest.mark.parametrize("digest", ["zz" * 32, "ab" * 16, "abc"])
def test_bad_digest_raises_transform_error(digest):
    with pytest.raises(ContentTransformError):
        decode_sha256_hex(digest)


def test_base64_decodes_exact_bytes():
    encoded = base64.b64encode(IMAGE_BYTES).decode()

    assert decode_base64(encoded) == IMAGE_BYTES


def test_base64_without_padding_or_with_whitespace():
    encoded = base64.b64encode(b"abcd").decode()  # "YWJjZA=="

    assert decode_base64(encoded.rstrip("=")) == b"abcd"
    assert decode_base64("YWJj\nZA==") == b"abcd"


def test_url_safe_base64_is_accepted():
    encoded = base64.urlsafe_b64encode(b"\xfb\xff\xfe").decode()

    assert decode_base64(encoded) == b"\xfb\xff\xfe"


@pytest.mark.parametrize("data", ["a", "****", "YWJjZA=*"])
def test_invalid_base64_raises_transform_error(data):
    with pytest.raises(ContentTransformError):
        decode_base64(data)


def test_link_preview_image_is_decoded():
    preview = LinkPreviewRequest.model_validate(
        {
            "permanentUrl": "https://example.com/a",
            "url": "example.com/a",
            "urlOffset": 6,
            "title": "Example",
            "image": {
                "data": base64.b64encode(IMAGE_BYTES).decode(),
                "width": 640,
                "height": 480,
                "type": "image/png",
            },
        }
    )

    content = build_link_preview(preview)

    assert content.permanent_url == "https://example.com/a"
    assert content.url == "example.com/a"
    assert content.url_offset == 6
    assert content.title == "Example"
    assert content.summary is None
    assert content.tweet is None
    assert content.image is not None
    assert content.image.data == IMAGE_BYTES
    assert len(content.image.data) == len(IMAGE_BYTES)
    assert (content.image.width, content.image.height) == (640, 480)
    assert content.image.type == "image/png"


def test_link_preview_without_image_has_none():
    preview = LinkPreviewRequest.model_validate(
        {
            "permanentUrl": "https://twitter.com/x/status/1",
            "url": "https://twitter.com/x/status/1",
            "urlOffset": 0,
            "tweet": {"author": "X", "username": "x"},
        }
    )

    content = build_link_preview(preview)

    assert content.image is None
    assert content.tweet is not None
    assert content.tweet.username == "x"


def test_quote_keeps_message_id_and_decodes_digest():
    digest = "0f" * 32
    quote = QuoteRequest.model_validate(
        {"quotedMessageId": MESSAGE_ID, "quotedMessageSha256": digest}
    )

    content = build_quote(quote)

    assert content.quoted_message_id == MESSAGE_ID
    assert content.quoted_message_sha256 == bytes([0x0F] * 32)


def test_text_content_without_optional_parts():
    request = TextRequest.model_validate({"conversationId": CONVERSATION_ID, "text": "hi"})

    content = build_text_content(request)

    assert content.text == "hi"
    assert content.link_preview is None
    assert content.quote is None
    assert content.mentions == ()
    assert content.expects_read_confirmation is False


def test_text_content_passes_mentions_through():
    request = TextRequest.model_validate(
        {
            "conversationId": CONVERSATION_ID,
            "text": "hello @bob",
            "expectsReadConfirmation": True,
            "mentions": [{"userId": USER_ID, "start": 6, "length": 4}],
        }
    )

    content = build_text_content(request)

    assert len(content.mentions) == 1
    mention = content.mentions[0]
    assert (mention.user_id, mention.start, mention.length) == (USER_ID, 6, 4)
    assert content.expects_read_confirmation is True


def test_edit_content_uses_the_same_pipeline():
    request = MessageUpdateRequest.model_validate(
        {
            "conversationId": CONVERSATION_ID,
            "firstMessageId": MESSAGE_ID,
            "text": "edited",
            "quote": {"quotedMessageId": MESSAGE_ID, "quotedMessageSha256": "ff" * 32},
        }
    )

    content = build_text_content(request)

    assert content.text == "edited"
    assert content.quote is not None
    assert content.quote.quoted_message_sha256 == b"\xff" * 32


def test_location_maps_location_name_to_name():
    request = LocationRequest.model_validate(
        {
            "conversationId": CONVERSATION_ID,
            "latitude": 52.52,
            "longitude": 13.405,
            "locationName": "Berlin",
            "zoom": 10,
            "expectsReadConfirmation": True,
        }
    )

    location = build_location_content(request)

    assert location.latitude == 52.52
    assert location.longitude == 13.405
    assert location.name == "Berlin"
    assert location.zoom == 10
    assert location.expects_read_confirmation is True


def test_content_objects_are_immutable():
    request = TextRequest.model_validate({"conversationId": CONVERSATION_ID, "text": "hi"})
    content = build_text_content(request)

    with pytest.raises(AttributeError):
        content.text = "changed"
