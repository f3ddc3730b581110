"""Tests for attachment and message models."""

from __future__ import annotations

import dataclasses
from datetime import datetime, timezone

import httpx
import pytest

from groupme_bot.api.errors import UploadError
from groupme_bot.models.attachments import (
    ImageAttachment,
    LocationAttachment,
    infer_content_type,
    serialize_attachment,
    serialize_attachments,
)
from groupme_bot.models.message import Message
from tests.helpers import json_response

WEBHOOK_PAYLOAD = {
    "attachments": [{"type": "image", "url": "https://i.groupme.com/123"}],
    "avatar_url": "https://i.groupme.com/avatar",
    "created_at": 1302623328,
    "group_id": "1234567890",
    "id": "1234567890",
    "name": "John",
    "sender_id": "12345",
    "sender_type": "user",
    "source_guid": "GUID",
    "system": False,
    "text": "!ping hello",
    "user_id": "1234567890",
}


@pytest.mark.parametrize(
    "path, expected",
    [
        ("photo.png", "image/png"),
        ("photo.jpg", "image/jpeg"),
        ("photo.jpeg", "image/jpeg"),
        ("anim.gif", "image/gif"),
        ("PHOTO.PNG", "image/png"),
        ("notes.txt", "application/octet-stream"),
        ("no_extension", "application/octet-stream"),
    ],
)
def test_infer_content_type(path, expected):
    assert infer_content_type(path) == expected


def test_location_attachment_stringifies_coordinates():
    loc = LocationAttachment(40.7128, -74, "NYC")

    assert loc.type == "location"
    assert loc.to_dict() == {"type": "location", "lat": "40.7128", "lng": "-74", "name": "NYC"}


def test_attachments_are_immutable():
    image = ImageAttachment("https://i.groupme.com/x")

    with pytest.raises(dataclasses.FrozenInstanceError):
        image.url = "https://elsewhere"


def test_serialize_passes_dicts_through():
    raw = {"type": "emoji", "placeholder": "?", "charmap": [[1, 2]]}

    assert serialize_attachment(raw) is raw
    assert serialize_attachments(None) == []
    assert serialize_attachments([ImageAttachment("u"), raw]) == [{"type": "image", "url": "u"}, raw]


async def test_image_from_file_uploads_png(make_client, tmp_path):
    image_path = tmp_path / "cat.png"
    image_path.write_bytes(b"\x89PNG\r\n")
    client, transport = make_client(lambda r: json_response(200, {"payload": {"url": "https://i.groupme.com/cat"}}))

    image = await ImageAttachment.from_file(client, image_path)

    assert image == ImageAttachment("https://i.groupme.com/cat")
    assert len(transport.requests) == 1
    assert transport.requests[0].headers["content-type"] == "image/png"
    assert transport.requests[0].content == b"\x89PNG\r\n"


async def test_image_from_file_explicit_content_type(make_client, tmp_path):
    image_path = tmp_path / "blob.bin"
    image_path.write_bytes(b"data")
    client, transport = make_client(lambda r: json_response(200, {"payload": {"url": "u"}}))

    await ImageAttachment.from_file(client, image_path, content_type="image/webp")

    assert transport.requests[0].headers["content-type"] == "image/webp"


async def test_image_from_missing_file_raises_os_error(make_client, tmp_path):
    client, transport = make_client(lambda r: json_response(200, {}))

    with pytest.raises(FileNotFoundError):
        await ImageAttachment.from_file(client, tmp_path / "missing.png")
    assert transport.requests == []


async def test_image_from_file_propagates_upload_error(make_client, tmp_path):
    image_path = tmp_path / "cat.gif"
    image_path.write_bytes(b"GIF89a")
    client, _ = make_client(lambda r: httpx.Response(500))

    with pytest.raises(UploadError):
        await ImageAttachment.from_file(client, image_path)


def test_message_from_webhook_payload():
    msg = Message.from_payload(WEBHOOK_PAYLOAD)

    assert msg.id == "1234567890"
    assert msg.sender_type == "user"
    assert msg.is_system is False
    assert msg.attachments == [{"type": "image", "url": "https://i.groupme.com/123"}]
    assert msg.created == datetime(2011, 4, 12, 15, 48, 48, tzinfo=timezone.utc)


def test_message_missing_fields_are_none():
    msg = Message.from_payload({})

    assert msg.text is None
    assert msg.group_id is None
    assert msg.created is None
    assert msg.attachments == []


@pytest.mark.parametrize("created_at", ["1302623328", 1302623328.0])
def test_created_accepts_numeric_strings_and_floats(created_at):
    assert Message.from_payload({"created_at": created_at}).created == datetime(
        2011, 4, 12, 15, 48, 48, tzinfo=timezone.utc
    )


@pytest.mark.parametrize("created_at", ["yesterday", [], {"t": 1}])
def test_created_malformed_is_none(created_at):
    assert Message.from_payload({"created_at": created_at}).created is None


@pytest.mark.parametrize(
    "sender_type, expected",
    [("user", True), ("bot", False), ("system", False), (None, False)],
)
def test_is_from_user(sender_type, expected):
    payload = {"sender_type": sender_type} if sender_type else {}

    assert Message.from_payload(payload).is_from_user() is expected


def test_starts_with():
    msg = Message.from_payload(WEBHOOK_PAYLOAD)

    assert msg.starts_with("!ping")
    assert msg.starts_with("")
    assert not msg.starts_with("ping")


def test_starts_with_absent_text_is_false():
    assert Message.from_payload({"text": None}).starts_with("!") is False
    assert Message.from_payload({}).starts_with("") is False
