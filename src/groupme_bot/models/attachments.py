"""Outbound message attachments (location pins and hosted images)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal, Optional, Union, assert_never

from groupme_bot.log import get_logger

if TYPE_CHECKING:
    from groupme_bot.api.client import GroupMeClient

logger = get_logger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"

_CONTENT_TYPES: dict[str, str] = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
}


def infer_content_type(path: str | Path) -> str:
    """Guess an image content-type from the file extension."""
    return _CONTENT_TYPES.get(Path(path).suffix.lower(), DEFAULT_CONTENT_TYPE)


@dataclass(frozen=True, slots=True)
class LocationAttachment:
    """A named map pin. Coordinates are kept as strings, which is what the API expects."""

    lat: str
    lng: str
    name: str
    type: Literal["location"] = field(default="location", init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "lat", str(self.lat))
        object.__setattr__(self, "lng", str(self.lng))

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "lat": self.lat, "lng": self.lng, "name": self.name}


@dataclass(frozen=True, slots=True)
class ImageAttachment:
    """An image already hosted on the GroupMe image service."""

    url: str
    type: Literal["image"] = field(default="image", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "url": self.url}

    @classmethod
    async def from_file(
        cls,
        client: GroupMeClient,
        path: str | Path,
        content_type: Optional[str] = None,
    ) -> ImageAttachment:
        """Upload a local image and wrap the hosted URL.

        The content-type is inferred from the extension when not given.
        Read failures surface as the underlying ``OSError``.
        """
        with open(path, "rb") as f:
            data = f.read()

        content_type = content_type or infer_content_type(path)
        url = await client.upload_picture(data, content_type)
        logger.debug("image_attachment_created", path=str(path), content_type=content_type)
        return cls(url)


Attachment = Union[LocationAttachment, ImageAttachment]


def serialize_attachment(attachment: Attachment | dict[str, Any]) -> dict[str, Any]:
    """Convert an attachment to its wire dictionary. Dicts pass through unchanged."""
    if isinstance(attachment, dict):
        return attachment
    match attachment:
        case LocationAttachment():
            return attachment.to_dict()
        case ImageAttachment():
            return attachment.to_dict()
        case _:
            assert_never(attachment)


def serialize_attachments(attachments: list[Attachment | dict[str, Any]] | None) -> list[dict[str, Any]]:
    return [serialize_attachment(a) for a in attachments or []]
