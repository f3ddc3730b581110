"""Read-only view over an inbound GroupMe message (webhook delivery or message-list entry)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Optional


@dataclass(frozen=True, slots=True)
class Message:
    """Snapshot of a remote message record.

    Nothing is validated: fields missing from the payload are ``None``
    (``attachments`` defaults to an empty list).
    """

    id: Optional[str] = None
    group_id: Optional[str] = None
    name: Optional[str] = None
    sender_id: Optional[str] = None
    sender_type: Optional[str] = None  # "user" | "bot" | "system"
    user_id: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Any = None  # epoch seconds as sent; see ``created``
    source_guid: Optional[str] = None
    is_system: Optional[bool] = None
    text: Optional[str] = None
    attachments: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> Message:
        return cls(
            id=data.get("id"),
            group_id=data.get("group_id"),
            name=data.get("name"),
            sender_id=data.get("sender_id"),
            sender_type=data.get("sender_type"),
            user_id=data.get("user_id"),
            avatar_url=data.get("avatar_url"),
            created_at=data.get("created_at"),
            source_guid=data.get("source_guid"),
            is_system=data.get("system"),
            text=data.get("text"),
            attachments=list(data.get("attachments") or []),
        )

    @property
    def created(self) -> Optional[datetime]:
        try:
            return datetime.fromtimestamp(int(self.created_at), tz=timezone.utc)
        except (TypeError, ValueError, OverflowError, OSError):
            return None

    def is_from_user(self) -> bool:
        """True only for messages sent by a human member (not bots or system notices)."""
        return self.sender_type == "user"

    def starts_with(self, prefix: str) -> bool:
        return self.text is not None and self.text.startswith(prefix)
