"""Bot facade: binds one bot identifier to the send operations."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional, Union

from groupme_bot.api.client import GroupMeClient
from groupme_bot.api.endpoints import BotOptions
from groupme_bot.log import get_logger
from groupme_bot.models.attachments import Attachment, ImageAttachment, serialize_attachments

logger = get_logger(__name__)


class Bot:
    """A GroupMe bot posting into its group.

    Constructing a ``Bot`` never contacts the API and never checks that the
    remote bot exists; dropping it never deletes the remote bot.
    """

    def __init__(self, client: GroupMeClient, bot_id: Union[str, int]):
        if not bot_id:
            raise ValueError("Bot ID is required")
        self._client = client
        self._bot_id = bot_id

    @property
    def bot_id(self) -> Union[str, int]:
        return self._bot_id

    def __repr__(self) -> str:
        return f"Bot(bot_id={self._bot_id!r})"

    @classmethod
    async def create(
        cls,
        client: GroupMeClient,
        name: str,
        group_id: Union[str, int],
        options: Optional[Union[BotOptions, Mapping[str, Any]]] = None,
    ) -> Bot:
        """Create a bot remotely and return a facade bound to its new ID.

        ``options`` may set ``avatar_url``, ``callback_url``, ``dm_notification``
        and ``active`` (the latter is needed for callback deliveries).
        """
        response = await client.create_bot(name, group_id, options)
        bot_id = response["bot"]["bot_id"]
        logger.info("bot_created", bot_id=bot_id, group_id=group_id)
        return cls(client, bot_id)

    async def send_message(self, text: str, attachments: Optional[list[Attachment]] = None) -> Any:
        """Post a message to the bot's group."""
        result = await self._client.post_bot(self._bot_id, text, serialize_attachments(attachments))
        logger.debug("bot_message_sent", bot_id=self._bot_id, attachment_count=len(attachments or []))
        return result

    async def send_image(self, text: str, image_path: Union[str, Path]) -> Any:
        """Upload a local image and post it with ``text`` as the caption."""
        image = await ImageAttachment.from_file(self._client, image_path)
        return await self.send_message(text, [image])

    async def destroy(self) -> Any:
        """Delete the remote bot. This object stays usable but further posts will fail remotely."""
        result = await self._client.destroy_bot(self._bot_id)
        logger.info("bot_destroyed", bot_id=self._bot_id)
        return result
