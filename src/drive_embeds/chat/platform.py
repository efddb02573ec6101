"""ChatPlatform implementation backed by a discord.py client."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import discord

from drive_embeds.chat.translate import to_channel_message
from drive_embeds.errors import PlatformError
from drive_embeds.models.messages import ChannelMessage, ShadowPayload

logger = logging.getLogger(__name__)


@contextmanager
def translate_errors(action: str) -> Iterator[None]:
    """Re-raise discord.py HTTP failures as PlatformError."""
    try:
        yield
    except discord.HTTPException as exc:
        raise PlatformError(f"Failed to {action}: {exc}", status=exc.status) from exc


def _to_embeds(payload: ShadowPayload) -> list[discord.Embed]:
    return [discord.Embed.from_dict(data) for data in payload.embed_dicts()]


class DiscordPlatform:
    """Message operations on a logged-in Discord client, addressed by string IDs."""

    def __init__(self, client: discord.Client):
        self._client = client

    @property
    def bot_user_id(self) -> str:
        return str(self._client.user.id)

    async def _channel(self, channel_id: str) -> discord.abc.Messageable:
        channel = self._client.get_channel(int(channel_id))
        if channel is None:
            channel = await self._client.fetch_channel(int(channel_id))
        return channel

    async def _message(self, channel_id: str, message_id: str) -> discord.PartialMessage:
        channel = await self._channel(channel_id)
        return channel.get_partial_message(int(message_id))

    async def fetch_messages_after(
        self, channel_id: str, message_id: str, limit: int
    ) -> list[ChannelMessage]:
        with translate_errors(f"fetch history of channel {channel_id}"):
            channel = await self._channel(channel_id)
            history = [
                message
                async for message in channel.history(
                    limit=limit, after=discord.Object(id=int(message_id))
                )
            ]
        return [to_channel_message(message) for message in history]

    async def send_message(self, channel_id: str, payload: ShadowPayload) -> str:
        with translate_errors(f"send message to channel {channel_id}"):
            channel = await self._channel(channel_id)
            sent = await channel.send(embeds=_to_embeds(payload), silent=payload.silent)
        return str(sent.id)

    async def edit_message(
        self, channel_id: str, message_id: str, payload: ShadowPayload
    ) -> None:
        with translate_errors(f"edit message {message_id}"):
            message = await self._message(channel_id, message_id)
            await message.edit(embeds=_to_embeds(payload))

    async def delete_message(self, channel_id: str, message_id: str) -> None:
        with translate_errors(f"delete message {message_id}"):
            message = await self._message(channel_id, message_id)
            await message.delete()

    async def set_embeds_suppressed(
        self, channel_id: str, message_id: str, suppressed: bool
    ) -> None:
        with translate_errors(f"toggle embed suppression of message {message_id}"):
            message = await self._message(channel_id, message_id)
            await message.edit(suppress=suppressed)
