"""Discord client translating gateway events into synchronizer events."""

import logging

import discord
from discord import app_commands

from drive_embeds.chat.checks import run_startup_checks
from drive_embeds.chat.commands import register_commands
from drive_embeds.chat.guards import is_valid_request
from drive_embeds.chat.platform import DiscordPlatform
from drive_embeds.chat.translate import classify_edit, to_source_message
from drive_embeds.drive.resolver import FileMetadataProvider
from drive_embeds.models.events import (
    MessageCreated,
    MessageDeleted,
    MessagesBulkDeleted,
    SyncEvent,
)
from drive_embeds.sync.orchestrator import EmbedSynchronizer

logger = logging.getLogger(__name__)


class DriveEmbedsBot(discord.Client):
    """Watches one guild for Drive links and keeps their shadow messages in sync."""

    def __init__(self, guild_id: str, files: FileMetadataProvider):
        intents = discord.Intents.default()
        intents.message_content = True  # Links live in message content
        super().__init__(
            intents=intents,
            activity=discord.Activity(type=discord.ActivityType.watching, name="Google Drive"),
        )
        self.guild_id = guild_id
        self.platform = DiscordPlatform(self)
        self.synchronizer = EmbedSynchronizer(self.platform, files)
        self.tree = app_commands.CommandTree(self)
        register_commands(self)

    async def setup_hook(self) -> None:
        synced = await self.tree.sync(guild=discord.Object(id=int(self.guild_id)))
        logger.info(
            "Registered application commands: %s",
            ", ".join(command.name for command in synced),
        )

    async def on_ready(self) -> None:
        logger.info("Discord bot is ready, logged in as %s", self.user)
        await run_startup_checks(self, self.guild_id)

    def _is_valid(self, author_id: str | None, guild_id: int | None) -> bool:
        return is_valid_request(
            author_id,
            str(guild_id) if guild_id is not None else None,
            str(self.user.id),
            self.guild_id,
        )

    async def dispatch_event(self, event: SyncEvent) -> None:
        """Run the synchronizer for one event, logging any failure.

        Side effects already committed are not rolled back; the next event
        for the message re-derives everything from channel content.
        """
        try:
            await self.synchronizer.handle(event)
        except Exception as exc:
            logger.error("Failed to handle %s event: %s", event.kind, exc, exc_info=True)

    async def on_message(self, message: discord.Message) -> None:
        guild_id = message.guild.id if message.guild else None
        if not self._is_valid(str(message.author.id), guild_id):
            return
        await self.dispatch_event(MessageCreated(message=to_source_message(message)))

    async def on_raw_message_edit(self, payload: discord.RawMessageUpdateEvent) -> None:
        # Link previews arrive as an edit right after creation without an edit timestamp
        if payload.data.get("edited_timestamp") is None:
            return
        author = payload.data.get("author") or {}
        if not self._is_valid(author.get("id"), payload.guild_id):
            return

        channel = self.get_channel(payload.channel_id) or await self.fetch_channel(
            payload.channel_id
        )
        try:
            message = await channel.fetch_message(payload.message_id)
        except discord.NotFound:
            logger.debug("Edited message %s is already gone", payload.message_id)
            return

        before = (
            to_source_message(payload.cached_message)
            if payload.cached_message is not None
            else None
        )
        await self.dispatch_event(classify_edit(before, to_source_message(message)))

    async def on_raw_message_delete(self, payload: discord.RawMessageDeleteEvent) -> None:
        cached = payload.cached_message
        author_id = str(cached.author.id) if cached is not None else None
        if not self._is_valid(author_id, payload.guild_id):
            return
        await self.dispatch_event(
            MessageDeleted(
                channel_id=str(payload.channel_id),
                message_id=str(payload.message_id),
            )
        )

    async def on_raw_bulk_message_delete(
        self, payload: discord.RawBulkMessageDeleteEvent
    ) -> None:
        if not self._is_valid(None, payload.guild_id):
            return
        own = {m.id for m in payload.cached_messages if m.author.id == self.user.id}
        message_ids = [str(i) for i in sorted(payload.message_ids) if i not in own]
        await self.dispatch_event(
            MessagesBulkDeleted(channel_id=str(payload.channel_id), message_ids=message_ids)
        )
