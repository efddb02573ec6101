"""Conversion from discord.py objects to the bot's own message models."""

import discord

from drive_embeds.models.events import MessageEdited, SuppressionToggled
from drive_embeds.models.messages import ChannelMessage, SourceMessage


def to_source_message(message: discord.Message) -> SourceMessage:
    """Snapshot the parts of a Discord message the synchronizer reads."""
    return SourceMessage(
        id=str(message.id),
        channel_id=str(message.channel.id),
        guild_id=str(message.guild.id) if message.guild else None,
        author_id=str(message.author.id),
        content=message.content,
        created_at=message.created_at,
        edited_at=message.edited_at,
        embeds_suppressed=message.flags.suppress_embeds,
        preview_urls=[embed.url for embed in message.embeds],
    )


def to_channel_message(message: discord.Message) -> ChannelMessage:
    return ChannelMessage(
        id=str(message.id),
        channel_id=str(message.channel.id),
        author_id=str(message.author.id),
        created_at=message.created_at,
        embeds=[embed.to_dict() for embed in message.embeds],
    )


def classify_edit(
    before: SourceMessage | None, after: SourceMessage
) -> MessageEdited | SuppressionToggled:
    """Tell a real content edit apart from a flip of the suppression flag.

    Without a cached ``before`` state the edit is treated as a content edit.
    """
    if (
        before is not None
        and before.content == after.content
        and before.embeds_suppressed != after.embeds_suppressed
    ):
        return SuppressionToggled(message=after)
    return MessageEdited(message=after)
