"""Application commands registered to the configured guild."""

import logging
from typing import TYPE_CHECKING

import discord
from discord import app_commands

from drive_embeds.chat.translate import to_source_message
from drive_embeds.models.events import RefreshRequested

if TYPE_CHECKING:
    from drive_embeds.chat.bot import DriveEmbedsBot

logger = logging.getLogger(__name__)

UPDATE_EMBEDS_COMMAND = "Update Embeds"


def register_commands(bot: "DriveEmbedsBot") -> None:
    """Add the bot's commands to its command tree.

    Commands are guild commands so they never show up in DMs or other guilds.
    """

    @app_commands.context_menu(name=UPDATE_EMBEDS_COMMAND)
    async def update_embeds(interaction: discord.Interaction, message: discord.Message) -> None:
        """Rebuild the previews of a message, e.g. after a file was shared with the bot."""
        if str(interaction.guild_id) != bot.guild_id:
            logger.warning(
                "Command %s was triggered in %s",
                UPDATE_EMBEDS_COMMAND,
                "an unauthorized guild" if interaction.guild_id else "DM",
            )
            return

        await interaction.response.defer(ephemeral=True, thinking=True)
        await bot.dispatch_event(RefreshRequested(message=to_source_message(message)))
        await interaction.delete_original_response()

    bot.tree.add_command(update_embeds, guild=discord.Object(id=int(bot.guild_id)))
