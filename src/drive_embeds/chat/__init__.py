"""Discord ingress: client, event translation, commands, and startup checks."""

from drive_embeds.chat.bot import DriveEmbedsBot
from drive_embeds.chat.guards import is_valid_request
from drive_embeds.chat.platform import DiscordPlatform

__all__ = [
    "DiscordPlatform",
    "DriveEmbedsBot",
    "is_valid_request",
]
