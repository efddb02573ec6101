"""Startup sanity checks run once the Discord client is ready.

Problems are logged rather than raised: the bot keeps running so the
health endpoint stays reachable while the deployment is being fixed.
"""

import logging

import discord

logger = logging.getLogger(__name__)

REQUIRED_PERMISSIONS = discord.Permissions(
    view_channel=True,
    send_messages=True,
    send_messages_in_threads=True,
    embed_links=True,  # Shadow messages are embeds
    read_message_history=True,  # Shadow lookup scans history
    manage_messages=True,  # Suppressing previews on other users' messages
)


def missing_permissions(granted: discord.Permissions) -> list[str]:
    """Return the names of required permissions not in ``granted``."""
    return [
        name
        for name, required in REQUIRED_PERMISSIONS
        if required and not getattr(granted, name)
    ]


def authorization_url(client_id: int, guild_id: str) -> str:
    """Invite URL adding the bot to the guild with the required permissions."""
    return discord.utils.oauth_url(
        client_id,
        permissions=REQUIRED_PERMISSIONS,
        guild=discord.Object(id=int(guild_id)),
        scopes=("bot", "applications.commands"),
    )


async def run_startup_checks(client: discord.Client, guild_id: str) -> None:
    """Check visibility, guild membership and permissions; leave other guilds."""
    application = await client.application_info()
    settings_url = f"https://discord.com/developers/applications/{application.id}/bot"
    if application.bot_public:
        logger.warning(
            "Bot is public (can be added by anyone). Consider making it private from %s",
            settings_url,
        )

    invite = authorization_url(client.user.id, guild_id)
    guild = client.get_guild(int(guild_id))
    if guild is None:
        logger.error(
            "Bot is not in the target guild %s. Follow this link to add it: %s",
            guild_id,
            invite,
        )
    else:
        missing = missing_permissions(guild.me.guild_permissions)
        if missing:
            logger.error(
                "Bot is missing required permissions: %s. Follow this link to update them: %s",
                ", ".join(missing),
                invite,
            )

    for other in client.guilds:
        if str(other.id) != guild_id:
            await other.leave()
            logger.warning("Left unauthorized guild %s (%s)", other.name, other.id)
