"""Filters deciding which Discord events the bot acts on."""

import logging

logger = logging.getLogger(__name__)


def is_valid_request(
    author_id: str | None,
    guild_id: str | None,
    bot_user_id: str,
    allowed_guild_id: str,
) -> bool:
    """Return True if an event should be processed.

    Filters:
    1. Own messages -> skip (author may be unknown for uncached deletes)
    2. DMs and guilds other than the configured one -> skip
    """
    if author_id is not None and author_id == bot_user_id:
        return False

    if guild_id != allowed_guild_id:
        logger.warning(
            "Message event was sent in %s",
            "DM" if guild_id is None else f"an unauthorized guild {guild_id}",
        )
        return False

    return True
