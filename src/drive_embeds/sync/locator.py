"""Find the shadow message of a source message from channel history.

The shadow is always posted after its source, so only the messages right
after the source are scanned. Bot messages whose first embed title decodes
to the source ID are shadows of that source.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_result,
    stop_after_attempt,
    wait_fixed,
)

from drive_embeds.models.messages import ChannelMessage
from drive_embeds.sync.invisible import decode_appended
from drive_embeds.sync.platform import ChatPlatform

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 10
RETRY_INTERVAL_SECONDS = 1.0

Sleep = Callable[[float], Awaitable[None]]


def is_shadow_of(message: ChannelMessage, source_id: str) -> bool:
    """Return True if the message's first embed title carries ``source_id``."""
    title = message.first_embed_title
    if not title:
        return False
    return decode_appended(title) == source_id


class ShadowLocator:
    """Looks up shadow messages, optionally retrying while one may be in flight."""

    def __init__(self, chat: ChatPlatform, sleep: Sleep = asyncio.sleep):
        self._chat = chat
        self._sleep = sleep

    async def _scan(self, channel_id: str, source_id: str) -> ChannelMessage | None:
        history = await self._chat.fetch_messages_after(channel_id, source_id, HISTORY_LIMIT)
        bot_user_id = self._chat.bot_user_id
        # Oldest first: the shadow nearest to the source wins
        candidates = sorted(
            (m for m in history if m.author_id == bot_user_id),
            key=lambda m: m.created_at,
        )
        return next((m for m in candidates if is_shadow_of(m, source_id)), None)

    async def locate(
        self, channel_id: str, source_id: str, retries: int = 0
    ) -> ChannelMessage | None:
        """Return the shadow message of ``source_id``, or None.

        When nothing is found, scans again up to ``retries`` more times,
        RETRY_INTERVAL_SECONDS apart. History and decoding errors are raised
        immediately.
        """
        retrying = AsyncRetrying(
            retry=retry_if_result(lambda found: found is None),
            stop=stop_after_attempt(retries + 1),
            wait=wait_fixed(RETRY_INTERVAL_SECONDS),
            sleep=self._sleep,
            before_sleep=before_sleep_log(logger, logging.DEBUG),
            retry_error_callback=lambda state: None,
        )
        return await retrying(self._scan, channel_id, source_id)
