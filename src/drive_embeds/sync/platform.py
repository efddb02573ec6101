"""Chat platform operations the synchronizer depends on."""

from typing import Protocol

from drive_embeds.models.messages import ChannelMessage, ShadowPayload


class ChatPlatform(Protocol):
    """Message operations on the chat platform, addressed by string IDs.

    Implementations raise PlatformError when a request fails.
    """

    @property
    def bot_user_id(self) -> str: ...

    async def fetch_messages_after(
        self, channel_id: str, message_id: str, limit: int
    ) -> list[ChannelMessage]:
        """Return up to ``limit`` messages posted right after ``message_id``."""
        ...

    async def send_message(self, channel_id: str, payload: ShadowPayload) -> str:
        """Post a shadow message and return its ID."""
        ...

    async def edit_message(
        self, channel_id: str, message_id: str, payload: ShadowPayload
    ) -> None: ...

    async def delete_message(self, channel_id: str, message_id: str) -> None: ...

    async def set_embeds_suppressed(
        self, channel_id: str, message_id: str, suppressed: bool
    ) -> None: ...
