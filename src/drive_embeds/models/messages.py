"""Chat message models shared by the sync engine and the Discord adapter."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class SourceMessage(BaseModel):
    """A user message that may contain Drive links. Never owned by the bot."""

    id: str
    channel_id: str
    guild_id: str | None = None
    author_id: str
    content: str = ""
    created_at: datetime
    edited_at: datetime | None = None
    embeds_suppressed: bool = False
    # One entry per native link preview; None for previews without a URL
    preview_urls: list[str | None] = Field(default_factory=list)


class ChannelMessage(BaseModel):
    """A message read back from channel history."""

    id: str
    channel_id: str
    author_id: str
    created_at: datetime
    # Raw embed dicts as returned by the platform, including volatile keys like "type"
    embeds: list[dict[str, Any]] = Field(default_factory=list)

    @property
    def first_embed_title(self) -> str | None:
        if not self.embeds:
            return None
        return self.embeds[0].get("title")


class RenderedEmbed(BaseModel):
    """One Drive file preview rendered as a rich embed."""

    title: str
    url: str
    color: int
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the platform's embed JSON shape."""
        return {
            "title": self.title,
            "url": self.url,
            "color": self.color,
            "timestamp": self.timestamp.isoformat(),
        }


class ShadowPayload(BaseModel):
    """Content of a shadow message: the embeds plus delivery flags."""

    embeds: list[RenderedEmbed]
    silent: bool = True  # The source message already notified the channel

    def embed_dicts(self) -> list[dict[str, Any]]:
        return [embed.to_dict() for embed in self.embeds]
