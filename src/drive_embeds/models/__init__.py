"""Data models for the Drive Embeds bot."""

from drive_embeds.models.drive import FileReference, ResolvedFile
from drive_embeds.models.events import (
    MessageCreated,
    MessageDeleted,
    MessageEdited,
    MessagesBulkDeleted,
    RefreshRequested,
    SuppressionToggled,
    SyncEvent,
    sync_event_adapter,
)
from drive_embeds.models.messages import (
    ChannelMessage,
    RenderedEmbed,
    ShadowPayload,
    SourceMessage,
)

__all__ = [
    "FileReference",
    "ResolvedFile",
    "SourceMessage",
    "ChannelMessage",
    "RenderedEmbed",
    "ShadowPayload",
    "MessageCreated",
    "MessageEdited",
    "SuppressionToggled",
    "RefreshRequested",
    "MessageDeleted",
    "MessagesBulkDeleted",
    "SyncEvent",
    "sync_event_adapter",
]
