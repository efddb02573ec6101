"""Message lifecycle events consumed by the synchronizer.

Events form a discriminated union keyed on ``kind`` so handlers can match
them exhaustively instead of probing payload shapes.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from drive_embeds.models.messages import SourceMessage


class MessageCreated(BaseModel):
    kind: Literal["created"] = "created"
    message: SourceMessage


class MessageEdited(BaseModel):
    kind: Literal["edited"] = "edited"
    message: SourceMessage


class SuppressionToggled(BaseModel):
    """The message changed only because its embed suppression flag flipped."""

    kind: Literal["suppression_toggled"] = "suppression_toggled"
    message: SourceMessage


class RefreshRequested(BaseModel):
    """A user asked for the previews of a message to be rebuilt."""

    kind: Literal["refresh_requested"] = "refresh_requested"
    message: SourceMessage


class MessageDeleted(BaseModel):
    kind: Literal["deleted"] = "deleted"
    channel_id: str
    message_id: str


class MessagesBulkDeleted(BaseModel):
    kind: Literal["bulk_deleted"] = "bulk_deleted"
    channel_id: str
    message_ids: list[str]


SyncEvent = Annotated[
    Union[
        MessageCreated,
        MessageEdited,
        SuppressionToggled,
        RefreshRequested,
        MessageDeleted,
        MessagesBulkDeleted,
    ],
    Field(discriminator="kind"),
]

sync_event_adapter: TypeAdapter[SyncEvent] = TypeAdapter(SyncEvent)
