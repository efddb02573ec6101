"""Keep each source message's shadow message in sync with its Drive links.

Nothing is cached between events: every event re-reads the message content,
the Drive metadata and the channel history, so a restart or a missed event
heals on the next edit.
"""

import asyncio
import logging
from typing import assert_never

from drive_embeds.drive.links import extract_file_references
from drive_embeds.drive.resolver import FileMetadataProvider, resolve_files
from drive_embeds.models.drive import FileReference
from drive_embeds.models.events import (
    MessageCreated,
    MessageDeleted,
    MessageEdited,
    MessagesBulkDeleted,
    RefreshRequested,
    SuppressionToggled,
    SyncEvent,
)
from drive_embeds.models.messages import ShadowPayload, SourceMessage
from drive_embeds.sync.diff import ShadowAction, plan_shadow_action
from drive_embeds.sync.embeds import build_shadow_payload
from drive_embeds.sync.locator import ShadowLocator, Sleep
from drive_embeds.sync.platform import ChatPlatform
from drive_embeds.sync.suppressor import sync_native_embeds

logger = logging.getLogger(__name__)

# A message edited right after being posted may have its shadow still in flight
EDIT_LOOKUP_RETRIES = 2


class EmbedSynchronizer:
    """Creates, edits and deletes shadow messages in response to message events."""

    def __init__(
        self,
        chat: ChatPlatform,
        files: FileMetadataProvider,
        sleep: Sleep = asyncio.sleep,
    ):
        self._chat = chat
        self._files = files
        self._locator = ShadowLocator(chat, sleep=sleep)

    async def handle(self, event: SyncEvent) -> None:
        """Dispatch a lifecycle event. Errors propagate to the caller."""
        match event:
            case MessageCreated(message=message):
                await self.sync(message, newly_created=True)
            case MessageEdited(message=message) | RefreshRequested(message=message):
                await self.sync(message)
            case SuppressionToggled(message=message):
                # Our own suppression toggle triggers this; suppressing again would loop
                await self.sync(message, suppress_native=False)
            case MessageDeleted(channel_id=channel_id, message_id=message_id):
                await self.remove(channel_id, message_id)
            case MessagesBulkDeleted(channel_id=channel_id, message_ids=message_ids):
                await self.remove_many(channel_id, message_ids)
            case _:
                assert_never(event)

    async def _build_payload(
        self, message: SourceMessage, references: list[FileReference]
    ) -> ShadowPayload | None:
        files = await resolve_files(self._files, [r.file_id for r in references])
        return build_shadow_payload(files, message.id)

    async def sync(
        self,
        message: SourceMessage,
        *,
        newly_created: bool = False,
        suppress_native: bool = True,
    ) -> None:
        """Bring the shadow message of ``message`` up to date.

        Args:
            message: Current state of the source message.
            newly_created: Skip the history lookup, no shadow can exist yet.
            suppress_native: Update the native preview suppression afterwards.
        """
        references = extract_file_references(message.content)

        if newly_created:
            existing = None
            payload = await self._build_payload(message, references)
        else:
            lookup = asyncio.create_task(
                self._locator.locate(
                    message.channel_id, message.id, retries=EDIT_LOOKUP_RETRIES
                )
            )
            try:
                payload = await self._build_payload(message, references)
            except BaseException:
                # Stop the lookup instead of leaving it scanning history unobserved
                lookup.cancel()
                await asyncio.gather(lookup, return_exceptions=True)
                raise
            existing = await lookup

        action = plan_shadow_action(existing, payload)
        if existing is None and payload is None:
            # Nothing of ours in this message, leave its previews alone
            return

        if action == ShadowAction.CREATE:
            shadow_id = await self._chat.send_message(message.channel_id, payload)
            logger.info(
                "Sent shadow %s with %d embed(s) for message %s",
                shadow_id,
                len(payload.embeds),
                message.id,
            )
        elif action == ShadowAction.UPDATE:
            await self._chat.edit_message(message.channel_id, existing.id, payload)
            logger.info("Updated shadow %s for message %s", existing.id, message.id)
        elif action == ShadowAction.DELETE:
            await self._chat.delete_message(message.channel_id, existing.id)
            logger.info("Deleted shadow %s for message %s", existing.id, message.id)
        else:
            logger.debug("Shadow %s for message %s is up to date", existing.id, message.id)

        if suppress_native:
            await sync_native_embeds(self._chat, message, [r.url for r in references])

    async def remove(self, channel_id: str, message_id: str) -> None:
        """Delete the shadow message of a deleted source message, if any."""
        existing = await self._locator.locate(channel_id, message_id)
        if existing is None:
            return
        await self._chat.delete_message(channel_id, existing.id)
        logger.info("Deleted shadow %s of deleted message %s", existing.id, message_id)

    async def remove_many(self, channel_id: str, message_ids: list[str]) -> None:
        """Delete shadows of bulk-deleted messages one at a time to respect rate limits."""
        for message_id in message_ids:
            await self.remove(channel_id, message_id)
