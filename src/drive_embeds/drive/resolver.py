"""Concurrent file metadata resolution for the Drive links of one message."""

import asyncio
import logging
from typing import Protocol

from drive_embeds.errors import FileNotFound
from drive_embeds.models.drive import ResolvedFile

logger = logging.getLogger(__name__)


class FileMetadataProvider(Protocol):
    """Anything that can look up Drive file metadata by ID."""

    async def get_file_metadata(self, file_id: str) -> ResolvedFile: ...


async def _resolve_one(provider: FileMetadataProvider, file_id: str) -> ResolvedFile | None:
    try:
        return await provider.get_file_metadata(file_id)
    except FileNotFound:
        # Not shared with the service account, or deleted
        return None


async def resolve_files(
    provider: FileMetadataProvider, file_ids: list[str]
) -> list[ResolvedFile]:
    """Resolve all file IDs in parallel, dropping files that are not found.

    Order follows ``file_ids``. Any error other than FileNotFound aborts the
    whole resolution.
    """
    results = await asyncio.gather(*[_resolve_one(provider, i) for i in file_ids])
    resolved = [r for r in results if r is not None]
    if len(resolved) != len(file_ids):
        logger.info("Resolved %d/%d Drive files", len(resolved), len(file_ids))
    return resolved
