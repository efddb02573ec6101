"""Build shadow message payloads from resolved Drive files."""

from datetime import datetime

from drive_embeds.drive.file_types import color_for_mime_type
from drive_embeds.errors import MissingRequiredField
from drive_embeds.models.drive import ResolvedFile
from drive_embeds.models.messages import RenderedEmbed, ShadowPayload
from drive_embeds.sync.invisible import append_invisible, encode

# Discord rejects embeds whose title is longer than this
MAX_TITLE_LENGTH = 256

_ELLIPSIS = "…"


def _fit_title(name: str, reserved: int = 0) -> str:
    """Truncate a visible name so that ``reserved`` extra characters still fit."""
    limit = MAX_TITLE_LENGTH - reserved
    if len(name) <= limit:
        return name
    return name[: limit - len(_ELLIPSIS)] + _ELLIPSIS


def build_embed(file: ResolvedFile, index: int, source_id: str) -> RenderedEmbed:
    """Render one resolved file as an embed.

    The first embed of a shadow message carries the source message ID
    invisibly at the end of its title.

    Raises:
        MissingRequiredField: The Drive API left out a requested field.
    """
    missing = [
        field
        for field in ("name", "view_url", "mime_type", "modified_time")
        if not getattr(file, field)
    ]
    if missing:
        raise MissingRequiredField(missing)

    if index == 0:
        title = append_invisible(_fit_title(file.name, len(encode(source_id))), source_id)
    else:
        title = _fit_title(file.name)

    return RenderedEmbed(
        title=title,
        url=file.view_url,
        color=color_for_mime_type(file.mime_type),
        timestamp=datetime.fromisoformat(file.modified_time),
    )


def build_shadow_payload(files: list[ResolvedFile], source_id: str) -> ShadowPayload | None:
    """Build the shadow message for a source message.

    Returns None when there is nothing to preview, so callers can tell
    "no shadow needed" apart from a shadow with no embeds.
    """
    if not files:
        return None
    return ShadowPayload(
        embeds=[build_embed(file, i, source_id) for i, file in enumerate(files)],
    )
