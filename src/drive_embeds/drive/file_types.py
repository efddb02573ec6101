"""Google Workspace file types and their brand colors.

See https://developers.google.com/drive/api/guides/mime-types
"""

from enum import Enum


class FileType(str, Enum):
    """Drive file kinds with a dedicated embed color."""

    DOCS = "application/vnd.google-apps.document"
    SHEETS = "application/vnd.google-apps.spreadsheet"
    SLIDES = "application/vnd.google-apps.presentation"
    FORMS = "application/vnd.google-apps.form"


FILE_TYPE_COLORS: dict[FileType, int] = {
    FileType.DOCS: 0x4285F4,
    FileType.SHEETS: 0x0F9D58,
    FileType.SLIDES: 0xF4B400,
    FileType.FORMS: 0x7627BB,
}

DEFAULT_COLOR = 0xE3E5E8


def color_for_mime_type(mime_type: str) -> int:
    """Return the embed color for a MIME type, falling back to neutral gray."""
    try:
        return FILE_TYPE_COLORS[FileType(mime_type)]
    except ValueError:
        return DEFAULT_COLOR
