"""Google Drive link and file metadata models."""

from pydantic import BaseModel


class FileReference(BaseModel):
    """A Drive link found in message text."""

    url: str  # Link as written in the message, trailing punctuation excluded
    file_id: str


class ResolvedFile(BaseModel):
    """File metadata returned by the Drive API.

    Fields are optional because the API omits anything not requested via
    the ``fields`` parameter; the embed builder treats absence as fatal.
    """

    name: str | None = None
    view_url: str | None = None  # webViewLink
    mime_type: str | None = None
    modified_time: str | None = None  # RFC 3339, e.g. "2024-05-01T12:00:00.000Z"
