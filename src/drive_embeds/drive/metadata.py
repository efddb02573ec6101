"""Drive file metadata lookups through the Drive v3 API.

google-api-python-client is synchronous, so every request runs in
asyncio.to_thread() with its own authorized HTTP object (httplib2 is not
thread-safe and lookups for one message run concurrently).
"""

import asyncio
import logging
from typing import Any

import httplib2
from google.oauth2.service_account import Credentials
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from drive_embeds.errors import FileNotFound
from drive_embeds.models.drive import ResolvedFile

logger = logging.getLogger(__name__)

# docs: https://developers.google.com/drive/api/guides/fields-parameter
FILE_FIELDS = "name,webViewLink,mimeType,modifiedTime"


def is_not_found(error: HttpError) -> bool:
    """Return True if a Drive API error means the file is missing or not shared."""
    details = error.error_details
    if isinstance(details, list):
        if any(isinstance(d, dict) and d.get("reason") == "notFound" for d in details):
            return True
    return error.resp.status == 404


class DriveMetadataProvider:
    """Reads file metadata with service account credentials."""

    def __init__(self, credentials: Credentials):
        self._credentials = credentials
        self._service = build(
            "drive", "v3", credentials=credentials, cache_discovery=False
        )

    def _new_http(self) -> AuthorizedHttp:
        return AuthorizedHttp(self._credentials, http=httplib2.Http())

    async def _execute(self, request: Any) -> dict:
        return await asyncio.to_thread(request.execute, http=self._new_http())

    async def get_file_metadata(self, file_id: str) -> ResolvedFile:
        """Fetch name, view link, MIME type and modification time of a file.

        Raises:
            FileNotFound: The file does not exist or is not shared with the bot.
            HttpError: Any other Drive API failure.
        """
        request = self._service.files().get(
            fileId=file_id,
            fields=FILE_FIELDS,
            supportsAllDrives=True,
        )
        try:
            data = await self._execute(request)
        except HttpError as exc:
            if is_not_found(exc):
                logger.info("Drive file %s not found or not shared", file_id)
                raise FileNotFound(file_id) from exc
            raise

        return ResolvedFile(
            name=data.get("name"),
            view_url=data.get("webViewLink"),
            mime_type=data.get("mimeType"),
            modified_time=data.get("modifiedTime"),
        )

    async def check_access(self) -> None:
        """Fail fast if the service account cannot see any file.

        Raises RuntimeError when nothing is shared with the service account,
        which would make every lookup come back not found.
        """
        request = self._service.files().list(pageSize=1, fields="files(id)")
        data = await self._execute(request)
        if not data.get("files"):
            raise RuntimeError(
                "No files are shared to the service account in Google Drive."
            )
