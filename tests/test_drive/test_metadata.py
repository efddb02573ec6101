"""Tests for the Drive API metadata provider."""

import json
from unittest.mock import MagicMock, patch

import httplib2
import pytest
from googleapiclient.errors import HttpError

from drive_embeds.drive.metadata import FILE_FIELDS, DriveMetadataProvider, is_not_found
from drive_embeds.errors import FileNotFound

_PATCH_PREFIX = "drive_embeds.drive.metadata"


def _http_error(status: int, reason: str) -> HttpError:
    content = json.dumps(
        {"error": {"errors": [{"reason": reason}], "code": status, "message": reason}}
    ).encode()
    return HttpError(httplib2.Response({"status": status}), content)


def _provider(execute: MagicMock) -> tuple[DriveMetadataProvider, MagicMock]:
    service = MagicMock()
    service.files.return_value.get.return_value.execute = execute
    service.files.return_value.list.return_value.execute = execute
    with patch(f"{_PATCH_PREFIX}.build", return_value=service):
        provider = DriveMetadataProvider(MagicMock())
    return provider, service


@patch(f"{_PATCH_PREFIX}.AuthorizedHttp")
async def test_get_file_metadata_maps_fields(_mock_http: MagicMock):
    execute = MagicMock(
        return_value={
            "name": "Roadmap",
            "webViewLink": "https://docs.google.com/document/d/abc/edit",
            "mimeType": "application/vnd.google-apps.document",
            "modifiedTime": "2024-05-01T12:00:00.000Z",
        }
    )
    provider, service = _provider(execute)

    result = await provider.get_file_metadata("abc")

    assert result.name == "Roadmap"
    assert result.view_url == "https://docs.google.com/document/d/abc/edit"
    assert result.mime_type == "application/vnd.google-apps.document"
    assert result.modified_time == "2024-05-01T12:00:00.000Z"
    service.files.return_value.get.assert_called_once_with(
        fileId="abc", fields=FILE_FIELDS, supportsAllDrives=True
    )


@patch(f"{_PATCH_PREFIX}.AuthorizedHttp")
async def test_get_file_metadata_not_found(_mock_http: MagicMock):
    """Drive's notFound error becomes FileNotFound."""
    provider, _ = _provider(MagicMock(side_effect=_http_error(404, "notFound")))

    with pytest.raises(FileNotFound) as exc_info:
        await provider.get_file_metadata("missing")
    assert exc_info.value.file_id == "missing"


@patch(f"{_PATCH_PREFIX}.AuthorizedHttp")
async def test_get_file_metadata_other_errors_propagate(_mock_http: MagicMock):
    provider, _ = _provider(MagicMock(side_effect=_http_error(403, "insufficientPermissions")))

    with pytest.raises(HttpError):
        await provider.get_file_metadata("abc")


@patch(f"{_PATCH_PREFIX}.AuthorizedHttp")
async def test_check_access_raises_when_nothing_shared(_mock_http: MagicMock):
    provider, _ = _provider(MagicMock(return_value={"files": []}))

    with pytest.raises(RuntimeError, match="No files are shared"):
        await provider.check_access()


@patch(f"{_PATCH_PREFIX}.AuthorizedHttp")
async def test_check_access_passes_with_shared_files(_mock_http: MagicMock):
    provider, _ = _provider(MagicMock(return_value={"files": [{"id": "abc"}]}))
    await provider.check_access()


def test_is_not_found_by_reason():
    assert is_not_found(_http_error(404, "notFound"))


def test_is_not_found_rejects_permission_errors():
    assert not is_not_found(_http_error(403, "insufficientPermissions"))
