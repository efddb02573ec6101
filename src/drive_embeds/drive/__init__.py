"""Google Drive ingress: link extraction, metadata lookup, and file colors."""

from drive_embeds.drive.client import get_drive_provider, reset_client
from drive_embeds.drive.file_types import color_for_mime_type
from drive_embeds.drive.links import extract_file_references
from drive_embeds.drive.metadata import DriveMetadataProvider
from drive_embeds.drive.resolver import FileMetadataProvider, resolve_files

__all__ = [
    "color_for_mime_type",
    "DriveMetadataProvider",
    "extract_file_references",
    "FileMetadataProvider",
    "get_drive_provider",
    "reset_client",
    "resolve_files",
]
