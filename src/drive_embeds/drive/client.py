"""Google Drive metadata provider singleton.

Creates a cached DriveMetadataProvider authenticated as the service account
from application settings. Follows the lazy-init pattern used for the other
external clients: the provider is built once at startup and handed to the
synchronizer explicitly.
"""

from google.oauth2.service_account import Credentials

from drive_embeds.config import get_settings
from drive_embeds.drive.metadata import DriveMetadataProvider

# Only file metadata is read, never contents
SCOPES = ["https://www.googleapis.com/auth/drive.metadata.readonly"]

_TOKEN_URI = "https://oauth2.googleapis.com/token"

_provider: DriveMetadataProvider | None = None


def build_credentials(client_email: str, private_key: str) -> Credentials:
    """Build read-only service account credentials."""
    return Credentials.from_service_account_info(
        {
            "client_email": client_email,
            "private_key": private_key,
            "token_uri": _TOKEN_URI,
        },
        scopes=SCOPES,
    )


def get_drive_provider() -> DriveMetadataProvider:
    """Return a cached Drive metadata provider.

    Creates the provider on first call using the service account from settings.
    Subsequent calls return the cached instance.
    """
    global _provider
    if _provider is None:
        settings = get_settings()
        credentials = build_credentials(
            settings.google_service_account_email,
            settings.google_private_key,
        )
        _provider = DriveMetadataProvider(credentials)
    return _provider


def reset_client() -> None:
    """Reset the cached provider instance. Used for testing."""
    global _provider
    _provider = None
