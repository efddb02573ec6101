"""Error types raised while synchronizing shadow messages."""


class SyncError(Exception):
    """Base class for all synchronization errors."""


class FileNotFound(SyncError):
    """The file does not exist or is not shared with the service account.

    Recoverable: the resolver drops the file and carries on.
    """

    def __init__(self, file_id: str):
        super().__init__(f"Drive file not found: {file_id}")
        self.file_id = file_id


class PlatformError(SyncError):
    """A chat platform request failed. Not retried."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class DecodingError(SyncError, ValueError):
    """An appended invisible payload was present but malformed."""


class MissingRequiredField(SyncError):
    """A resolved file lacks a field that was explicitly requested."""

    def __init__(self, missing: list[str]):
        super().__init__(f"Missing required fields: {', '.join(missing)}")
        self.missing = missing
