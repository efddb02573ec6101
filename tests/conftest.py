"""Shared test fixtures and in-memory fakes for the chat platform and Drive."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from drive_embeds.app import app
from drive_embeds.errors import FileNotFound
from drive_embeds.models.drive import ResolvedFile
from drive_embeds.models.messages import ChannelMessage, ShadowPayload

BOT_USER_ID = "999"
_EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakeChat:
    """In-memory ChatPlatform keeping one ordered message list per channel.

    Posted embeds are echoed back the way Discord does: with an extra
    ``type`` key and the timestamp re-serialized in another format.
    """

    def __init__(self, bot_user_id: str = BOT_USER_ID):
        self._bot_user_id = bot_user_id
        self._next_id = 10_000
        self.channels: dict[str, list[ChannelMessage]] = {}
        self.sent: list[tuple[str, ShadowPayload]] = []
        self.edited: list[tuple[str, ShadowPayload]] = []
        self.deleted: list[str] = []
        self.suppressed: list[tuple[str, bool]] = []
        self.history_calls = 0
        self.max_concurrent_deletes = 0
        self._deletes_in_flight = 0

    @property
    def bot_user_id(self) -> str:
        return self._bot_user_id

    def add(self, channel_id: str, message_id: str, author_id: str, embeds=None) -> ChannelMessage:
        message = ChannelMessage(
            id=message_id,
            channel_id=channel_id,
            author_id=author_id,
            created_at=_EPOCH + timedelta(seconds=int(message_id)),
            embeds=embeds or [],
        )
        self.channels.setdefault(channel_id, []).append(message)
        self.channels[channel_id].sort(key=lambda m: int(m.id))
        return message

    @staticmethod
    def _echo(payload: ShadowPayload) -> list[dict]:
        echoed = []
        for embed in payload.embed_dicts():
            ts = datetime.fromisoformat(embed["timestamp"])
            echoed.append(
                {
                    **embed,
                    "type": "rich",
                    "timestamp": ts.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f+00:00"),
                }
            )
        return echoed

    async def fetch_messages_after(self, channel_id: str, message_id: str, limit: int):
        self.history_calls += 1
        after = [m for m in self.channels.get(channel_id, []) if int(m.id) > int(message_id)]
        return after[:limit]

    async def send_message(self, channel_id: str, payload: ShadowPayload) -> str:
        self._next_id += 1
        message_id = str(self._next_id)
        self.add(channel_id, message_id, self._bot_user_id, self._echo(payload))
        self.sent.append((channel_id, payload))
        return message_id

    async def edit_message(self, channel_id: str, message_id: str, payload: ShadowPayload) -> None:
        for message in self.channels[channel_id]:
            if message.id == message_id:
                message.embeds = self._echo(payload)
        self.edited.append((message_id, payload))

    async def delete_message(self, channel_id: str, message_id: str) -> None:
        self._deletes_in_flight += 1
        self.max_concurrent_deletes = max(self.max_concurrent_deletes, self._deletes_in_flight)
        await asyncio.sleep(0)
        self.channels[channel_id] = [m for m in self.channels[channel_id] if m.id != message_id]
        self.deleted.append(message_id)
        self._deletes_in_flight -= 1

    async def set_embeds_suppressed(self, channel_id: str, message_id: str, suppressed: bool) -> None:
        self.suppressed.append((message_id, suppressed))


class FakeDrive:
    """FileMetadataProvider serving files from a dict; unknown IDs are not found."""

    def __init__(self, files: dict[str, ResolvedFile] | None = None):
        self.files = files or {}
        self.requested: list[str] = []

    async def get_file_metadata(self, file_id: str) -> ResolvedFile:
        self.requested.append(file_id)
        if file_id not in self.files:
            raise FileNotFound(file_id)
        return self.files[file_id]


def make_file(name: str = "Quarterly Report", modified: str = "2024-05-01T12:00:00.000Z") -> ResolvedFile:
    return ResolvedFile(
        name=name,
        view_url=f"https://docs.google.com/document/d/{name.replace(' ', '')}/edit",
        mime_type="application/vnd.google-apps.document",
        modified_time=modified,
    )


@pytest.fixture(scope="session")
def client() -> TestClient:
    """Create a TestClient for the FastAPI app (lifespan not started)."""
    return TestClient(app)


@pytest.fixture
def chat() -> FakeChat:
    return FakeChat()


@pytest.fixture
def drive() -> FakeDrive:
    return FakeDrive()


@pytest.fixture
def file_factory():
    """Return the ResolvedFile factory."""
    return make_file
