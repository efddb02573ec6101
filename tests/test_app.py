"""Tests for the FastAPI lifespan that boots the Discord bot."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from drive_embeds.app import app

_PATCH_PREFIX = "drive_embeds.app"


def _settings(missing: list[str] | None = None) -> MagicMock:
    settings = MagicMock()
    settings.log_level = "INFO"
    settings.discord_bot_token = "token"
    settings.discord_guild_id = "123"
    settings.google_service_account_email = "bot@project.iam.gserviceaccount.com"
    settings.missing_required.return_value = missing or []
    return settings


def _bot() -> MagicMock:
    bot = MagicMock()
    bot.start = AsyncMock()
    bot.close = AsyncMock()
    bot.is_ready.return_value = True
    return bot


def test_lifespan_checks_drive_and_starts_bot():
    """Startup verifies Drive access, then runs the bot until shutdown."""
    bot = _bot()
    provider = MagicMock()
    provider.check_access = AsyncMock()

    with (
        patch(f"{_PATCH_PREFIX}.get_settings", return_value=_settings()),
        patch(f"{_PATCH_PREFIX}.configure_logging"),
        patch(f"{_PATCH_PREFIX}.get_drive_provider", return_value=provider),
        patch(f"{_PATCH_PREFIX}.DriveEmbedsBot", return_value=bot) as mock_bot_cls,
    ):
        with TestClient(app) as client:
            response = client.get("/health")
            assert response.json()["discord_ready"] is True

    provider.check_access.assert_awaited_once()
    mock_bot_cls.assert_called_once_with("123", provider)
    bot.start.assert_awaited_once_with("token")
    bot.close.assert_awaited_once()
    del app.state.bot


def test_lifespan_refuses_to_start_without_required_settings():
    with (
        patch(
            f"{_PATCH_PREFIX}.get_settings",
            return_value=_settings(missing=["DISCORD_BOT_TOKEN"]),
        ),
        patch(f"{_PATCH_PREFIX}.configure_logging"),
        patch(f"{_PATCH_PREFIX}.DriveEmbedsBot") as mock_bot_cls,
    ):
        with pytest.raises(RuntimeError, match="DISCORD_BOT_TOKEN"):
            with TestClient(app):
                pass

    mock_bot_cls.assert_not_called()


def test_lifespan_fails_when_nothing_is_shared():
    provider = MagicMock()
    provider.check_access = AsyncMock(
        side_effect=RuntimeError("No files are shared to the service account in Google Drive.")
    )

    with (
        patch(f"{_PATCH_PREFIX}.get_settings", return_value=_settings()),
        patch(f"{_PATCH_PREFIX}.configure_logging"),
        patch(f"{_PATCH_PREFIX}.get_drive_provider", return_value=provider),
        patch(f"{_PATCH_PREFIX}.DriveEmbedsBot") as mock_bot_cls,
    ):
        with pytest.raises(RuntimeError, match="No files are shared"):
            with TestClient(app):
                pass

    mock_bot_cls.assert_not_called()
