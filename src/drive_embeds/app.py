"""FastAPI application hosting the Discord bot, with lifespan and health endpoint."""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from drive_embeds.chat.bot import DriveEmbedsBot
from drive_embeds.config import get_settings
from drive_embeds.drive.client import get_drive_provider
from drive_embeds.logging_config import configure_logging

logger = logging.getLogger(__name__)


def _log_bot_exit(task: asyncio.Task) -> None:
    if not task.cancelled() and task.exception() is not None:
        logger.error("Discord bot stopped", exc_info=task.exception())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: configure logging, verify Drive access, run the bot."""
    settings = get_settings()
    configure_logging(settings.log_level)

    missing = settings.missing_required()
    if missing:
        raise RuntimeError(
            f"Environment variables {', '.join(missing)} are not set. "
            "Set them in the environment or in .env."
        )

    logger.info(
        "Starting Google Drive client for %s", settings.google_service_account_email
    )
    provider = get_drive_provider()
    # Fail fast: with nothing shared, every lookup would silently come back empty
    await provider.check_access()

    bot = DriveEmbedsBot(settings.discord_guild_id, provider)
    app.state.settings = settings
    app.state.bot = bot
    task = asyncio.create_task(bot.start(settings.discord_bot_token))
    task.add_done_callback(_log_bot_exit)
    yield
    await bot.close()
    if not task.done():
        await task


app = FastAPI(
    title="Drive Embeds",
    lifespan=lifespan,
)


@app.get("/health")
async def health(request: Request):
    """Health check endpoint for Cloud Run and local development."""
    bot: DriveEmbedsBot | None = getattr(request.app.state, "bot", None)
    return {
        "status": "ok",
        "service": "drive-embeds",
        "version": "0.1.0",
        "discord_ready": bot is not None and bot.is_ready(),
    }
