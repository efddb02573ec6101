"""Hide the platform's own link previews when the shadow message covers them.

Previews are only suppressed when every one of them points at a Drive link
the bot renders itself; any other preview keeps the originals visible.
"""

import logging
from urllib.parse import urlsplit, urlunsplit

from url_normalize import url_normalize

from drive_embeds.models.messages import SourceMessage
from drive_embeds.sync.platform import ChatPlatform

logger = logging.getLogger(__name__)


def normalize_url(raw_url: str) -> str:
    """Normalize a URL for preview comparison.

    Forces https, drops credentials, port, query and fragment, strips a
    leading ``www.`` and trailing slashes, then applies standard
    normalization (case, percent-encoding) via the url-normalize library.
    """
    raw_url = raw_url.strip()
    if "://" not in raw_url:
        raw_url = f"https://{raw_url}"
    parsed = urlsplit(raw_url)
    host = (parsed.hostname or "").removeprefix("www.")
    cleaned = urlunsplit(("https", host, parsed.path.rstrip("/"), "", ""))
    return url_normalize(cleaned)


def should_suppress(preview_urls: list[str | None], file_urls: list[str]) -> bool:
    """Return True if every native preview is one of the extracted Drive links."""
    if not preview_urls:
        return False
    normalized_files = {normalize_url(url) for url in file_urls}
    # A preview without a URL is not a link preview, so it is never ours
    return all(
        url is not None and normalize_url(url) in normalized_files
        for url in preview_urls
    )


async def sync_native_embeds(
    chat: ChatPlatform, message: SourceMessage, file_urls: list[str]
) -> None:
    """Suppress or restore native previews, skipping the request if unchanged."""
    suppress = should_suppress(message.preview_urls, file_urls)
    if message.embeds_suppressed == suppress:
        return
    logger.info(
        "%s native embeds of message %s",
        "Suppressing" if suppress else "Restoring",
        message.id,
    )
    await chat.set_embeds_suppressed(message.channel_id, message.id, suppress)
