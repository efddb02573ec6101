"""Decide what to do with a shadow message given freshly built embeds."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from drive_embeds.models.messages import ChannelMessage, ShadowPayload


class ShadowAction(str, Enum):
    """Side effect needed to bring a shadow message up to date."""

    NOTHING = "nothing"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


def _parse_timestamp(value: Any) -> datetime | None:
    if value is None:
        return None
    parsed = value if isinstance(value, datetime) else datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _is_subset(expected: Any, actual: Any) -> bool:
    """Structural match where ``actual`` may carry extra dict keys."""
    if isinstance(expected, dict):
        return isinstance(actual, dict) and all(
            key in actual and _is_subset(value, actual[key])
            for key, value in expected.items()
        )
    if isinstance(expected, list):
        return (
            isinstance(actual, list)
            and len(expected) == len(actual)
            and all(_is_subset(e, a) for e, a in zip(expected, actual))
        )
    return expected == actual


def embed_matches(existing: dict[str, Any], new: dict[str, Any]) -> bool:
    """Compare one posted embed against a freshly built one.

    Timestamps are compared as instants since the platform echoes them back
    in a different format than the Drive API returns them. The posted embed
    also carries platform-added keys (``type``, ``content_scan_version``...)
    which are ignored.
    """
    if _parse_timestamp(existing.get("timestamp")) != _parse_timestamp(new.get("timestamp")):
        return False
    rest = {key: value for key, value in new.items() if key != "timestamp"}
    return _is_subset(rest, existing)


def embeds_equal(existing: list[dict[str, Any]], new: list[dict[str, Any]]) -> bool:
    """Return True if editing the shadow message would change nothing visible."""
    return len(existing) == len(new) and all(
        embed_matches(old, fresh) for old, fresh in zip(existing, new)
    )


def plan_shadow_action(
    existing: ChannelMessage | None, payload: ShadowPayload | None
) -> ShadowAction:
    """Pick the side effect for the current shadow and the newly built payload.

    Identical embeds produce NOTHING so the shadow never shows "(edited)"
    without a reason, and a changed shadow is edited in place rather than
    deleted and re-sent.
    """
    if existing is None:
        return ShadowAction.CREATE if payload is not None else ShadowAction.NOTHING
    if payload is None:
        return ShadowAction.DELETE
    if embeds_equal(existing.embeds, payload.embed_dicts()):
        return ShadowAction.NOTHING
    return ShadowAction.UPDATE
