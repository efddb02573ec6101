"""Shadow message synchronization: correlation, diffing, and preview suppression."""

from drive_embeds.sync.diff import ShadowAction, embeds_equal, plan_shadow_action
from drive_embeds.sync.embeds import build_shadow_payload
from drive_embeds.sync.invisible import append_invisible, decode, decode_appended, encode
from drive_embeds.sync.locator import ShadowLocator
from drive_embeds.sync.orchestrator import EmbedSynchronizer
from drive_embeds.sync.platform import ChatPlatform
from drive_embeds.sync.suppressor import normalize_url, should_suppress

__all__ = [
    "append_invisible",
    "build_shadow_payload",
    "ChatPlatform",
    "decode",
    "decode_appended",
    "EmbedSynchronizer",
    "embeds_equal",
    "encode",
    "normalize_url",
    "plan_shadow_action",
    "ShadowAction",
    "ShadowLocator",
    "should_suppress",
]
