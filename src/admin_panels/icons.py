"""Menu icon resolution.

Host-native icons (dashicons, inline data URIs, "none") and absolute URLs pass
through unchanged; anything else is a filename under the asset base URL.
"""

from __future__ import annotations

DEFAULT_NATIVE_ICON_PREFIXES: tuple[str, ...] = (
    "dashicons",
    "data:image/",
    "http://",
    "https://",
)

# Host keyword for "leave the icon slot empty, style it with CSS".
NO_ICON = "none"


def resolve_icon(
    icon: str | None,
    base_url: str,
    native_prefixes: tuple[str, ...] = DEFAULT_NATIVE_ICON_PREFIXES,
) -> str | None:
    if not icon:
        return None
    if icon == NO_ICON or icon.startswith(native_prefixes):
        return icon
    return f"{(base_url or '').rstrip('/')}/{icon}"
