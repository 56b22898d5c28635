"""
Review platform display data: single source of truth for platform glyphs
and the fallbacks used when a review points at an unknown platform.
"""

from typing import Optional

# Slug → glyph shown next to each platform in the performance table
PLATFORM_ICONS: dict[str, str] = {
    "google": "🔍",
    "yelp": "🍽️",
    "facebook": "📘",
    "trustpilot": "⭐",
    "tripadvisor": "🧭",
    "amazon": "🛒",
    "app-store": "📱",
    "play-store": "▶️",
    "default": "💬",
}

DEFAULT_PLATFORM_SLUG = "default"

# Name used in the platform rollup when the platform record is missing
UNKNOWN_PLATFORM_NAME = "Unknown Platform"

# Shorter name used on individual review rows (latest reviews, metrics)
UNKNOWN_PLATFORM_SHORT_NAME = "Unknown"


def platform_icon(slug: Optional[str]) -> str:
    """Glyph for a platform slug; the default glyph for unknown slugs."""
    return PLATFORM_ICONS.get(slug or DEFAULT_PLATFORM_SLUG, PLATFORM_ICONS[DEFAULT_PLATFORM_SLUG])
