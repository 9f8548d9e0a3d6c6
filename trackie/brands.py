"""
Brand Lookup

Known subscription names mapped to a display color and badge initial.
Consulted only when the user has not picked a color/initial themselves.

The table is built once at import time and exposed read-only.
"""

from types import MappingProxyType
from typing import Mapping, NamedTuple


DEFAULT_BRAND_COLOR = "#6B7280"


class Brand(NamedTuple):
    color: str
    initial: str


KNOWN_BRANDS: Mapping[str, Brand] = MappingProxyType({
    "netflix": Brand("#E50914", "N"),
    "spotify": Brand("#1DB954", "S"),
    "youtube premium": Brand("#FF0000", "Y"),
    "claude": Brand("#D4A574", "C"),
    "claude code": Brand("#D4A574", "C"),
    "kimi": Brand("#8B5CF6", "K"),
    "kimi ai": Brand("#8B5CF6", "K"),
    "notion": Brand("#FFFFFF", "N"),
    "figma": Brand("#A259FF", "F"),
    "linear": Brand("#5E6AD2", "L"),
    "icloud+": Brand("#007AFF", "i"),
    "apple music": Brand("#FA243C", "A"),
    "amazon prime": Brand("#00A8E1", "A"),
    "chatgpt": Brand("#10A37F", "C"),
    "disney+": Brand("#113CCF", "D"),
    "hotstar": Brand("#1F2937", "H"),
    "jio": Brand("#0A3A7D", "J"),
})


def brand_for(name: str, default_color: str = DEFAULT_BRAND_COLOR) -> Brand:
    """
    Look up the brand for a subscription name.

    Matching is on the lower-cased name. Unknown names get the default
    color and their own first letter, uppercased ("?" when empty).
    """
    name = (name or "").strip()
    known = KNOWN_BRANDS.get(name.lower())
    if known is not None:
        return known
    return Brand(default_color, name[0].upper() if name else "?")
