from __future__ import annotations

import re
from enum import Enum
from types import MappingProxyType


class CanonicalProvider(str, Enum):
    ZEPTO = "zepto"
    BLINKIT = "blinkit"
    INSTAMART = "instamart"
    SWIGGY = "swiggy"
    BIGBASKET = "bigbasket"
    JIOMART = "jiomart"
    DMART = "dmart"
    UNKNOWN = "unknown"


_ALIASES = MappingProxyType(
    {
        "swiggy instamart": CanonicalProvider.INSTAMART,
        "swiggyinstamart": CanonicalProvider.INSTAMART,
        "instamart": CanonicalProvider.INSTAMART,
        "swiggy": CanonicalProvider.SWIGGY,
        "zepto": CanonicalProvider.ZEPTO,
        "blinkit": CanonicalProvider.BLINKIT,
        "bigbasket": CanonicalProvider.BIGBASKET,
        "big basket": CanonicalProvider.BIGBASKET,
        "jiomart": CanonicalProvider.JIOMART,
        "jio mart": CanonicalProvider.JIOMART,
        "dmart": CanonicalProvider.DMART,
        "d mart": CanonicalProvider.DMART,
    }
)

# "swiggy instamart" contains both names; instamart must be checked first.
_SUBSTRING_ORDER = (
    CanonicalProvider.INSTAMART,
    CanonicalProvider.SWIGGY,
    CanonicalProvider.BLINKIT,
    CanonicalProvider.BIGBASKET,
    CanonicalProvider.JIOMART,
    CanonicalProvider.DMART,
    CanonicalProvider.ZEPTO,
)

DISPLAY_NAMES = MappingProxyType(
    {
        CanonicalProvider.INSTAMART.value: "Instamart",
        CanonicalProvider.SWIGGY.value: "Swiggy",
        CanonicalProvider.ZEPTO.value: "Zepto",
        CanonicalProvider.BLINKIT.value: "Blinkit",
        CanonicalProvider.BIGBASKET.value: "BigBasket",
        CanonicalProvider.JIOMART.value: "JioMart",
        CanonicalProvider.DMART.value: "Dmart",
        CanonicalProvider.UNKNOWN.value: "Unknown",
    }
)

_QUOTES_RE = re.compile(r"[‘’“”\"']")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9 ]+")


def normalize_provider_name(name: str | None) -> str:
    value = _QUOTES_RE.sub("", str(name or "").strip().lower())
    value = _NON_ALNUM_RE.sub(" ", value)
    return re.sub(r"\s+", " ", value).strip()


def canonical_key(provider_name: str | None) -> str:
    """Map a raw provider name to its canonical key.

    Unrecognized providers keep their compacted normalized name so grouping
    still works for them.
    """
    normalized = normalize_provider_name(provider_name)
    compact = normalized.replace(" ", "")
    for candidate in (normalized, compact):
        if candidate in _ALIASES:
            return _ALIASES[candidate].value
    for provider in _SUBSTRING_ORDER:
        if provider.value in normalized or provider.value in compact:
            return provider.value
    return compact or CanonicalProvider.UNKNOWN.value


def display_name(provider_name: str | None) -> str:
    key = canonical_key(provider_name)
    if key in DISPLAY_NAMES:
        return DISPLAY_NAMES[key]
    return provider_name or key

