from __future__ import annotations

import re

from src.collectors.base import RawListing

KEY_SEPARATOR = "||"
MAX_NAME_TOKENS = 10

_QUOTES_RE = re.compile(r"[‘’“”\"]")
_BRACKETED_RE = re.compile(r"\(.*?\)|\[.*?\]")
_STOPWORDS_RE = re.compile(
    r"\b(?:family pack|economy pack|value pack|pack of|combo of|pack|combo|packet|pouch"
    r"|fresh|new|extra|refill|by|from|brand)\b",
    re.IGNORECASE,
)
_UNIT_WORDS = (
    r"kgs?|kilograms?|grams?|gms?|gm|g|ml|ltrs?|litres?|liters?|l|pcs|pc|pieces?"
)
_QTY_RE = re.compile(
    rf"(?:\d+\s*[x×*]\s*)?\d+(?:[.,]\d+)?\s*(?:{_UNIT_WORDS})\b",
    re.IGNORECASE,
)
_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9 ]+")

_SIZE_RE = re.compile(rf"(\d+(?:[.,]\d+)?)\s*({_UNIT_WORDS})\b")
_MULT_SIZE_RE = re.compile(rf"(\d+)\s*[x×*]\s*(\d+(?:[.,]\d+)?)\s*({_UNIT_WORDS})\b")


def normalize_text(value: str | None) -> str:
    value = _QUOTES_RE.sub("", str(value or "").strip().lower())
    return re.sub(r"\s+", " ", value).strip()


def _remove_brand(name: str, brand: str | None) -> str:
    brand = str(brand or "").strip()
    if not brand:
        return name
    pattern = re.compile(rf"(?<!\w){re.escape(brand)}(?!\w)", re.IGNORECASE)
    return pattern.sub(" ", name)


def normalize_product_name(name: str | None, brand: str | None = None) -> str:
    """Reduce a listing title to the words that identify the product.

    Bracketed text, the brand, packaging stopwords and embedded sizes are
    removed, then the result is lowercased and cut to the first ten tokens.
    """
    if not name:
        return ""
    value = re.sub(r"\s+", " ", _BRACKETED_RE.sub(" ", str(name)))
    value = _remove_brand(value, brand)
    value = _STOPWORDS_RE.sub(" ", value)
    value = _QTY_RE.sub(" ", value)
    value = _NON_ALNUM_RE.sub(" ", value)
    tokens = value.lower().split()
    return " ".join(tokens[:MAX_NAME_TOKENS])


def _format_amount(value: float) -> str:
    return ("%.3f" % value).rstrip("0").rstrip(".")


def _canonical_size(amount: float, unit: str) -> str:
    if unit.startswith("k"):
        return f"{_format_amount(amount * 1000)}g"
    if unit.startswith("g"):
        return f"{_format_amount(amount)}g"
    if unit == "ml":
        return f"{_format_amount(amount)}ml"
    if unit.startswith("l"):
        return f"{_format_amount(amount * 1000)}ml"
    return f"{_format_amount(amount)}pcs"


def normalize_unit(unit: str | None, name: str | None = None) -> str:
    """Canonical size string such as "5000g" or "1000ml", or "" when none is found.

    The unit field is searched before the name.
    """
    for text in (str(unit or "").lower(), str(name or "").lower()):
        if not text:
            continue
        mult = _MULT_SIZE_RE.search(text)
        if mult:
            count = float(mult.group(1))
            size = float(mult.group(2).replace(",", "."))
            return _canonical_size(count * size, mult.group(3))
        match = _SIZE_RE.search(text)
        if match:
            return _canonical_size(float(match.group(1).replace(",", ".")), match.group(2))
    return ""


def build_key(listing: RawListing) -> str:
    if listing.product_id not in (None, ""):
        return str(listing.product_id)
    brand = normalize_text(listing.brand)
    name = normalize_product_name(listing.name, brand)
    unit = normalize_unit(listing.unit, listing.name)
    return KEY_SEPARATOR.join((brand, name, unit))
