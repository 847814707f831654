from __future__ import annotations

import json
import logging
import os
import re
from datetime import datetime, timezone
from html import unescape
from typing import Optional
from urllib.error import HTTPError, URLError
from urllib.parse import quote_plus, urljoin
from urllib.request import Request, urlopen

from src.collectors.base import RawListing

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10
DEFAULT_USER_AGENT = "SastaSamaanBot/1.0 (+https://example.com)"

DEFAULT_SEARCH_URLS: dict[str, str] = {
    "zepto": "https://www.zeptonow.com/search?query={query}",
    "blinkit": "https://blinkit.com/s/?q={query}",
    "instamart": "https://www.swiggy.com/instamart/search?query={query}",
    "bigbasket": "https://www.bigbasket.com/ps/?q={query}",
    "jiomart": "https://www.jiomart.com/search/{query}",
    "dmart": "https://www.dmart.in/search?searchTerm={query}",
}

PROVIDER_NAMES: dict[str, str] = {
    "zepto": "Zepto",
    "blinkit": "Blinkit",
    "instamart": "Instamart",
    "bigbasket": "BigBasket",
    "jiomart": "JioMart",
    "dmart": "Dmart",
}

_PRICE_RE = re.compile(r"(\d+(?:\.\d+)?)")
_SIZE_IN_NAME_RE = re.compile(
    r"\d+(?:\.\d+)?\s*(?:x\s*\d+(?:\.\d+)?\s*)?(?:kg|g|gm|ml|l|ltr|litre|pcs|pc)\b",
    re.IGNORECASE,
)
_JSON_LD_RE = re.compile(
    r"<script[^>]*type=[\"']application/ld\+json[\"'][^>]*>(.*?)</script>",
    re.IGNORECASE | re.DOTALL,
)


def _clean_text(value: str) -> str:
    return re.sub(r"\s+", " ", unescape(value or "")).strip()


def _extract_price(value: str) -> Optional[float]:
    txt = _clean_text(value).replace(",", "")
    match = _PRICE_RE.search(txt)
    if not match:
        return None
    try:
        return float(match.group(1))
    except ValueError:
        return None


def _extract_unit(product: dict, title: str) -> Optional[str]:
    for key in ("size", "weight"):
        node = product.get(key)
        if isinstance(node, dict):
            value = node.get("value")
            unit = node.get("unitText") or node.get("unitCode") or ""
            if value is not None:
                return _clean_text(f"{value} {unit}")
        elif node:
            return _clean_text(str(node))
    match = _SIZE_IN_NAME_RE.search(title)
    return match.group(0) if match else None


def search_url(provider: str, category: str) -> str:
    template = os.getenv(f"{provider.upper()}_SEARCH_URL", DEFAULT_SEARCH_URLS[provider])
    return template.format(query=quote_plus(category))


def _fetch_html(url: str) -> str:
    req = Request(
        url,
        headers={
            "User-Agent": os.getenv("SASTA_USER_AGENT", DEFAULT_USER_AGENT),
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        },
    )
    with urlopen(req, timeout=DEFAULT_TIMEOUT_SECONDS) as resp:
        return resp.read().decode("utf-8", errors="ignore")


def _walk(node: object):
    if isinstance(node, list):
        for item in node:
            yield from _walk(item)
    elif isinstance(node, dict):
        yield node
        if isinstance(node.get("@graph"), list):
            yield from _walk(node["@graph"])
        if isinstance(node.get("itemListElement"), list):
            yield from _walk(node["itemListElement"])


def parse_listings_from_json_ld(
    html: str,
    *,
    provider: str,
    base_url: str,
    category: str,
    now: datetime,
    max_items: int = 50,
) -> list[RawListing]:
    listings: list[RawListing] = []
    seen: set[str] = set()
    for match in _JSON_LD_RE.findall(html):
        raw = match.strip()
        if not raw:
            continue
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError:
            continue

        for entry in _walk(payload):
            if entry.get("@type") == "ListItem":
                entry = entry.get("item")
                if not isinstance(entry, dict):
                    continue
            if entry.get("@type") != "Product":
                continue

            title = _clean_text(str(entry.get("name") or ""))
            url = _clean_text(str(entry.get("url") or ""))
            offers_node = entry.get("offers")
            if isinstance(offers_node, list):
                offers_node = offers_node[0] if offers_node else None
            price = None
            if isinstance(offers_node, dict):
                price = _extract_price(str(offers_node.get("price") or offers_node.get("lowPrice") or ""))
            if not title or price is None or price <= 0:
                continue
            if url and not url.startswith("http"):
                url = urljoin(base_url, url)
            if url in seen and url:
                continue
            seen.add(url)

            brand_value = entry.get("brand")
            if isinstance(brand_value, dict):
                brand = _clean_text(str(brand_value.get("name") or ""))
            else:
                brand = _clean_text(str(brand_value or ""))

            listings.append(
                RawListing(
                    name=title,
                    brand=brand or None,
                    category=category,
                    provider=PROVIDER_NAMES.get(provider, provider),
                    price=price,
                    unit=_extract_unit(entry, title),
                    url=url or None,
                    fetched_at=now,
                    product_id=None,
                )
            )
            if len(listings) >= max_items:
                return listings
    return listings


def collect_provider(provider: str, category: str = "grocery", max_items: int = 50) -> list[RawListing]:
    url = search_url(provider, category)
    now = datetime.now(timezone.utc)
    try:
        html = _fetch_html(url)
    except (HTTPError, URLError, TimeoutError, ValueError) as exc:
        logger.warning("Fetching %s failed: %s", url, exc)
        return []
    listings = parse_listings_from_json_ld(
        html, provider=provider, base_url=url, category=category, now=now, max_items=max_items
    )
    logger.info("Collected %d listings from %s", len(listings), provider)
    return listings
