from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from src import config
from src.api.schemas import (
    CacheDeleteRequest,
    CartLineOut,
    CartRequest,
    CartSummary,
    GroupListResponse,
    Listing,
    ListingListResponse,
    MapRequest,
    MapResponse,
    ProductGroupOut,
    ProviderCartOut,
    UnmappedCount,
    UnmappedListing,
)
from src.cache.store import TTLCache, products_cache_key
from src.carts.provider_carts import CartEntry, build_carts
from src.collectors.base import RawListing
from src.db.migrate import run_migrations
from src.db.repository import count_unmapped, fetch_unmapped, map_listing
from src.grouping.cheapest import cheapest_per_product
from src.grouping.merger import ProductGroup, build_product_groups
from src.jobs.aggregate import load_listings
from src.normalization.providers import canonical_key, display_name

logger = logging.getLogger(__name__)

app = FastAPI(title="Sasta-Samaan Grocery Price Compare API", version="0.1.0")
app.add_middleware(CORSMiddleware, allow_origins=[config.FRONTEND_ORIGIN], allow_methods=["*"], allow_headers=["*"])

product_cache = TTLCache(ttl_seconds=config.MEMORY_CACHE_TTL_SEC)


@app.on_event("startup")
def startup() -> None:
    config.configure_logging()
    run_migrations()


def _to_listing(item: RawListing) -> Listing:
    return Listing(
        listing_id=item.listing_id,
        product_id=str(item.product_id) if item.product_id is not None else None,
        name=item.name,
        brand=item.brand,
        category=item.category,
        provider=item.provider,
        provider_key=item.provider_key or canonical_key(item.provider),
        provider_display=item.provider_display or display_name(item.provider),
        price=float(item.price),
        unit=item.unit,
        url=item.url,
        fetched_at=item.fetched_at.isoformat() if item.fetched_at else None,
        normalized_price=item.normalized_price,
        normalized_unit=item.normalized_unit,
    )


def _to_group(group: ProductGroup) -> ProductGroupOut:
    return ProductGroupOut(
        key=group.key,
        name=group.name,
        brand=group.brand,
        unit=group.unit,
        listings=[_to_listing(item) for item in group.listings],
    )


def _cached_listings(category: str, provider: Optional[str]) -> list[RawListing]:
    key = products_cache_key(category, provider)
    cached = product_cache.get(key)
    if cached is not None:
        return cached
    listings = load_listings(category, provider)
    product_cache.set(key, listings)
    return listings


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@app.get("/products", response_model=ListingListResponse)
def get_products(
    category: str = Query(default=config.DEFAULT_CATEGORY),
    provider: Optional[str] = Query(default=None),
) -> ListingListResponse:
    listings = _cached_listings(category, provider)
    return ListingListResponse(items=[_to_listing(item) for item in listings])


@app.get("/products/groups", response_model=GroupListResponse)
def get_product_groups(
    category: str = Query(default=config.DEFAULT_CATEGORY),
    provider: Optional[str] = Query(default=None),
    q: Optional[str] = Query(default=None),
) -> GroupListResponse:
    listings = _cached_listings(category, provider)
    if q:
        needle = q.strip().lower()
        listings = [item for item in listings if needle in (item.name or "").lower()]
    groups = build_product_groups(listings)
    return GroupListResponse(items=[_to_group(group) for group in groups])


@app.get("/products/cheapest", response_model=ListingListResponse)
def get_cheapest(category: str = Query(default=config.DEFAULT_CATEGORY)) -> ListingListResponse:
    listings = _cached_listings(category, None)
    return ListingListResponse(items=[_to_listing(item) for item in cheapest_per_product(listings)])


@app.get("/products/{item_id}", response_model=ListingListResponse)
def get_product(item_id: str, category: str = Query(default=config.DEFAULT_CATEGORY)) -> ListingListResponse:
    listings = _cached_listings(category, None)
    matches = [
        item
        for item in listings
        if str(item.listing_id) == item_id or (item.product_id is not None and str(item.product_id) == item_id)
    ]
    if not matches:
        raise HTTPException(status_code=404, detail="product_not_found")
    return ListingListResponse(items=[_to_listing(item) for item in matches])


@app.get("/admin/unmapped", response_model=list[UnmappedListing])
def get_unmapped(limit: int = Query(default=200, ge=1, le=1000)) -> list[UnmappedListing]:
    return [UnmappedListing(**row) for row in fetch_unmapped(limit=limit)]


@app.get("/admin/unmapped/count", response_model=UnmappedCount)
def get_unmapped_count() -> UnmappedCount:
    return UnmappedCount(count=count_unmapped())


@app.post("/admin/map", response_model=MapResponse)
def post_map(req: MapRequest) -> MapResponse:
    fields = req.model_dump(exclude_unset=True)
    fields.pop("listing_id", None)
    try:
        updated = map_listing(req.listing_id, **fields)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    cleared = product_cache.clear()
    logger.info("Mapped listing %s, cleared %d cached responses", req.listing_id, cleared)
    return MapResponse(success=True, updated=updated)


@app.post("/internal/cache/clear")
def clear_cache() -> dict[str, object]:
    product_cache.clear()
    return {"success": True, "cleared": True}


@app.post("/internal/cache/delete")
def delete_cache_key(req: CacheDeleteRequest) -> dict[str, object]:
    if not req.key:
        raise HTTPException(status_code=400, detail="key_required")
    product_cache.delete(req.key)
    return {"success": True, "key": req.key}


@app.post("/carts/summary", response_model=CartSummary)
def cart_summary(req: CartRequest) -> CartSummary:
    carts = build_carts(
        CartEntry(provider=item.provider, product_id=item.product_id, name=item.name, price=item.price, qty=item.qty)
        for item in req.items
    )
    return CartSummary(
        carts=[
            ProviderCartOut(
                provider_key=cart.provider_key,
                display_name=cart.display_name,
                item_count=cart.item_count,
                total=cart.total,
                lines=[
                    CartLineOut(
                        product_id=line.product_id,
                        name=line.name,
                        price=line.price,
                        qty=line.qty,
                        subtotal=line.subtotal,
                    )
                    for line in cart.lines
                ],
            )
            for cart in carts.carts()
        ]
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("src.main:app", host="0.0.0.0", port=config.PORT, reload=False)
