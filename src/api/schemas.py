from typing import List, Optional
from pydantic import BaseModel, Field


class Listing(BaseModel):
    listing_id: Optional[str]
    product_id: Optional[str]
    name: str
    brand: Optional[str]
    category: Optional[str]
    provider: str
    provider_key: str
    provider_display: str
    price: float
    unit: Optional[str]
    url: Optional[str]
    fetched_at: Optional[str]
    normalized_price: Optional[float]
    normalized_unit: Optional[str]


class ListingListResponse(BaseModel):
    items: List[Listing]


class ProductGroupOut(BaseModel):
    key: str
    name: str
    brand: str
    unit: str
    listings: List[Listing]


class GroupListResponse(BaseModel):
    items: List[ProductGroupOut]


class UnmappedListing(BaseModel):
    listing_id: int
    product_id: Optional[int]
    raw_name: Optional[str]
    provider: str
    unit: Optional[str]
    price: float
    fetched_at: Optional[str]
    url: Optional[str]


class UnmappedCount(BaseModel):
    count: int


class MapRequest(BaseModel):
    listing_id: int
    product_id: Optional[int] = None
    normalized_price: Optional[float] = Field(default=None, ge=0)
    normalized_unit: Optional[str] = None


class MapResponse(BaseModel):
    success: bool
    updated: dict


class CacheDeleteRequest(BaseModel):
    key: Optional[str] = None


class CartItemIn(BaseModel):
    provider: str
    product_id: str
    name: str = ""
    price: float = Field(default=0.0, ge=0)
    qty: int = Field(default=1, ge=0)


class CartRequest(BaseModel):
    items: List[CartItemIn]


class CartLineOut(BaseModel):
    product_id: str
    name: str
    price: float
    qty: int
    subtotal: float


class ProviderCartOut(BaseModel):
    provider_key: str
    display_name: str
    item_count: int
    total: float
    lines: List[CartLineOut]


class CartSummary(BaseModel):
    carts: List[ProviderCartOut]
