from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from src.normalization.providers import CanonicalProvider, canonical_key, display_name

DEFAULT_CART_PROVIDERS = (
    CanonicalProvider.ZEPTO.value,
    CanonicalProvider.BLINKIT.value,
    CanonicalProvider.INSTAMART.value,
    CanonicalProvider.BIGBASKET.value,
    CanonicalProvider.JIOMART.value,
    CanonicalProvider.DMART.value,
    CanonicalProvider.SWIGGY.value,
)


@dataclass
class CartLine:
    product_id: str
    name: str
    price: float
    qty: int = 1

    @property
    def subtotal(self) -> float:
        return round(self.price * self.qty, 2)


@dataclass
class ProviderCart:
    provider_key: str
    display_name: str
    lines: list[CartLine] = field(default_factory=list)

    @property
    def item_count(self) -> int:
        return sum(line.qty for line in self.lines)

    @property
    def total(self) -> float:
        return round(sum(line.price * line.qty for line in self.lines), 2)


@dataclass
class CartEntry:
    provider: str
    product_id: str
    name: str = ""
    price: float = 0.0
    qty: int = 1


class ProviderCarts:
    """Shopping carts kept separately for each canonical provider."""

    def __init__(self, providers: Iterable[str] = DEFAULT_CART_PROVIDERS):
        self._carts: dict[str, ProviderCart] = {}
        for provider in providers:
            self._cart_for(provider)

    def _cart_for(self, provider: str) -> ProviderCart:
        key = canonical_key(provider)
        cart = self._carts.get(key)
        if cart is None:
            cart = ProviderCart(provider_key=key, display_name=display_name(provider))
            self._carts[key] = cart
        return cart

    def add(self, provider: str, product_id: str, *, name: str = "", price: float = 0.0, qty: int = 1) -> ProviderCart:
        cart = self._cart_for(provider)
        for line in cart.lines:
            if line.product_id == str(product_id):
                line.qty += qty
                return cart
        cart.lines.append(CartLine(product_id=str(product_id), name=name, price=float(price), qty=qty))
        return cart

    def remove(self, provider: str, product_id: str) -> ProviderCart:
        cart = self._cart_for(provider)
        cart.lines = [line for line in cart.lines if line.product_id != str(product_id)]
        return cart

    def clear(self, provider: str) -> ProviderCart:
        cart = self._cart_for(provider)
        cart.lines = []
        return cart

    def get(self, provider: str) -> Optional[ProviderCart]:
        return self._carts.get(canonical_key(provider))

    def carts(self) -> list[ProviderCart]:
        return list(self._carts.values())


def build_carts(entries: Iterable[CartEntry]) -> ProviderCarts:
    carts = ProviderCarts()
    for entry in entries:
        if entry.qty <= 0:
            continue
        carts.add(entry.provider, entry.product_id, name=entry.name, price=entry.price, qty=entry.qty)
    return carts
