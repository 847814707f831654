from src.carts.provider_carts import DEFAULT_CART_PROVIDERS, CartEntry, ProviderCarts, build_carts


def test_carts_start_empty_for_default_providers() -> None:
    carts = ProviderCarts()
    assert [cart.provider_key for cart in carts.carts()] == list(DEFAULT_CART_PROVIDERS)
    assert all(cart.total == 0 for cart in carts.carts())


def test_add_merges_same_product_and_keys_by_canonical_provider() -> None:
    carts = ProviderCarts()
    carts.add("Zepto", "A1", name="Atta", price=399)
    cart = carts.add("zepto ", "A1", name="Atta", price=399, qty=2)
    assert len(cart.lines) == 1
    assert cart.item_count == 3
    assert cart.total == 1197.0
    assert carts.get("ZEPTO") is cart


def test_remove_and_clear() -> None:
    carts = ProviderCarts()
    carts.add("Big Basket", "A1", price=398)
    carts.add("bigbasket", "A3", price=50)
    assert carts.remove("BigBasket", "A1").item_count == 1
    assert carts.clear("bigbasket").lines == []


def test_unknown_provider_gets_its_own_cart() -> None:
    carts = ProviderCarts(providers=())
    cart = carts.add("Corner Store", "x1", price=10.5, qty=2)
    assert cart.provider_key == "cornerstore"
    assert cart.lines[0].subtotal == 21.0


def test_build_carts_skips_zero_quantities() -> None:
    carts = build_carts(
        [
            CartEntry(provider="Dmart", product_id="A5", price=13, qty=0),
            CartEntry(provider="JioMart", product_id="A5", price=12, qty=3),
        ]
    )
    assert carts.get("dmart").lines == []
    assert carts.get("jiomart").total == 36.0
