from src.collectors.base import RawListing
from src.collectors.registry import collect_all


def test_mock_mode_collects_every_provider() -> None:
    listings, reports = collect_all("grocery", use_mocks=True)
    assert len(listings) == 12
    assert {r.source for r in reports} == {"mock"}
    assert all(item.category == "grocery" for item in listings)


def test_live_failure_and_empty_results_fall_back_to_demo() -> None:
    def broken(category: str) -> list[RawListing]:
        raise RuntimeError("blocked")

    def live_zepto(category: str) -> list[RawListing]:
        return [RawListing(name="Tata Salt 1 kg", provider="Zepto", price=31, unit="1 kg")]

    listings, reports = collect_all(
        "grocery",
        use_mocks=False,
        providers=["zepto", "blinkit", "dmart"],
        live_collectors={
            "zepto": live_zepto,
            "blinkit": broken,
            "dmart": lambda category: [],
        },
    )
    by_provider = {r.provider: r for r in reports}
    assert by_provider["zepto"].source == "live"
    assert by_provider["zepto"].count == 1
    assert by_provider["blinkit"].source == "fallback"
    assert by_provider["blinkit"].error == "blocked"
    assert by_provider["dmart"].source == "fallback"
    assert by_provider["dmart"].error is None
    assert len(listings) == 1 + 2 + 2


def test_unknown_provider_is_skipped() -> None:
    listings, reports = collect_all("grocery", use_mocks=True, providers=["nowhere"])
    assert listings == []
    assert reports == []
