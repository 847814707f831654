from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.collectors.base import RawListing
from src.config import configure_logging
from src.grouping.merger import build_product_groups
from src.grouping.similarity import SIM_THRESHOLD


def main() -> None:
    parser = argparse.ArgumentParser(description="Group a JSON file of raw listings into product groups.")
    parser.add_argument("path", help="JSON array of listings (name, brand, provider, price, unit, ...)")
    parser.add_argument("--threshold", type=float, default=SIM_THRESHOLD)
    parser.add_argument("--out", default=None, help="Write groups as JSON instead of printing a summary")
    parser.add_argument("--verbose", action="store_true", help="Log merge decisions")
    args = parser.parse_args()

    configure_logging("DEBUG" if args.verbose else "WARNING")
    rows = json.loads(Path(args.path).read_text(encoding="utf-8"))
    listings = [RawListing.from_dict(row) for row in rows]
    groups = build_product_groups(listings, threshold=args.threshold)

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(json.dumps([g.to_dict() for g in groups], indent=2), encoding="utf-8")
        print("Wrote", len(groups), "groups to", str(out_path))
        return

    for group in groups:
        print(f"{group.name} [{group.brand or '-'}] {group.unit or '-'}  key={group.key}")
        for listing in group.listings:
            norm = "N/A"
            if listing.normalized_price is not None:
                norm = f"{listing.normalized_price} {listing.normalized_unit}"
            print(f"   {listing.provider_display:<10} {listing.price:>8.2f}  {norm}")


if __name__ == "__main__":
    main()
