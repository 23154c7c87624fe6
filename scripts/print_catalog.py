#!/usr/bin/env python3
"""Print the normalized catalog served by a running rnbadmin backend.

Usage:
    # Start the backend first:
    uvicorn rnbadmin.web.app:create_app --factory --port 8080

    # List every item:
    python3 scripts/print_catalog.py

    # Filter like the sidebar does:
    python3 scripts/print_catalog.py --mode rnb --query K2PD

    # Against a different host:
    python3 scripts/print_catalog.py --base-url http://localhost:9000
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from rnbadmin.catalog import CatalogLoadError, FilterMode, ItemCatalogFetcher, filter_items
from rnbadmin.core.config import ApiConfig

DEFAULT_BASE_URL = "http://localhost:8080"


async def run(base_url: str, query: str, mode: str) -> int:
    fetcher = ItemCatalogFetcher(ApiConfig(base_url=base_url))
    try:
        items = await fetcher.fetch_items()
    except CatalogLoadError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    finally:
        await fetcher.close()

    for item in filter_items(items, query, mode):
        lat, lng = item.coordinates
        rnb = ", ".join(item.rnb_ids) or "-"
        print(f"{item.id:>10}  {item.name}")
        print(f"{'':>10}  {item.address}")
        print(f"{'':>10}  ({lat:.5f}, {lng:.5f})  RNB: {rnb}")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL)
    parser.add_argument("--query", default="")
    parser.add_argument(
        "--mode",
        default=FilterMode.ALL.value,
        choices=[mode.value for mode in FilterMode],
    )
    args = parser.parse_args()
    sys.exit(asyncio.run(run(args.base_url, args.query, args.mode)))


if __name__ == "__main__":
    main()
