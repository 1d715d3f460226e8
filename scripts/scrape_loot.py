"""
CLI script for scraping the ARC Raiders loot table.

Runs the scrape pipeline:
1. Fetch the wiki loot page
2. Extract items (HTML table, falling back to pipe-delimited text)
3. Compute recycled sell prices, fetching missing prices on demand
4. Write the JSON document (data/loot-data.json by default)
"""

import argparse
import logging
import sys
from pathlib import Path

from arc_loot import terminal
from arc_loot.cache import CacheClient
from arc_loot.config import Settings, get_settings
from arc_loot.exceptions import ArcLootError, FetchError
from arc_loot.fetcher import PageFetcher
from arc_loot.scraper import ScrapeResult, scrape_loot
from arc_loot.storage import build_loot_data, dump_loot_data, write_loot_data

SAMPLE_SIZE = 3


def run(
    settings: Settings,
    output_path: Path,
    *,
    fetch_missing_prices: bool,
    null_zero_total: bool,
    dry_run: bool = False,
    use_cache: bool = True,
) -> ScrapeResult:
    cache = CacheClient(settings.cache_dir, ttl=settings.detail_cache_ttl) if use_cache else None
    fetcher = PageFetcher(settings, cache=cache)

    terminal.section_header(f"Loot table: {fetcher.url_for(settings.loot_path)}")
    result = scrape_loot(
        fetcher,
        settings.loot_path,
        fetch_missing_prices=fetch_missing_prices,
        null_zero_total=null_zero_total,
        request_delay=settings.request_delay,
    )

    if result.strategy is None:
        terminal.warning("No items found on the loot page")
    else:
        terminal.info(f"Parsed {len(result.items)} items ({result.strategy} strategy)")
    if result.detail_fetches:
        terminal.debug(f"Looked up {result.detail_fetches} detail page(s) for missing prices")

    unpriced = sum(1 for item in result.items if item.recycled_sell_price is None)
    if unpriced:
        terminal.warning(f"{unpriced} item(s) have an unknown recycled sell price")

    if dry_run:
        terminal.info(f"\nDRY RUN: Would write to {output_path}")
        terminal.code_block(dump_loot_data(build_loot_data(result.items)))
        return result

    write_loot_data(result.items, output_path)
    terminal.success(f"✓ Saved {len(result.items)} items to {output_path}")

    if result.items:
        terminal.info("\nSample items:")
        for item in result.items[:SAMPLE_SIZE]:
            terminal.bullet(terminal.item_summary(item))
    return result


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()

    parser = argparse.ArgumentParser(
        description="Scrape the ARC Raiders wiki loot table and compute recycled sell prices"
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=settings.output_path,
        help=f"Output JSON path (default: {settings.output_path})",
    )
    parser.add_argument("--dry-run", action="store_true", help="Print JSON instead of writing it")
    parser.add_argument(
        "--no-fetch-missing",
        dest="fetch_missing_prices",
        action="store_false",
        default=settings.fetch_missing_prices,
        help="Do not fetch detail pages for recycle outputs without a listed price",
    )
    parser.add_argument(
        "--null-zero-total",
        action="store_true",
        default=settings.null_zero_total,
        help="Report a recycled value of 0 as null for items that do recycle",
    )
    parser.add_argument("--no-cache", action="store_true", help="Bypass the detail page cache")
    parser.add_argument(
        "--clear-cache", action="store_true", help="Clear cached detail pages and exit"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(message)s",
    )

    if args.clear_cache:
        CacheClient(settings.cache_dir).clear_cache()
        terminal.success("Cache cleared (detail)")
        return 0

    try:
        run(
            settings,
            args.output,
            fetch_missing_prices=args.fetch_missing_prices,
            null_zero_total=args.null_zero_total,
            dry_run=args.dry_run,
            use_cache=not args.no_cache,
        )
    except FetchError as e:
        terminal.error(f"Could not fetch the loot page: {e}")
        return 1
    except ArcLootError as e:
        terminal.error(str(e))
        return 1
    except Exception as e:
        terminal.error(f"Unexpected error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
