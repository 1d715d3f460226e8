"""
Loot scrape pipeline.

Fetches the loot page, extracts items and fills in recycled sell prices.
A failure to fetch the loot page propagates as FetchError; everything
after that degrades to missing values instead of failing the run.
"""

import logging
from dataclasses import dataclass

from arc_loot.extractor import extract_items
from arc_loot.fetcher import PageFetcher
from arc_loot.models import Item
from arc_loot.pricing import DetailPriceLookup, PriceMap, RateLimiter, compute_recycled_prices

log = logging.getLogger(__name__)


@dataclass
class ScrapeResult:
    items: list[Item]
    strategy: str | None
    detail_fetches: int = 0


def scrape_loot(
    fetcher: PageFetcher,
    loot_path: str,
    *,
    fetch_missing_prices: bool = True,
    null_zero_total: bool = False,
    request_delay: float = 0.5,
) -> ScrapeResult:
    log.info("Fetching loot page %s", fetcher.url_for(loot_path))
    html = fetcher.fetch(loot_path)
    log.info("Loot page: %d chars", len(html))

    extraction = extract_items(html)
    log.info("Found %d items", len(extraction.items))

    price_map = PriceMap.from_items(extraction.items)
    lookup = None
    if fetch_missing_prices:
        lookup = DetailPriceLookup.for_items(
            fetcher, RateLimiter(request_delay), extraction.items
        )

    log.info("Calculating recycled sell prices (%d known prices)", len(price_map))
    items = compute_recycled_prices(
        extraction.items,
        price_map=price_map,
        lookup=lookup,
        null_zero_total=null_zero_total,
    )
    return ScrapeResult(
        items=items,
        strategy=extraction.strategy,
        detail_fetches=lookup.fetch_count if lookup else 0,
    )
