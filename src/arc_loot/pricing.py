"""
Recycled value computation for loot items.

An item's recycled sell price is the summed market value of everything it
recycles into: sum(price(component) * quantity). Component prices come
from a PriceMap built from the loot table itself. When a component has no
price in the table, its detail page can be fetched on demand. Detail
fetches run one at a time and only network requests wait on the
RateLimiter; a price found that way is memoized for the rest of the run.

Result per item:
  - no recycle components        -> 0
  - any component still unpriced -> None
  - otherwise                    -> the total (None instead of 0 when
                                    null_zero_total is set)
"""

import logging
import time
from collections.abc import Callable, Iterable
from urllib.parse import quote

from arc_loot.detail import parse_detail_sell_price
from arc_loot.exceptions import FetchError
from arc_loot.fetcher import PageFetcher
from arc_loot.models import Item

log = logging.getLogger(__name__)


class PriceMap:
    """Name -> sell price for a single scrape run. Later writes win."""

    def __init__(self, prices: dict[str, int] | None = None):
        self._prices: dict[str, int] = dict(prices or {})

    @classmethod
    def from_items(cls, items: Iterable[Item]) -> "PriceMap":
        price_map = cls()
        for item in items:
            if item.sell_price is None:
                continue
            if item.name in price_map:
                log.debug(
                    "Duplicate item name '%s': price %d replaces %d",
                    item.name,
                    item.sell_price,
                    price_map.get(item.name),
                )
            price_map.set(item.name, item.sell_price)
        return price_map

    def get(self, name: str) -> int | None:
        return self._prices.get(name)

    def set(self, name: str, price: int) -> None:
        self._prices[name] = price

    def __contains__(self, name: object) -> bool:
        return name in self._prices

    def __len__(self) -> int:
        return len(self._prices)


class RateLimiter:
    def __init__(
        self,
        min_interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last: float | None = None

    def wait(self) -> None:
        if self._last is not None:
            remaining = self._min_interval - (self._clock() - self._last)
            if remaining > 0:
                self._sleep(remaining)
        self._last = self._clock()


def wiki_path_for(name: str) -> str:
    return "/wiki/" + quote(name.strip().replace(" ", "_"))


class DetailPriceLookup:
    """Fetches component detail pages one at a time to discover missing prices."""

    def __init__(
        self,
        fetcher: PageFetcher,
        limiter: RateLimiter,
        links: dict[str, str] | None = None,
    ):
        self._fetcher = fetcher
        self._limiter = limiter
        self._links = links or {}
        self._misses: set[str] = set()
        self.fetch_count = 0

    @classmethod
    def for_items(
        cls, fetcher: PageFetcher, limiter: RateLimiter, items: Iterable[Item]
    ) -> "DetailPriceLookup":
        links = {item.name: item.link for item in items if item.link}
        return cls(fetcher, limiter, links)

    def lookup(self, name: str) -> int | None:
        if name in self._misses:
            return None

        path = self._links.get(name) or wiki_path_for(name)
        self.fetch_count += 1
        log.info("Fetching detail page for '%s' (%s)", name, path)
        try:
            html = self._fetcher.fetch_detail(path, throttle=self._limiter.wait)
        except FetchError as e:
            log.warning("Could not fetch detail page for '%s': %s", name, e.reason)
            self._misses.add(name)
            return None

        price = parse_detail_sell_price(html)
        if price is None:
            log.warning("No sell price found on detail page for '%s'", name)
            self._misses.add(name)
        return price


def _recycled_value(
    item: Item,
    price_map: PriceMap,
    lookup: DetailPriceLookup | None,
    null_zero_total: bool,
) -> int | None:
    if not item.recycles_to_items:
        return 0

    total = 0
    missing: list[str] = []
    for component in item.recycles_to_items:
        price = price_map.get(component.name)
        if price is None and lookup is not None:
            price = lookup.lookup(component.name)
            if price is not None:
                price_map.set(component.name, price)
        if price is None:
            missing.append(component.name)
            continue
        total += price * component.quantity

    if missing:
        log.warning("'%s': no price for %s", item.name, ", ".join(missing))
        return None
    if total == 0 and null_zero_total:
        return None
    return total


def compute_recycled_prices(
    items: list[Item],
    *,
    price_map: PriceMap | None = None,
    lookup: DetailPriceLookup | None = None,
    null_zero_total: bool = False,
) -> list[Item]:
    if price_map is None:
        price_map = PriceMap.from_items(items)

    priced: list[Item] = []
    for item in items:
        value = _recycled_value(item, price_map, lookup, null_zero_total)
        priced.append(item.model_copy(update={"recycled_sell_price": value}))
    return priced
