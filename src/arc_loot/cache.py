"""
Cache layer for item detail pages using diskcache.

Detail pages are only fetched to fill gaps in the loot table's price
column, so they are kept across runs for a configurable TTL to avoid
hitting the wiki for the same page every time. The loot page itself is
never cached.
"""

from pathlib import Path

from diskcache import Cache as DiskCache


class CacheClient:
    def __init__(self, cache_dir: Path, ttl: int | None = None):
        self._cache_dir = cache_dir
        self._cache_dir.mkdir(parents=True, exist_ok=True)
        self._cache = DiskCache(str(self._cache_dir))
        self._ttl = ttl or None

    def get_detail_page(self, url: str) -> str | None:
        return self._cache.get(f"detail:{url}")

    def set_detail_page(self, url: str, content: str) -> None:
        self._cache.set(f"detail:{url}", content, expire=self._ttl, tag="detail")

    def clear_cache(self) -> None:
        self._cache.evict("detail")
