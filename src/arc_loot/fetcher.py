"""
HTTP client for the ARC Raiders wiki.

Requests carry a browser-like User-Agent; the wiki rejects the default
httpx identity. Every failure (non-2xx status, timeout, connection
problem) surfaces as FetchError so callers can decide whether it is
fatal.
"""

import logging
from collections.abc import Callable
from urllib.parse import urljoin

import httpx

from arc_loot.cache import CacheClient
from arc_loot.config import Settings
from arc_loot.exceptions import ExtractionError, FetchError

log = logging.getLogger(__name__)


class PageFetcher:
    def __init__(self, settings: Settings, cache: CacheClient | None = None):
        self._settings = settings
        self._cache = cache

    def url_for(self, path_or_url: str) -> str:
        if not path_or_url or not path_or_url.strip():
            raise ExtractionError("Page path cannot be empty")
        return urljoin(self._settings.base_url.rstrip("/") + "/", path_or_url.strip())

    def fetch(self, path_or_url: str) -> str:
        url = self.url_for(path_or_url)
        log.debug("GET %s", url)
        try:
            response = httpx.get(
                url,
                headers={"User-Agent": self._settings.user_agent},
                timeout=self._settings.api_timeout,
                follow_redirects=True,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(url, f"HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            raise FetchError(url, f"network error: {e}") from e

        return response.text

    def fetch_detail(
        self, path_or_url: str, throttle: Callable[[], None] | None = None
    ) -> str:
        url = self.url_for(path_or_url)
        if self._cache is not None:
            cached = self._cache.get_detail_page(url)
            if cached is not None:
                log.debug("Detail page '%s': using cached HTML", url)
                return cached

        if throttle is not None:
            throttle()
        html = self.fetch(url)
        if self._cache is not None:
            self._cache.set_detail_page(url, html)
        return html
