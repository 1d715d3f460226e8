"""
Item extraction from the wiki loot page.

The loot page has been served in two shapes over time: a rendered HTML
table, and a page whose body text carries markdown-style pipe rows. Each
shape is handled by its own strategy; strategies are tried in priority
order and the first one that yields at least one item wins. Results from
different strategies are never merged.

Malformed rows are skipped rather than reported. An empty result is a
valid outcome that callers are expected to check.
"""

import logging
import re
from dataclasses import dataclass
from typing import Protocol

from bs4 import BeautifulSoup, Tag

from arc_loot.models import UNKNOWN_CATEGORY, Item
from arc_loot.recycle import normalize_recycle_text, parse_recycle_text

log = logging.getLogger(__name__)

MIN_TABLE_CELLS = 5
MIN_DELIMITED_SEGMENTS = 6
DEBUG_PREVIEW_CHARS = 2000

_DIGITS = re.compile(r"(\d+)")
_MARKDOWN_LINK = re.compile(r"\[(.+?)\]\((.+?)\)")


def parse_sell_price(text: str | None) -> int | None:
    if not text:
        return None
    cleaned = text.strip()
    if not cleaned or cleaned == "?":
        return None
    match = _DIGITS.search(cleaned.replace(",", ""))
    if not match:
        return None
    return int(match.group(1))


def _category(text: str) -> str:
    return text or UNKNOWN_CATEGORY


def _build_item(
    name: str, link: str, rarity: str, recycle_cell: str, price_cell: str, category: str
) -> Item:
    recycles_to_text = normalize_recycle_text(recycle_cell)
    return Item(
        name=name,
        link=link,
        rarity=rarity,
        recycles_to_text=recycles_to_text,
        recycles_to_items=parse_recycle_text(recycles_to_text),
        sell_price=parse_sell_price(price_cell),
        category=_category(category),
    )


class ExtractionStrategy(Protocol):
    name: str

    def extract(self, soup: BeautifulSoup) -> list[Item]: ...


class TableStrategy:
    """Rows of any table with at least five data cells."""

    name = "table"

    def extract(self, soup: BeautifulSoup) -> list[Item]:
        items: list[Item] = []
        for row in soup.select("table tr"):
            cells = row.find_all("td")
            if len(cells) < MIN_TABLE_CELLS:
                continue
            item = self._parse_row(cells)
            if item is not None:
                items.append(item)
        return items

    def _parse_row(self, cells: list[Tag]) -> Item | None:
        name_cell = cells[0]
        anchor = name_cell.find("a")
        name = anchor.get_text().strip() if anchor is not None else ""
        if not name:
            name = name_cell.get_text().strip()
        if not name:
            return None

        link = ""
        if anchor is not None:
            href = anchor.get("href")
            link = href.strip() if isinstance(href, str) else ""

        return _build_item(
            name=name,
            link=link,
            rarity=cells[1].get_text().strip(),
            recycle_cell=cells[2].get_text().strip(),
            price_cell=cells[3].get_text().strip(),
            category=cells[4].get_text().strip(),
        )


class DelimitedTextStrategy:
    """Pipe-delimited lines of page text whose first column is a markdown link."""

    name = "delimited-text"

    def extract(self, soup: BeautifulSoup) -> list[Item]:
        items: list[Item] = []
        for line in page_text(soup).split("\n"):
            item = self._parse_line(line.strip())
            if item is not None:
                items.append(item)
        return items

    def _parse_line(self, line: str) -> Item | None:
        if "|" not in line or not _MARKDOWN_LINK.search(line):
            return None

        # Markdown table rows open with a pipe; dropping it keeps the link in column 0.
        if line.startswith("|"):
            line = line[1:]
        segments = [segment.strip() for segment in line.split("|")]
        if len(segments) < MIN_DELIMITED_SEGMENTS:
            return None

        link_match = _MARKDOWN_LINK.search(segments[0])
        if not link_match:
            return None
        name = link_match.group(1).strip()
        if not name:
            return None

        return _build_item(
            name=name,
            link=link_match.group(2).strip(),
            rarity=segments[1],
            recycle_cell=segments[2],
            price_cell=segments[3],
            category=segments[4],
        )


DEFAULT_STRATEGIES: tuple[ExtractionStrategy, ...] = (TableStrategy(), DelimitedTextStrategy())


@dataclass
class ExtractionResult:
    items: list[Item]
    strategy: str | None


def parse_html(page_body: str) -> BeautifulSoup:
    return BeautifulSoup(page_body, "lxml")


def page_text(soup: BeautifulSoup) -> str:
    root = soup.body or soup
    return root.get_text()


def extract_items(
    page_body: str,
    strategies: tuple[ExtractionStrategy, ...] = DEFAULT_STRATEGIES,
) -> ExtractionResult:
    soup = parse_html(page_body)

    for strategy in strategies:
        items = strategy.extract(soup)
        if items:
            log.info("Parsed %d items with the %s strategy", len(items), strategy.name)
            return ExtractionResult(items=items, strategy=strategy.name)
        log.info("No items found with the %s strategy", strategy.name)

    log.warning(
        "No items found on page. First %d chars of page text:\n%s",
        DEBUG_PREVIEW_CHARS,
        page_text(soup)[:DEBUG_PREVIEW_CHARS],
    )
    return ExtractionResult(items=[], strategy=None)
