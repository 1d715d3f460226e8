"""Sell price lookup on individual item detail pages."""

import re

from bs4 import BeautifulSoup

# Accepts "1,750", "1 750", "1.750", "1750"
_NUMBER_PATTERN = r"([0-9](?:[0-9.,]|[ \u00a0](?=[0-9]))*)"
_NUMBER = re.compile(_NUMBER_PATTERN)
_PRICE_LABEL = re.compile(r"sell(?:ing)?\s*price|sell\s*value|price|value", re.IGNORECASE)
_PRICE_IN_TEXT = re.compile(
    r"(?:Sell(?:ing)?\s*Price|Sell\s*Value|Price|Value)\s*[:\-]?\s*" + _NUMBER_PATTERN,
    re.IGNORECASE,
)


def parse_number(text: str) -> int | None:
    match = _NUMBER.search(text)
    if not match:
        return None
    normalized = re.sub(r"[\s.,]", "", match.group(1))
    if not normalized:
        return None
    return int(normalized)


def _price_from_infobox(soup: BeautifulSoup) -> int | None:
    for row in soup.select(".infobox tr, table.infobox tr"):
        label = row.find(["th", "dt"])
        value = row.find(["td", "dd"])
        if label is None or value is None:
            continue
        if _PRICE_LABEL.search(label.get_text(" ", strip=True)):
            price = parse_number(value.get_text(" ", strip=True))
            if price is not None:
                return price
    return None


def parse_detail_sell_price(html: str) -> int | None:
    soup = BeautifulSoup(html, "lxml")

    price = _price_from_infobox(soup)
    if price is not None:
        return price

    text = soup.get_text("\n", strip=True)
    match = _PRICE_IN_TEXT.search(text)
    if match:
        return parse_number(match.group(1))
    return None
