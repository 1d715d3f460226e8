"""
Terminal output for the scrape CLI.

Status lines are colored for dark terminal backgrounds. Color is dropped
when stdout is not a TTY so output stays clean in CI logs and redirects.
"""

import sys
from enum import Enum
from typing import TextIO

from arc_loot.models import Item


class Color(Enum):
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    GREY = "\033[90m"
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"


def _supports_color() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def colorize(text: str, *colors: Color) -> str:
    if not colors or not _supports_color():
        return text
    return "".join(c.value for c in colors) + text + Color.RESET.value


def _emit(text: str, *colors: Color, stream: TextIO | None = None) -> None:
    print(colorize(text, *colors), file=stream or sys.stdout)


def info(message: str) -> None:
    _emit(message)


def debug(message: str) -> None:
    _emit(message, Color.DIM, Color.GREY)


def success(message: str) -> None:
    _emit(message, Color.GREEN)


def warning(message: str) -> None:
    _emit(f"⚠ {message}", Color.YELLOW)


def error(message: str) -> None:
    _emit(f"✗ {message}", Color.RED, stream=sys.stderr)


def code_block(content: str) -> None:
    _emit(content, Color.DIM)


def section_header(title: str) -> None:
    rule = "=" * 60
    _emit("\n" + rule, Color.BLUE)
    _emit(title, Color.BOLD, Color.CYAN)
    _emit(rule, Color.BLUE)


def bullet(message: str, indent: int = 2, symbol: str = "•") -> None:
    _emit(f"{' ' * indent}{colorize(symbol, Color.BLUE)} {message}")


def format_price(price: int | None) -> str:
    return "?" if price is None else f"{price:,}"


def item_summary(item: Item) -> str:
    recycles = item.recycles_to_text or "-"
    return (
        f"{colorize(item.name, Color.BOLD)}: Sell={format_price(item.sell_price)}, "
        f"Recycles to: {recycles}, "
        f"Recycled Value={format_price(item.recycled_sell_price)}"
    )
