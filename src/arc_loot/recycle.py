"""
Parsing of free-text recycling yields.

Turns loot table text such as "2x Metal Parts, 1x Wires" into ordered
RecycleComponent lists. Wiki cells frequently lose the comma between two
linked entries ("Metal Parts2x Wires") or put each entry on its own line,
so missing boundaries are restored before splitting. Segments that do not
look like "<qty>x <name>" or "<qty> <name>" are dropped silently.
"""

import re

from arc_loot.models import RecycleComponent

NOT_RECYCLABLE = frozenset({"", "-", "N/A", "?"})
_NOT_RECYCLABLE_PHRASE = "cannot be recycled"

_LINE_BREAK = re.compile(r"\s*\n\s*")
_MISSING_SEPARATOR = re.compile(r"([A-Za-z])(\d+\s*[xX])")
_SEGMENT = re.compile(r"^(\d+)(?:\s*[xX]\s*|\s+(?=\D))(\S.*)$")


def is_not_recyclable(text: str | None) -> bool:
    if text is None:
        return True
    stripped = text.strip()
    return stripped in NOT_RECYCLABLE or _NOT_RECYCLABLE_PHRASE in stripped.lower()


def normalize_recycle_text(text: str) -> str:
    text = _LINE_BREAK.sub(", ", text.strip())
    return _MISSING_SEPARATOR.sub(r"\1, \2", text)


def parse_recycle_text(text: str | None) -> list[RecycleComponent]:
    if is_not_recyclable(text):
        return []

    components: list[RecycleComponent] = []
    for segment in normalize_recycle_text(text).split(","):
        segment = segment.strip()
        if not segment:
            continue
        match = _SEGMENT.match(segment)
        if not match:
            continue
        quantity = int(match.group(1))
        name = match.group(2).strip()
        if quantity < 1 or not name:
            continue
        components.append(RecycleComponent(quantity=quantity, name=name))
    return components


def format_recycle_components(components: list[RecycleComponent]) -> str:
    return ", ".join(f"{c.quantity}x {c.name}" for c in components)
