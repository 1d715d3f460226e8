"""Reading and writing the loot data JSON document."""

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from pydantic import ValidationError

from arc_loot.exceptions import StorageError
from arc_loot.models import Item, LootData

log = logging.getLogger(__name__)


def build_loot_data(items: list[Item], now: datetime | None = None) -> LootData:
    timestamp = (now or datetime.now(UTC)).isoformat()
    return LootData(last_updated=timestamp, items=items)


def dump_loot_data(data: LootData) -> str:
    return json.dumps(data.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False)


def write_loot_data(items: list[Item], path: Path, now: datetime | None = None) -> LootData:
    data = build_loot_data(items, now=now)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dump_loot_data(data) + "\n", encoding="utf-8")
    except OSError as e:
        raise StorageError(f"Failed to write {path}: {e}") from e

    log.info("Wrote %d items to %s", len(items), path)
    return data


def read_loot_data(path: Path) -> LootData:
    try:
        with path.open(encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise StorageError(f"Failed to read {path}: {e}") from e

    try:
        return LootData.model_validate(raw)
    except ValidationError as e:
        raise StorageError(f"Invalid loot data in {path}: {e}") from e
