"""Pydantic models for loot table items and the output document."""

from __future__ import annotations

from pydantic import BaseModel, Field

UNKNOWN_CATEGORY = "Unknown"


class RecycleComponent(BaseModel):
    quantity: int = Field(ge=1)
    name: str = Field(min_length=1)


class Item(BaseModel):
    name: str = Field(min_length=1)
    link: str = ""
    rarity: str = ""
    recycles_to_text: str = Field(default="", alias="recyclesToText")
    recycles_to_items: list[RecycleComponent] = Field(
        default_factory=list, alias="recyclesToItems"
    )
    sell_price: int | None = Field(default=None, alias="sellPrice", ge=0)
    recycled_sell_price: int | None = Field(default=None, alias="recycledSellPrice")
    category: str = UNKNOWN_CATEGORY

    model_config = {"populate_by_name": True}


class LootData(BaseModel):
    last_updated: str = Field(alias="lastUpdated")
    items: list[Item] = Field(default_factory=list)

    model_config = {"populate_by_name": True}
