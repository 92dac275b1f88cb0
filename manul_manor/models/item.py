"""Catalog items, inventory entries and room placements."""

from enum import Enum

from pydantic import BaseModel, Field


class ItemCategory(str, Enum):
    FOOD = "food"
    TOY = "toy"
    FURNITURE = "furniture"
    DECORATION = "decoration"
    HAT = "hat"
    ACCESSORY = "accessory"

    @property
    def display_name(self) -> str:
        return {
            ItemCategory.FOOD: "Food",
            ItemCategory.TOY: "Toys",
            ItemCategory.FURNITURE: "Furniture",
            ItemCategory.DECORATION: "Decorations",
            ItemCategory.HAT: "Hats",
            ItemCategory.ACCESSORY: "Accessories",
        }[self]


PLACEABLE_CATEGORIES = frozenset({ItemCategory.FURNITURE, ItemCategory.DECORATION})
WEARABLE_CATEGORIES = frozenset({ItemCategory.HAT, ItemCategory.ACCESSORY})


class Item(BaseModel):
    """Static catalog entry. Owned by the catalog, never mutated by the engine."""

    id: str
    name: str
    description: str = ""
    price: int = Field(ge=0, default=0)
    category: ItemCategory
    unlock_level: int = Field(ge=1, default=1)
    is_consumable: bool = False
    owned_by_default: bool = False          # Seeds the fallback inventory

    @property
    def is_placeable(self) -> bool:
        return self.category in PLACEABLE_CATEGORIES

    @property
    def is_wearable(self) -> bool:
        return self.category in WEARABLE_CATEGORIES


class InventoryEntry(BaseModel):
    """What the player owns. ``quantity`` only matters for consumables."""

    item_id: str
    purchased: bool = True
    quantity: int = 0


class Position(BaseModel):
    x: float
    y: float


class PlacedItem(BaseModel):
    """A furniture or decoration item placed in the manor. One per item id."""

    item_id: str
    position: Position
