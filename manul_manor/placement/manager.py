"""
Placement Manager — decorating the manor and dressing up the manul.

Placed items: furniture and decorations only, at most one placement per
item id. Placing again moves the existing placement.

Worn items: hats and accessories, one slot per category. Wearing a new hat
evicts whatever hat was worn before; accessories are left alone.
"""

from datetime import datetime
from typing import Optional

from manul_manor.catalog.items import ItemCatalog
from manul_manor.feedback.channel import FeedbackChannel
from manul_manor.models.config import EngineConfig
from manul_manor.models.item import Item, ItemCategory, PlacedItem, Position
from manul_manor.models.reward import FeedbackCategory
from manul_manor.models.state import PetState
from manul_manor.stats.engine import clamp


class PlacementManager:

    def __init__(self, config: EngineConfig, catalog: ItemCatalog, feedback: FeedbackChannel):
        self.config = config
        self.catalog = catalog
        self.feedback = feedback

    # --- Room placement ---

    def place(self, state: PetState, item: Item, position: Position, now: datetime) -> bool:
        """Upsert the placement for ``item``. Non-placeable items are ignored."""
        if not item.is_placeable:
            return False

        existing = self._find_placement(state, item.id)
        if existing is not None:
            existing.position = position
        else:
            state.placed_items.append(PlacedItem(item_id=item.id, position=position))

        pet = state.pet
        pet.happiness = clamp(pet.happiness + self.config.placement_happiness_gain)
        self.feedback.show(
            f"{pet.name} likes the new decoration!", FeedbackCategory.PLACE_ITEM, now
        )
        return True

    def remove(self, state: PetState, item: Item, now: datetime) -> bool:
        before = len(state.placed_items)
        state.placed_items = [p for p in state.placed_items if p.item_id != item.id]
        self.feedback.show(f"Removed {item.name}", FeedbackCategory.REMOVE_ITEM, now)
        return len(state.placed_items) < before

    # --- Wearables ---

    def wear(self, state: PetState, item: Item, now: datetime) -> bool:
        if not item.is_wearable:
            return False

        pet = state.pet
        pet.worn_item_ids = [
            worn_id for worn_id in pet.worn_item_ids
            if worn_id != item.id and self._worn_category(worn_id) != item.category
        ]
        pet.worn_item_ids.append(item.id)
        self.feedback.show(
            f"{pet.name} is wearing the {item.name}", FeedbackCategory.WEAR_ITEM, now
        )
        return True

    def unwear(self, state: PetState, item: Item) -> bool:
        pet = state.pet
        if item.id not in pet.worn_item_ids:
            return False
        pet.worn_item_ids = [i for i in pet.worn_item_ids if i != item.id]
        return True

    def _worn_category(self, item_id: str) -> Optional[ItemCategory]:
        """Category of a worn item, or None if the catalog no longer has it."""
        item = self.catalog.get(item_id)
        return item.category if item is not None else None

    def _find_placement(self, state: PetState, item_id: str) -> Optional[PlacedItem]:
        for placed in state.placed_items:
            if placed.item_id == item_id:
                return placed
        return None
