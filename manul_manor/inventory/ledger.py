"""
Inventory Ledger — purchases, consumption and reward grants.

Behavioral Contract:
- Non-consumables are owned once; buying them again is rejected.
- Consumables carry a quantity. An entry that drops to zero is removed,
  except for the sentinel food, which stays available for free forever.
- Rejected purchases leave coins and inventory untouched.
"""

import logging
from datetime import datetime
from typing import Optional

from manul_manor.catalog.items import SENTINEL_FOOD_ID
from manul_manor.feedback.channel import FeedbackChannel
from manul_manor.models.item import InventoryEntry, Item
from manul_manor.models.reward import FeedbackCategory, Reward, RewardKind
from manul_manor.models.state import PetState

logger = logging.getLogger(__name__)


class InventoryLedger:

    def __init__(self, feedback: FeedbackChannel):
        self.feedback = feedback

    def purchase(self, state: PetState, item: Item, now: datetime) -> bool:
        """Buy one unit of ``item``. Returns False if the purchase was rejected."""
        pet = state.pet

        if not item.is_consumable and self.owns(state, item.id):
            self._reject(f"You already own {item.name}", FeedbackCategory.INFO, item, now)
            return False

        if pet.level < item.unlock_level:
            self._reject(
                f"{item.name} requires Level {item.unlock_level}",
                FeedbackCategory.PURCHASE_FAILED, item, now,
            )
            return False

        if pet.coins < item.price:
            self._reject(
                f"Not enough coins to buy {item.name}",
                FeedbackCategory.PURCHASE_FAILED, item, now,
            )
            return False

        pet.coins -= item.price
        entry = state.find_entry(item.id)

        if item.is_consumable:
            if entry is not None:
                entry.quantity += 1
            else:
                state.inventory.append(
                    InventoryEntry(item_id=item.id, purchased=True, quantity=1)
                )
            quantity = self.quantity(state, item.id)
            suffix = f" {quantity} available" if quantity > 1 else ""
            self.feedback.show(
                f"Purchased {item.name}!{suffix}", FeedbackCategory.PURCHASE_SUCCESS, now
            )
        else:
            if entry is not None:
                entry.purchased = True
            else:
                state.inventory.append(InventoryEntry(item_id=item.id, purchased=True))
            self.feedback.show(
                f"Purchased {item.name}!", FeedbackCategory.PURCHASE_SUCCESS, now
            )

        logger.debug("Purchased %s for %d coins", item.id, item.price)
        return True

    def consume(self, state: PetState, item: Item) -> bool:
        """Use up one unit of a consumable. Returns False if nothing was consumed."""
        if not item.is_consumable:
            return False

        entry = state.find_entry(item.id)
        if entry is None:
            return False

        remaining = entry.quantity - 1
        if remaining > 0:
            entry.quantity = remaining
        elif item.id == SENTINEL_FOOD_ID:
            entry.quantity = 0
        else:
            state.inventory.remove(entry)
        return True

    def add_items(
        self,
        state: PetState,
        item: Item,
        quantity: int,
        now: Optional[datetime] = None,
    ) -> None:
        """
        Grant units of a consumable without payment.
        When ``now`` is given the grant is also logged as an ITEM reward.
        """
        if not item.is_consumable or quantity <= 0:
            return
        entry = state.find_entry(item.id)
        if entry is not None:
            entry.quantity += quantity
        else:
            state.inventory.append(
                InventoryEntry(item_id=item.id, purchased=True, quantity=quantity)
            )
        if now is not None:
            state.recent_rewards.append(
                Reward(kind=RewardKind.ITEM, amount=quantity, timestamp=now)
            )

    def quantity(self, state: PetState, item_id: str) -> int:
        entry = state.find_entry(item_id)
        return entry.quantity if entry is not None else 0

    def owns(self, state: PetState, item_id: str) -> bool:
        entry = state.find_entry(item_id)
        return entry is not None and entry.purchased

    def can_use(self, state: PetState, item: Item) -> bool:
        if not item.is_consumable:
            return self.owns(state, item.id)
        if item.id == SENTINEL_FOOD_ID:
            return True
        return self.quantity(state, item.id) > 0

    def _reject(
        self, message: str, category: FeedbackCategory, item: Item, now: datetime
    ) -> None:
        logger.debug("Purchase of %s rejected: %s", item.id, message)
        self.feedback.show(message, category, now)
