"""PetState — the aggregate the engine owns, and its read-only snapshot."""

from typing import List, Optional

from pydantic import BaseModel

from manul_manor.models.item import InventoryEntry, PlacedItem
from manul_manor.models.pet import Pet
from manul_manor.models.quiz import Quiz
from manul_manor.models.reward import Feedback, Reward


class PetState(BaseModel):
    """Mutable aggregate. Only the engine components mutate it."""

    pet: Pet
    inventory: List[InventoryEntry] = []
    placed_items: List[PlacedItem] = []
    quiz: Optional[Quiz] = None
    is_onboarding: bool = True
    recent_rewards: List[Reward] = []       # Transient, never persisted

    def find_entry(self, item_id: str) -> Optional[InventoryEntry]:
        for entry in self.inventory:
            if entry.item_id == item_id:
                return entry
        return None


class PetSnapshot(BaseModel):
    """What observers see after each mutation."""

    pet: Pet
    mood: str
    mood_label: str
    inventory: List[InventoryEntry]
    placed_items: List[PlacedItem]
    quiz: Optional[Quiz]
    is_onboarding: bool
    feedback: Optional[Feedback]
    recent_rewards: List[Reward]
