"""
Pet State Repository — maps the PetState aggregate onto store keys.

    manul_data                -> Pet
    inventory_data            -> list of InventoryEntry
    placed_items_data         -> list of PlacedItem
    quiz_data                 -> Quiz (absent when there is none)
    has_completed_onboarding  -> bool

Loading never fails: a missing or undecodable blob falls back to its
default (fresh pet, default-owned inventory, no placements, no quiz).
Saving is best-effort: store failures are logged and dropped.
"""

import json
import logging
from datetime import datetime
from typing import Callable, List, TypeVar

from pydantic import TypeAdapter, ValidationError

from manul_manor.catalog.items import ItemCatalog
from manul_manor.models.config import EngineConfig
from manul_manor.models.item import InventoryEntry, PlacedItem
from manul_manor.models.pet import Pet
from manul_manor.models.quiz import Quiz
from manul_manor.models.state import PetState
from manul_manor.persistence.store import KeyValueStore, PersistenceError

logger = logging.getLogger(__name__)

T = TypeVar("T")

PET_KEY = "manul_data"
INVENTORY_KEY = "inventory_data"
PLACED_ITEMS_KEY = "placed_items_data"
QUIZ_KEY = "quiz_data"
ONBOARDING_KEY = "has_completed_onboarding"

_inventory_adapter = TypeAdapter(List[InventoryEntry])
_placed_adapter = TypeAdapter(List[PlacedItem])
_pet_adapter = TypeAdapter(Pet)
_quiz_adapter = TypeAdapter(Quiz)
_bool_adapter = TypeAdapter(bool)


class PetStateRepository:

    def __init__(self, store: KeyValueStore, catalog: ItemCatalog, config: EngineConfig):
        self.store = store
        self.catalog = catalog
        self.config = config

    def load(self, now: datetime) -> PetState:
        """Rebuild state from the store, substituting defaults per key."""
        pet = self._read(PET_KEY, _pet_adapter, lambda: self.default_pet(now))
        inventory = self._read(INVENTORY_KEY, _inventory_adapter, self.default_inventory)
        placed = self._read(PLACED_ITEMS_KEY, _placed_adapter, list)
        quiz = self._read(QUIZ_KEY, _quiz_adapter, lambda: None)

        logger.info(
            "Loaded pet %s (level %d, %d inventory entries)",
            pet.id, pet.level, len(inventory),
        )
        return PetState(
            pet=pet,
            inventory=inventory,
            placed_items=placed,
            quiz=quiz,
            is_onboarding=not pet.name,
        )

    def save(self, state: PetState) -> bool:
        """Write every key. Returns False if any write failed."""
        blobs = {
            PET_KEY: _pet_adapter.dump_json(state.pet),
            INVENTORY_KEY: _inventory_adapter.dump_json(state.inventory),
            PLACED_ITEMS_KEY: _placed_adapter.dump_json(state.placed_items),
            ONBOARDING_KEY: json.dumps(not state.is_onboarding).encode(),
        }
        if state.quiz is not None:
            blobs[QUIZ_KEY] = _quiz_adapter.dump_json(state.quiz)

        ok = True
        for key, blob in blobs.items():
            try:
                self.store.set(key, blob)
            except PersistenceError as e:
                logger.warning("Could not save %s: %s", key, e)
                ok = False
        return ok

    def has_completed_onboarding(self) -> bool:
        return self._read(ONBOARDING_KEY, _bool_adapter, lambda: False)

    def default_pet(self, now: datetime) -> Pet:
        return Pet.new(
            now,
            coins=self.config.starting_coins,
            hunger=self.config.starting_hunger,
            hygiene=self.config.starting_hygiene,
            happiness=self.config.starting_happiness,
        )

    def default_inventory(self) -> List[InventoryEntry]:
        return [
            InventoryEntry(item_id=item.id, purchased=True)
            for item in self.catalog.default_owned()
        ]

    def _read(self, key: str, adapter: TypeAdapter, default: Callable[[], T]) -> T:
        try:
            blob = self.store.get(key)
        except PersistenceError as e:
            logger.warning("Could not read %s, using default: %s", key, e)
            return default()
        if blob is None:
            return default()
        try:
            return adapter.validate_json(blob)
        except ValidationError as e:
            logger.warning("Corrupt %s blob, using default: %s", key, e.error_count())
            return default()
