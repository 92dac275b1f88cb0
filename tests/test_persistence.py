"""Tests for the key-value stores and the state repository."""

import json
import logging
from datetime import datetime, timezone

import pytest

from manul_manor.catalog.items import ItemCatalog
from manul_manor.clock import FixedClock
from manul_manor.models.config import EngineConfig
from manul_manor.models.item import Position
from manul_manor.persistence.repository import (
    INVENTORY_KEY,
    ONBOARDING_KEY,
    PET_KEY,
    PLACED_ITEMS_KEY,
    QUIZ_KEY,
    PetStateRepository,
)
from manul_manor.persistence.store import (
    InMemoryKeyValueStore,
    PersistenceError,
    SQLiteKeyValueStore,
)
from manul_manor.service.pet_service import PetService

MONDAY = datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)
TUESDAY = datetime(2026, 10, 20, 9, 0, tzinfo=timezone.utc)


class BrokenStore:
    """A store whose every call fails."""

    def get(self, key):
        raise PersistenceError("disk on fire")

    def set(self, key, value):
        raise PersistenceError("disk on fire")


class TestInMemoryStore:
    def test_get_set(self):
        store = InMemoryKeyValueStore()
        assert store.get("a") is None
        store.set("a", b"1")
        assert store.get("a") == b"1"
        store.delete("a")
        assert store.get("a") is None


class TestSQLiteStore:
    def test_upsert(self):
        store = SQLiteKeyValueStore(":memory:")
        store.set("k", b"one")
        store.set("k", b"two")
        assert store.get("k") == b"two"
        assert store.get("missing") is None

    def test_persists_across_connections(self, tmp_path):
        path = str(tmp_path / "manor.db")
        store = SQLiteKeyValueStore(path)
        store.set(PET_KEY, b"{}")
        store.close()

        reopened = SQLiteKeyValueStore(path)
        assert reopened.get(PET_KEY) == b"{}"

    def test_closed_connection_raises_persistence_error(self):
        store = SQLiteKeyValueStore(":memory:")
        store.close()
        with pytest.raises(PersistenceError):
            store.set("k", b"v")


class TestRoundTrip:
    def test_state_survives_reload(self):
        store = InMemoryKeyValueStore()
        clock = FixedClock(MONDAY)
        first = PetService(store=store, clock=clock)
        first.complete_onboarding("Pallas")
        first.purchase(first.catalog.require("food_pika"))
        first.place(first.catalog.require("decoration_plant"), Position(x=3, y=4))
        first.submit_answer(0, first.state.quiz.questions[0].correct_index)

        second = PetService(store=store, clock=clock)
        assert second.state.pet.id == first.state.pet.id
        assert second.state.pet.name == "Pallas"
        assert second.state.pet.coins == first.state.pet.coins
        assert second.state.pet.last_fed == first.state.pet.last_fed
        assert second.quantity("food_pika") == 1
        assert second.state.placed_items == first.state.placed_items
        assert second.state.quiz.id == first.state.quiz.id
        assert second.state.quiz.answered == [0]
        assert second.state.is_onboarding is False

    def test_rewards_not_persisted(self):
        store = InMemoryKeyValueStore()
        first = PetService(store=store, clock=FixedClock(TUESDAY))
        first.add_xp(100)
        assert first.state.recent_rewards

        second = PetService(store=store, clock=FixedClock(TUESDAY))
        assert second.state.recent_rewards == []

    def test_written_keys(self):
        store = InMemoryKeyValueStore()
        service = PetService(store=store, clock=FixedClock(TUESDAY))
        service.clean()
        assert set(store.keys()) == {PET_KEY, INVENTORY_KEY, PLACED_ITEMS_KEY, ONBOARDING_KEY}
        assert json.loads(store.get(ONBOARDING_KEY)) is False

        service.complete_onboarding("Pallas")
        assert json.loads(store.get(ONBOARDING_KEY)) is True
        assert json.loads(store.get(PET_KEY))["name"] == "Pallas"

    def test_quiz_key_written_when_present(self):
        store = InMemoryKeyValueStore()
        service = PetService(store=store, clock=FixedClock(MONDAY))
        service.clean()
        assert store.get(QUIZ_KEY) is not None


class TestFallbacks:
    def _repository(self, store) -> PetStateRepository:
        return PetStateRepository(store, ItemCatalog(), EngineConfig())

    def test_empty_store_gives_defaults(self):
        state = self._repository(InMemoryKeyValueStore()).load(TUESDAY)
        assert state.pet.name == ""
        assert state.pet.coins == 100
        assert [e.item_id for e in state.inventory] == ["food_grasshoppers", "toy_ball"]
        assert state.placed_items == []
        assert state.quiz is None
        assert state.is_onboarding is True

    def test_corrupt_blobs_fall_back_per_key(self, caplog):
        store = InMemoryKeyValueStore({
            PET_KEY: b"not json",
            INVENTORY_KEY: b'[{"item_id": "food_pika", "quantity": 2}]',
            PLACED_ITEMS_KEY: b'{"wrong": "shape"}',
            QUIZ_KEY: b"\x00\x01",
        })
        with caplog.at_level(logging.WARNING):
            state = self._repository(store).load(TUESDAY)

        assert state.pet.level == 1
        assert [e.item_id for e in state.inventory] == ["food_pika"]
        assert state.inventory[0].quantity == 2
        assert state.placed_items == []
        assert state.quiz is None
        assert any("Corrupt" in r.getMessage() for r in caplog.records)

    def test_invalid_stat_values_fall_back(self):
        pet = PetService(clock=FixedClock(TUESDAY)).state.pet
        data = pet.model_dump(mode="json")
        data["hunger"] = 4.0
        store = InMemoryKeyValueStore({PET_KEY: json.dumps(data).encode()})
        state = self._repository(store).load(TUESDAY)
        assert state.pet.id != pet.id
        assert state.pet.hunger == 0.8

    def test_unreadable_store_gives_defaults(self):
        state = self._repository(BrokenStore()).load(TUESDAY)
        assert state.pet.level == 1
        assert state.quiz is None

    def test_onboarding_flag(self):
        store = InMemoryKeyValueStore()
        repository = self._repository(store)
        assert repository.has_completed_onboarding() is False
        store.set(ONBOARDING_KEY, b"true")
        assert repository.has_completed_onboarding() is True


class TestBestEffortSave:
    def test_failed_writes_do_not_raise(self, caplog):
        service = PetService(store=BrokenStore(), clock=FixedClock(TUESDAY))
        with caplog.at_level(logging.WARNING):
            service.clean()
            assert service.save() is False
        assert service.state.pet.hygiene == 1.0
        assert any("Could not save" in r.getMessage() for r in caplog.records)


class TestNaiveTimestamps:
    def test_naive_stored_timestamps_decay_under_aware_clock(self):
        pet = PetService(clock=FixedClock(MONDAY)).state.pet
        data = pet.model_dump(mode="json")
        naive = "2026-10-19T09:00:00"
        data.update(last_fed=naive, last_cleaned=naive, last_interaction=naive)
        store = InMemoryKeyValueStore({PET_KEY: json.dumps(data).encode()})

        service = PetService(store=store, clock=FixedClock(TUESDAY))
        loaded = service.state.pet
        assert loaded.id == pet.id
        assert loaded.last_fed.tzinfo is not None

        hunger = loaded.hunger
        service.decay_tick()
        assert loaded.hunger <= hunger

    def test_naive_fixed_clock_becomes_aware(self):
        clock = FixedClock(datetime(2026, 10, 20, 9, 0))
        assert clock.now().tzinfo is not None
        clock.set(datetime(2026, 10, 21, 9, 0))
        assert clock.now().tzinfo is not None
