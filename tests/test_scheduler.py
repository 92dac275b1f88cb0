"""Tests for the Pet Scheduler."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from manul_manor.clock import FixedClock
from manul_manor.persistence.repository import PET_KEY
from manul_manor.persistence.store import InMemoryKeyValueStore
from manul_manor.scheduler.loop import DECAY_JOB, SAVE_JOB, PetScheduler
from manul_manor.service.pet_service import PetService

TUESDAY = datetime(2026, 10, 20, 9, 0, tzinfo=timezone.utc)


def _make_scheduler(store=None, heartbeat: float = 60.0) -> PetScheduler:
    service = PetService(store=store, clock=FixedClock(TUESDAY))
    return PetScheduler(service, heartbeat_interval_seconds=heartbeat)


class TestTick:
    def test_nothing_due_immediately(self):
        scheduler = _make_scheduler()
        assert scheduler.tick() == []
        assert scheduler.tick_count == 1

    def test_save_every_five_minutes(self):
        store = InMemoryKeyValueStore()
        scheduler = _make_scheduler(store)
        clock = scheduler.service.clock

        clock.advance(seconds=299)
        assert scheduler.tick() == []
        assert store.get(PET_KEY) is None

        clock.advance(seconds=1)
        assert scheduler.tick() == [SAVE_JOB]
        assert store.get(PET_KEY) is not None

    def test_decay_every_thirty_minutes(self):
        scheduler = _make_scheduler()
        service = scheduler.service
        hunger = service.state.pet.hunger

        service.clock.advance(seconds=1800)
        assert scheduler.tick() == [DECAY_JOB]
        assert service.state.pet.hunger == pytest.approx(hunger - 0.005)

    def test_decay_counts_as_save(self):
        scheduler = _make_scheduler()
        clock = scheduler.service.clock
        clock.advance(seconds=1800)
        scheduler.tick()
        clock.advance(seconds=299)
        assert scheduler.tick() == []

    def test_explicit_now(self):
        scheduler = _make_scheduler()
        assert scheduler.tick(TUESDAY + timedelta(minutes=5)) == [SAVE_JOB]

    def test_next_due(self):
        scheduler = _make_scheduler()
        assert scheduler.next_due() == TUESDAY + timedelta(seconds=300)


class TestRunAsync:
    def test_stops_immediately_and_flushes(self):
        store = InMemoryKeyValueStore()
        scheduler = _make_scheduler(store)
        stop = asyncio.Event()
        stop.set()

        asyncio.run(scheduler.run_async(stop))

        assert scheduler.is_running is False
        assert store.get(PET_KEY) is not None

    def test_runs_until_stopped(self):
        scheduler = _make_scheduler(heartbeat=0.01)

        async def main():
            stop = asyncio.Event()
            task = asyncio.create_task(scheduler.run_async(stop))
            await asyncio.sleep(0.05)
            assert scheduler.is_running is True
            stop.set()
            await task

        asyncio.run(main())
        assert scheduler.is_running is False
        assert scheduler.tick_count >= 1
