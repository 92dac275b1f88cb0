"""
Pet Scheduler — the periodic decay tick and persistence flush.

Both jobs are driven by ``tick(now)``, so an external caller can step time
deterministically. ``run_async`` wraps the same tick in a heartbeat loop
that stops when its stop event is set.

    decay: every decay_interval_seconds (default 30 min)
    save:  every save_interval_seconds  (default 5 min)
"""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import List, Optional

from manul_manor.service.pet_service import PetService

logger = logging.getLogger(__name__)

DECAY_JOB = "decay"
SAVE_JOB = "save"


class PetScheduler:

    def __init__(self, service: PetService, heartbeat_interval_seconds: float = 60.0):
        self.service = service
        self.config = service.config
        self.heartbeat_interval_seconds = heartbeat_interval_seconds
        start = service.clock.now()
        self._last_decay: datetime = start
        self._last_save: datetime = start
        self._running = False
        self._tick_count = 0

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def tick_count(self) -> int:
        return self._tick_count

    def next_due(self) -> datetime:
        """The earliest time at which a job will run."""
        return min(
            self._last_decay + timedelta(seconds=self.config.decay_interval_seconds),
            self._last_save + timedelta(seconds=self.config.save_interval_seconds),
        )

    def tick(self, now: Optional[datetime] = None) -> List[str]:
        """Run whichever jobs are due at ``now``. Returns their names."""
        now = now or self.service.clock.now()
        self._tick_count += 1
        ran: List[str] = []

        if now - self._last_decay >= timedelta(seconds=self.config.decay_interval_seconds):
            self.service.decay_tick()
            self._last_decay = now
            # decay_tick persists, so it also counts as a save
            self._last_save = now
            ran.append(DECAY_JOB)

        if now - self._last_save >= timedelta(seconds=self.config.save_interval_seconds):
            self.service.save()
            self._last_save = now
            ran.append(SAVE_JOB)

        if ran:
            logger.debug("Scheduler tick ran %s", ", ".join(ran))
        return ran

    async def run_async(self, stop_event: Optional[asyncio.Event] = None) -> None:
        """Tick on every heartbeat until ``stop_event`` is set, then flush once."""
        self._running = True
        if stop_event is None:
            stop_event = asyncio.Event()

        try:
            while not stop_event.is_set():
                self.tick()
                try:
                    await asyncio.wait_for(
                        stop_event.wait(),
                        timeout=self.heartbeat_interval_seconds,
                    )
                except asyncio.TimeoutError:
                    continue
        finally:
            self._running = False
            self.service.save()
