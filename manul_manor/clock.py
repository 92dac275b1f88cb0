"""Clock — the engine's only source of "now"."""

from datetime import datetime, timedelta
from typing import Optional, Protocol


def ensure_aware(value: datetime) -> datetime:
    """Attach the local timezone to a naive datetime; aware values pass through."""
    if value.tzinfo is None or value.utcoffset() is None:
        return value.astimezone()
    return value


class Clock(Protocol):
    def now(self) -> datetime:
        ...


class SystemClock:
    """Local wall-clock time, timezone-aware so weekday checks use local days."""

    def now(self) -> datetime:
        return datetime.now().astimezone()


class FixedClock:
    """A clock that only moves when told to."""

    def __init__(self, current: datetime):
        self._current = ensure_aware(current)

    def now(self) -> datetime:
        return self._current

    def set(self, current: datetime) -> None:
        self._current = ensure_aware(current)

    def advance(
        self,
        delta: Optional[timedelta] = None,
        *,
        hours: float = 0,
        seconds: float = 0,
    ) -> datetime:
        self._current = self._current + (delta or timedelta()) + timedelta(
            hours=hours, seconds=seconds
        )
        return self._current
