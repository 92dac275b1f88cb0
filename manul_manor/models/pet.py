"""Pet — the cared-for Pallas cat and its derived mood."""

from datetime import datetime
from enum import Enum
from typing import List
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

from manul_manor.clock import ensure_aware


class Mood(str, Enum):
    HAPPY = "happy"
    NEUTRAL = "neutral"
    SAD = "sad"
    UNHAPPY = "unhappy"

    @property
    def label(self) -> str:
        return _MOOD_LABELS[self]


_MOOD_LABELS = {
    Mood.HAPPY: "Happy",
    Mood.NEUTRAL: "Content",
    Mood.SAD: "Sad",
    Mood.UNHAPPY: "Unhappy",
}


def new_pet_id() -> str:
    return f"manul_{uuid4().hex[:12]}"


class Pet(BaseModel):
    """
    The manul being cared for.

    Stats run from 0.0 to 1.0 where 1.0 is best (full, clean, happy).
    Mood is never stored; it is recomputed from the stat average on read.
    """

    id: str = Field(default_factory=new_pet_id)
    name: str = ""                          # Empty until onboarding completes
    level: int = Field(ge=1, default=1)
    xp: int = Field(ge=0, default=0)
    hunger: float = Field(ge=0, le=1, default=0.8)
    hygiene: float = Field(ge=0, le=1, default=1.0)
    happiness: float = Field(ge=0, le=1, default=0.9)
    coins: int = Field(ge=0, default=100)
    last_fed: datetime
    last_cleaned: datetime
    last_interaction: datetime
    worn_item_ids: List[str] = []           # Hat/accessory slots

    @field_validator("last_fed", "last_cleaned", "last_interaction")
    @classmethod
    def _aware_timestamps(cls, value: datetime) -> datetime:
        return ensure_aware(value)

    @property
    def mood(self) -> Mood:
        average = (self.hunger + self.hygiene + self.happiness) / 3.0
        if average >= 0.8:
            return Mood.HAPPY
        elif average >= 0.5:
            return Mood.NEUTRAL
        elif average >= 0.2:
            return Mood.SAD
        return Mood.UNHAPPY

    @classmethod
    def new(
        cls,
        now: datetime,
        name: str = "",
        coins: int = 100,
        hunger: float = 0.8,
        hygiene: float = 1.0,
        happiness: float = 0.9,
    ) -> "Pet":
        """Create a level-1 pet with every timestamp set to ``now``."""
        return cls(
            name=name,
            coins=coins,
            hunger=hunger,
            hygiene=hygiene,
            happiness=happiness,
            last_fed=now,
            last_cleaned=now,
            last_interaction=now,
        )
