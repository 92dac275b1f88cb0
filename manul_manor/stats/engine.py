"""
Stat Engine — time decay and the three care interactions.

All three stats live in [0, 1]. Interactions clamp at the top, decay is
capped at the current value so nothing goes negative.

Decay is a pure function of hours elapsed since the matching timestamp:
    hunger    -= min(hunger,    hours_since_last_fed          * 0.01)
    hygiene   -= min(hygiene,   hours_since_last_cleaned      * 0.008)
    happiness -= min(happiness, hours_since_last_interaction  * 0.006)
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional, Tuple

from manul_manor.catalog.items import SENTINEL_FOOD_ID
from manul_manor.feedback.channel import FeedbackChannel
from manul_manor.inventory.ledger import InventoryLedger
from manul_manor.models.config import EngineConfig
from manul_manor.models.item import Item, ItemCategory
from manul_manor.models.pet import Pet
from manul_manor.models.reward import FeedbackCategory
from manul_manor.models.state import PetState
from manul_manor.progression.engine import LevelingEngine

logger = logging.getLogger(__name__)


BASIC_FOOD_NAME = "Grasshoppers"


@dataclass(frozen=True)
class FoodEffect:
    hunger: float
    happiness: float
    quality: str                            # "basic" | "good" | "premium" | "super"


BASIC_EFFECT = FoodEffect(hunger=0.2, happiness=0.05, quality="basic")

FOOD_EFFECTS: Dict[str, FoodEffect] = {
    SENTINEL_FOOD_ID: BASIC_EFFECT,
    "food_pika": FoodEffect(hunger=0.3, happiness=0.1, quality="good"),
    "food_partridge": FoodEffect(hunger=0.4, happiness=0.15, quality="good"),
    "food_marmot": FoodEffect(hunger=0.5, happiness=0.2, quality="premium"),
    "food_chicken": FoodEffect(hunger=0.6, happiness=0.25, quality="premium"),
    "food_fish": FoodEffect(hunger=0.7, happiness=0.3, quality="super"),
}


def clamp(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return lo if value < lo else hi if value > hi else value


def hours_between(earlier: datetime, later: datetime) -> float:
    """Elapsed hours, never negative."""
    return max(0.0, (later - earlier).total_seconds() / 3600.0)


def compute_decay(pet: Pet, now: datetime, config: EngineConfig) -> Tuple[float, float, float]:
    """Return the (hunger, hygiene, happiness) amounts to subtract at ``now``."""
    hunger = min(pet.hunger, hours_between(pet.last_fed, now) * config.hunger_decay_per_hour)
    hygiene = min(
        pet.hygiene, hours_between(pet.last_cleaned, now) * config.hygiene_decay_per_hour
    )
    happiness = min(
        pet.happiness,
        hours_between(pet.last_interaction, now) * config.happiness_decay_per_hour,
    )
    return hunger, hygiene, happiness


class StatEngine:

    def __init__(
        self,
        config: EngineConfig,
        feedback: FeedbackChannel,
        ledger: InventoryLedger,
        leveling: LevelingEngine,
    ):
        self.config = config
        self.feedback = feedback
        self.ledger = ledger
        self.leveling = leveling

    def feed(self, state: PetState, food: Optional[Item], now: datetime) -> bool:
        """
        Feed the pet. With no item the free basic food is used.

        Only FOOD items can be fed. Non-sentinel food must be in the
        inventory and is consumed first; feeding something the player has
        run out of does nothing.
        """
        pet = state.pet
        food_name = food.name if food is not None else BASIC_FOOD_NAME
        effect = BASIC_EFFECT

        if food is not None:
            if food.category != ItemCategory.FOOD:
                logger.debug("Cannot feed %s: not food", food.id)
                return False
            effect = FOOD_EFFECTS.get(food.id, BASIC_EFFECT)
            if food.id != SENTINEL_FOOD_ID:
                if not self.ledger.can_use(state, food) or not self.ledger.consume(state, food):
                    logger.debug("Cannot feed %s: none left", food.id)
                    return False

        pet.hunger = clamp(pet.hunger + effect.hunger)
        pet.happiness = clamp(pet.happiness + effect.happiness)
        pet.last_fed = max(pet.last_fed, now)

        if effect.quality == "super":
            message = f"{pet.name} is ecstatic about the {food_name}!"
        elif effect.quality == "premium":
            message = f"{pet.name} absolutely loves the {food_name}!"
        elif effect.quality == "good":
            message = f"Yum! {pet.name} really enjoys the {food_name}!"
        elif pet.hunger >= 0.9:
            message = f"{pet.name} is full!"
        else:
            message = f"{pet.name} eats the {food_name}"
        self.feedback.show(message, FeedbackCategory.FEED, now)

        self.leveling.add_xp(state, self.config.feed_xp, now)
        return True

    def clean(self, state: PetState, now: datetime) -> None:
        pet = state.pet
        previous = pet.hygiene

        pet.hygiene = 1.0
        pet.last_cleaned = max(pet.last_cleaned, now)

        if 1.0 - previous > 0.3:
            message = f"{pet.name} feels fresh and clean!"
        elif previous > 0.8:
            message = f"{pet.name} was already quite clean"
        else:
            message = f"{pet.name} is now clean and happy"
        self.feedback.show(message, FeedbackCategory.CLEAN, now)

        self.leveling.add_xp(state, self.config.clean_xp, now)

    def play(self, state: PetState, now: datetime) -> None:
        pet = state.pet
        previous = pet.happiness

        pet.happiness = clamp(pet.happiness + self.config.play_happiness_gain)
        pet.last_interaction = max(pet.last_interaction, now)

        if pet.happiness - previous > 0.25:
            message = f"{pet.name} is having so much fun!"
        elif pet.happiness >= 0.9:
            message = f"{pet.name} is very happy!"
        else:
            message = f"{pet.name} enjoyed playing with you"
        self.feedback.show(message, FeedbackCategory.PLAY, now)

        self.leveling.add_xp(state, self.config.play_xp, now)

    def decay_tick(self, state: PetState, now: datetime) -> Tuple[float, float, float]:
        """Apply decay for the time elapsed up to ``now``. Returns the amounts removed."""
        pet = state.pet
        hunger, hygiene, happiness = compute_decay(pet, now, self.config)
        pet.hunger = clamp(pet.hunger - hunger)
        pet.hygiene = clamp(pet.hygiene - hygiene)
        pet.happiness = clamp(pet.happiness - happiness)
        logger.debug(
            "Decay applied: hunger -%.4f hygiene -%.4f happiness -%.4f",
            hunger, hygiene, happiness,
        )
        return hunger, hygiene, happiness
