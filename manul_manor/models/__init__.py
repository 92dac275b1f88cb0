"""Manul Manor data models."""

from manul_manor.models.config import EngineConfig
from manul_manor.models.item import (
    PLACEABLE_CATEGORIES,
    WEARABLE_CATEGORIES,
    InventoryEntry,
    Item,
    ItemCategory,
    PlacedItem,
    Position,
)
from manul_manor.models.pet import Mood, Pet
from manul_manor.models.quiz import Quiz, QuizQuestion, QuizStatus
from manul_manor.models.reward import Feedback, FeedbackCategory, Reward, RewardKind
from manul_manor.models.state import PetSnapshot, PetState

__all__ = [
    "EngineConfig",
    "Feedback",
    "FeedbackCategory",
    "InventoryEntry",
    "Item",
    "ItemCategory",
    "Mood",
    "PLACEABLE_CATEGORIES",
    "Pet",
    "PetSnapshot",
    "PetState",
    "PlacedItem",
    "Position",
    "Quiz",
    "QuizQuestion",
    "QuizStatus",
    "Reward",
    "RewardKind",
    "WEARABLE_CATEGORIES",
]
