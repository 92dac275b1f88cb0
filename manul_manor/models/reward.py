"""Rewards and short-lived feedback surfaced to the UI. Neither is persisted."""

from datetime import datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field


class RewardKind(str, Enum):
    COINS = "coins"
    XP = "xp"
    LEVEL_UP = "level_up"
    ITEM = "item"


class Reward(BaseModel):
    id: str = Field(default_factory=lambda: f"rew_{uuid4().hex[:12]}")
    kind: RewardKind
    amount: int                             # New level number for LEVEL_UP
    timestamp: datetime


class FeedbackCategory(str, Enum):
    FEED = "feed"
    CLEAN = "clean"
    PLAY = "play"
    INFO = "info"
    PURCHASE_SUCCESS = "purchase_success"
    PURCHASE_FAILED = "purchase_failed"
    PLACE_ITEM = "place_item"
    REMOVE_ITEM = "remove_item"
    WEAR_ITEM = "wear_item"
    LEVEL_UP = "level_up"
    QUIZ_COMPLETED = "quiz_completed"
    ONBOARDING_COMPLETE = "onboarding_complete"


class Feedback(BaseModel):
    message: str
    category: FeedbackCategory
    shown_at: datetime
    dismiss_at: datetime
