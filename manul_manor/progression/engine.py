"""
Leveling Engine — experience curve and the reward log.

A level needs ``level * xp_per_level`` XP. Each level-up pays
``level_up_coins_per_level * new_level`` coins. One large grant can cross
several levels, so the check loops until the remainder no longer qualifies.
"""

import logging
from datetime import datetime
from typing import List

from manul_manor.feedback.channel import FeedbackChannel
from manul_manor.models.config import EngineConfig
from manul_manor.models.reward import FeedbackCategory, Reward, RewardKind
from manul_manor.models.state import PetState

logger = logging.getLogger(__name__)


class LevelingEngine:

    def __init__(self, config: EngineConfig, feedback: FeedbackChannel):
        self.config = config
        self.feedback = feedback

    def required_xp(self, level: int) -> int:
        return level * self.config.xp_per_level

    def add_xp(self, state: PetState, amount: int, now: datetime) -> int:
        """Grant XP and resolve level-ups. Returns the number of levels gained."""
        if amount <= 0:
            return 0

        pet = state.pet
        pet.xp += amount
        gained = 0

        while pet.xp >= self.required_xp(pet.level):
            pet.xp -= self.required_xp(pet.level)
            pet.level += 1
            gained += 1

            coin_reward = self.config.level_up_coins_per_level * pet.level
            pet.coins += coin_reward
            state.recent_rewards.append(
                Reward(kind=RewardKind.LEVEL_UP, amount=pet.level, timestamp=now)
            )
            state.recent_rewards.append(
                Reward(kind=RewardKind.COINS, amount=coin_reward, timestamp=now)
            )
            self.feedback.show(
                f"Level Up! {pet.name} is now level {pet.level}. "
                f"Earned {coin_reward} coins!",
                FeedbackCategory.LEVEL_UP,
                now,
            )
            logger.info("Pet %s reached level %d (+%d coins)", pet.id, pet.level, coin_reward)

        return gained

    def add_coins(self, state: PetState, amount: int, now: datetime) -> None:
        """Credit coins and log a COINS reward."""
        if amount <= 0:
            return
        state.pet.coins += amount
        state.recent_rewards.append(
            Reward(kind=RewardKind.COINS, amount=amount, timestamp=now)
        )

    def clear_rewards(self, state: PetState) -> List[Reward]:
        """Acknowledge the reward log. Returns what was cleared."""
        cleared = list(state.recent_rewards)
        state.recent_rewards.clear()
        return cleared
