"""
Quiz Engine — the weekly Manul Monday quiz lifecycle.

    GENERATED ──answer──▶ IN_PROGRESS ──last answer──▶ COMPLETED

A completed quiz is frozen until the next weekly generation replaces it.
Rewards on completion:
    coins = quiz_base_coins + quiz_coins_per_correct * score
    xp    = quiz_base_xp    + quiz_xp_per_correct    * score
"""

import logging
from datetime import datetime
from typing import List, Optional

from manul_manor.feedback.channel import FeedbackChannel
from manul_manor.models.config import EngineConfig
from manul_manor.models.quiz import Quiz
from manul_manor.models.reward import FeedbackCategory, Reward, RewardKind
from manul_manor.models.state import PetState
from manul_manor.progression.engine import LevelingEngine
from manul_manor.quiz.bank import DEFAULT_THEMES, QuizTheme

logger = logging.getLogger(__name__)


class QuizEngine:

    def __init__(
        self,
        config: EngineConfig,
        feedback: FeedbackChannel,
        leveling: LevelingEngine,
        themes: Optional[List[QuizTheme]] = None,
    ):
        self.config = config
        self.feedback = feedback
        self.leveling = leveling
        self.themes = themes if themes is not None else DEFAULT_THEMES
        if not self.themes:
            raise ValueError("QuizEngine needs at least one quiz theme")

    def is_quiz_day(self, now: datetime) -> bool:
        return now.weekday() == self.config.quiz_weekday

    def generate(self, now: datetime) -> Quiz:
        """Build a fresh quiz. The theme rotates with the ISO week number."""
        week = now.isocalendar()[1]
        theme = self.themes[week % len(self.themes)]
        questions = [q.model_copy(deep=True) for q in theme.questions]
        return Quiz(
            title=theme.title,
            created_at=now,
            questions=questions[: self.config.questions_per_quiz],
        )

    def check_weekly(self, state: PetState, now: datetime) -> bool:
        """Replace a missing or completed quiz on quiz day. Returns True if replaced."""
        if not self.is_quiz_day(now):
            return False
        if state.quiz is not None and not state.quiz.is_completed:
            return False
        state.quiz = self.generate(now)
        logger.info("Generated weekly quiz %s (%s)", state.quiz.id, state.quiz.title)
        return True

    def can_submit(self, state: PetState, question_index: int) -> bool:
        """Whether an answer to ``question_index`` would be accepted right now."""
        quiz = state.quiz
        if quiz is None or quiz.is_completed:
            return False
        if question_index < 0 or question_index >= len(quiz.questions):
            return False
        if question_index in quiz.answered and not self.config.allow_answer_resubmission:
            logger.debug("Question %d of quiz %s already answered", question_index, quiz.id)
            return False
        return True

    def submit_answer(
        self, state: PetState, question_index: int, answer_index: int, now: datetime
    ) -> bool:
        """
        Score one answer. Returns whether it was correct.

        Out-of-range indices, a missing or completed quiz, and (unless
        allow_answer_resubmission is set) already-answered questions all
        return False without touching state.
        """
        if not self.can_submit(state, question_index):
            return False

        quiz = state.quiz
        is_correct = quiz.questions[question_index].correct_index == answer_index
        if is_correct:
            quiz.score += 1
        if question_index not in quiz.answered:
            quiz.answered.append(question_index)

        if question_index == len(quiz.questions) - 1:
            self._complete(state, quiz, now)

        return is_correct

    def _complete(self, state: PetState, quiz: Quiz, now: datetime) -> None:
        quiz.is_completed = True

        coin_reward = self.config.quiz_base_coins + quiz.score * self.config.quiz_coins_per_correct
        xp_reward = self.config.quiz_base_xp + quiz.score * self.config.quiz_xp_per_correct

        self.leveling.add_coins(state, coin_reward, now)
        state.recent_rewards.append(Reward(kind=RewardKind.XP, amount=xp_reward, timestamp=now))
        self.leveling.add_xp(state, xp_reward, now)

        self.feedback.show(
            f"Quiz completed! Earned {coin_reward} coins and {xp_reward} XP",
            FeedbackCategory.QUIZ_COMPLETED,
            now,
        )
        logger.info("Quiz %s completed with score %d/%d", quiz.id, quiz.score, quiz.max_score)
