"""
Pet Service — the single owner of the PetState aggregate.

Wires the engine components together over one injected Clock, store and
catalog. Every mutating operation:
  1. reads "now" from the clock,
  2. delegates to the responsible component,
  3. persists the aggregate (best-effort),
  4. publishes a fresh PetSnapshot to every subscriber.

Nothing here raises for ordinary input; rejected operations return False
and leave a feedback message.
"""

import logging
from typing import Callable, List, Optional

from manul_manor.catalog.items import ItemCatalog
from manul_manor.clock import Clock, SystemClock
from manul_manor.feedback.channel import FeedbackChannel
from manul_manor.inventory.ledger import InventoryLedger
from manul_manor.models.config import EngineConfig
from manul_manor.models.item import Item, Position
from manul_manor.models.reward import Feedback, FeedbackCategory, Reward
from manul_manor.models.state import PetSnapshot, PetState
from manul_manor.persistence.repository import PetStateRepository
from manul_manor.persistence.store import InMemoryKeyValueStore, KeyValueStore
from manul_manor.placement.manager import PlacementManager
from manul_manor.progression.engine import LevelingEngine
from manul_manor.quiz.bank import QuizTheme
from manul_manor.quiz.engine import QuizEngine
from manul_manor.stats.engine import StatEngine

logger = logging.getLogger(__name__)

Subscriber = Callable[[PetSnapshot], None]


class PetService:

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        clock: Optional[Clock] = None,
        catalog: Optional[ItemCatalog] = None,
        config: Optional[EngineConfig] = None,
        quiz_themes: Optional[List[QuizTheme]] = None,
    ):
        self.clock = clock or SystemClock()
        self.catalog = catalog or ItemCatalog()
        self.config = config or EngineConfig()
        self.repository = PetStateRepository(
            store if store is not None else InMemoryKeyValueStore(),
            self.catalog,
            self.config,
        )

        self.feedback = FeedbackChannel(self.config.feedback_display_seconds)
        self.leveling = LevelingEngine(self.config, self.feedback)
        self.ledger = InventoryLedger(self.feedback)
        self.stats = StatEngine(self.config, self.feedback, self.ledger, self.leveling)
        self.placement = PlacementManager(self.config, self.catalog, self.feedback)
        self.quizzes = QuizEngine(self.config, self.feedback, self.leveling, quiz_themes)

        self._subscribers: List[Subscriber] = []

        now = self.clock.now()
        self._state = self.repository.load(now)
        if self._state.quiz is None and self.quizzes.is_quiz_day(now):
            self._state.quiz = self.quizzes.generate(now)
            logger.info("Generated quiz %s at startup", self._state.quiz.id)

    @property
    def state(self) -> PetState:
        return self._state

    # --- Observation ---

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register for snapshots after every mutation. Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def snapshot(self) -> PetSnapshot:
        state = self._state
        mood = state.pet.mood
        return PetSnapshot(
            pet=state.pet.model_copy(deep=True),
            mood=mood.value,
            mood_label=mood.label,
            inventory=[e.model_copy() for e in state.inventory],
            placed_items=[p.model_copy(deep=True) for p in state.placed_items],
            quiz=state.quiz.model_copy(deep=True) if state.quiz is not None else None,
            is_onboarding=state.is_onboarding,
            feedback=self.feedback.visible(self.clock.now()),
            recent_rewards=list(state.recent_rewards),
        )

    def _commit(self) -> None:
        self.repository.save(self._state)
        self._publish()

    def _publish(self) -> None:
        if not self._subscribers:
            return
        snapshot = self.snapshot()
        for callback in list(self._subscribers):
            try:
                callback(snapshot)
            except Exception:
                logger.exception("Snapshot subscriber %r failed", callback)

    # --- Care ---

    def feed(self, food: Optional[Item] = None) -> bool:
        fed = self.stats.feed(self._state, food, self.clock.now())
        if fed:
            self._commit()
        return fed

    def clean(self) -> None:
        self.stats.clean(self._state, self.clock.now())
        self._commit()

    def play(self) -> None:
        self.stats.play(self._state, self.clock.now())
        self._commit()

    def decay_tick(self) -> None:
        self.stats.decay_tick(self._state, self.clock.now())
        self._commit()

    # --- Progression ---

    def add_xp(self, amount: int) -> int:
        gained = self.leveling.add_xp(self._state, amount, self.clock.now())
        self._commit()
        return gained

    def required_xp(self, level: Optional[int] = None) -> int:
        return self.leveling.required_xp(level if level is not None else self._state.pet.level)

    def clear_rewards(self) -> List[Reward]:
        cleared = self.leveling.clear_rewards(self._state)
        self._publish()
        return cleared

    # --- Inventory ---

    def purchase(self, item: Item) -> bool:
        purchased = self.ledger.purchase(self._state, item, self.clock.now())
        if purchased:
            self._commit()
        else:
            self._publish()
        return purchased

    def consume(self, item: Item) -> bool:
        consumed = self.ledger.consume(self._state, item)
        if consumed:
            self._commit()
        return consumed

    def add_items(self, item: Item, quantity: int) -> None:
        self.ledger.add_items(self._state, item, quantity, self.clock.now())
        self._commit()

    def quantity(self, item_id: str) -> int:
        return self.ledger.quantity(self._state, item_id)

    def can_use(self, item: Item) -> bool:
        return self.ledger.can_use(self._state, item)

    # --- Placement & wearables ---

    def place(self, item: Item, position: Position) -> bool:
        placed = self.placement.place(self._state, item, position, self.clock.now())
        if placed:
            self._commit()
        return placed

    def remove(self, item: Item) -> bool:
        removed = self.placement.remove(self._state, item, self.clock.now())
        self._commit()
        return removed

    def wear(self, item: Item) -> bool:
        worn = self.placement.wear(self._state, item, self.clock.now())
        if worn:
            self._commit()
        return worn

    def unwear(self, item: Item) -> bool:
        removed = self.placement.unwear(self._state, item)
        if removed:
            self._commit()
        return removed

    # --- Quiz ---

    def check_weekly(self) -> bool:
        replaced = self.quizzes.check_weekly(self._state, self.clock.now())
        if replaced:
            self._commit()
        return replaced

    def submit_answer(self, question_index: int, answer_index: int) -> bool:
        if not self.quizzes.can_submit(self._state, question_index):
            return False
        correct = self.quizzes.submit_answer(
            self._state, question_index, answer_index, self.clock.now()
        )
        self._commit()
        return correct

    # --- Onboarding & identity ---

    def complete_onboarding(self, name: str) -> None:
        self._state.pet.name = name
        self._state.is_onboarding = False
        self.feedback.show(
            f"Welcome to Manul Manor, {name}!",
            FeedbackCategory.ONBOARDING_COMPLETE,
            self.clock.now(),
        )
        self._commit()
        logger.info("Onboarding completed for pet %s", self._state.pet.id)

    def rename(self, name: str) -> bool:
        if not name:
            return False
        self._state.pet.name = name
        self._commit()
        return True

    # --- Feedback ---

    def visible_feedback(self) -> Optional[Feedback]:
        return self.feedback.visible(self.clock.now())

    def dismiss_feedback(self) -> None:
        self.feedback.dismiss()
        self._publish()

    def save(self) -> bool:
        """Flush the aggregate to the store without publishing."""
        return self.repository.save(self._state)
