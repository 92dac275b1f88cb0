"""Tests for the Leveling Engine."""

from datetime import datetime, timezone

from manul_manor.clock import FixedClock
from manul_manor.models.reward import FeedbackCategory, RewardKind
from manul_manor.service.pet_service import PetService

TUESDAY = datetime(2026, 10, 20, 9, 0, tzinfo=timezone.utc)


def _make_service() -> PetService:
    service = PetService(clock=FixedClock(TUESDAY))
    service.state.pet.name = "Pallas"
    return service


class TestRequiredXP:
    def test_linear_curve(self):
        service = _make_service()
        assert service.required_xp(1) == 100
        assert service.required_xp(2) == 200
        assert service.required_xp(7) == 700
        assert service.required_xp() == 100


class TestAddXP:
    def test_below_threshold(self):
        service = _make_service()
        assert service.add_xp(99) == 0
        pet = service.state.pet
        assert pet.level == 1
        assert pet.xp == 99
        assert service.state.recent_rewards == []

    def test_single_level_up(self):
        service = _make_service()
        assert service.add_xp(250) == 1
        pet = service.state.pet
        assert pet.level == 2
        assert pet.xp == 150
        assert pet.coins == 100 + 100

    def test_multi_level_jump_loops(self):
        service = _make_service()
        assert service.add_xp(300) == 2
        pet = service.state.pet
        assert pet.level == 3
        assert pet.xp == 0
        assert pet.coins == 100 + 50 * 2 + 50 * 3

    def test_xp_stays_below_requirement(self):
        service = _make_service()
        for amount in (7, 130, 480, 999, 1):
            service.add_xp(amount)
            pet = service.state.pet
            assert 0 <= pet.xp < service.required_xp(pet.level)

    def test_rewards_logged_per_level(self):
        service = _make_service()
        service.add_xp(300)
        kinds = [(r.kind, r.amount) for r in service.state.recent_rewards]
        assert kinds == [
            (RewardKind.LEVEL_UP, 2),
            (RewardKind.COINS, 100),
            (RewardKind.LEVEL_UP, 3),
            (RewardKind.COINS, 150),
        ]

    def test_level_up_feedback(self):
        service = _make_service()
        service.add_xp(100)
        feedback = service.visible_feedback()
        assert feedback.category == FeedbackCategory.LEVEL_UP
        assert feedback.message == "Level Up! Pallas is now level 2. Earned 100 coins!"

    def test_non_positive_amount_ignored(self):
        service = _make_service()
        assert service.add_xp(0) == 0
        assert service.add_xp(-20) == 0
        assert service.state.pet.xp == 0


class TestRewardLog:
    def test_clear_returns_and_empties(self):
        service = _make_service()
        service.add_xp(100)
        cleared = service.clear_rewards()
        assert len(cleared) == 2
        assert service.state.recent_rewards == []

    def test_append_only_until_cleared(self):
        service = _make_service()
        service.add_xp(100)
        service.add_xp(200)
        assert len(service.state.recent_rewards) == 4
