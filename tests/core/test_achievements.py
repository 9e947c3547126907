"""Unit tests for points, levels and badges - pure functions, no mocks needed."""

from datetime import datetime

import pytest

from calorix.core.achievements import (
    FITNESS_BADGE,
    FOCUSED_BADGE,
    HYDRATED_BADGE,
    MUSE_BADGE,
    SOCIAL_BADGE,
    award_action,
    calculate_level,
    is_unlocked,
    unlock_badge,
)
from calorix.core.models import FoodItem, Post


LATER = datetime(2026, 10, 19, 13, 0)


def achievement_notifications(state):
    return [n for n in state.notifications if n.type == "achievement"]


class TestCalculateLevel:
    """Tests for calculate_level."""

    @pytest.mark.parametrize(
        "points,level",
        [(0, 1), (999, 1), (1000, 2), (1999, 2), (4000, 5), (4999, 5), (5000, 6)],
    )
    def test_thresholds(self, points, level):
        """A new level every 1000 points, starting at 1."""
        assert calculate_level(points) == level


class TestUnlockBadge:
    """Tests for unlock_badge."""

    def test_unlock_stamps_date_and_notifies(self, state):
        """Unlocking flips the flag, stamps the date and prepends a notification."""
        before = len(state.notifications)
        unlocked = unlock_badge(state, HYDRATED_BADGE, LATER)

        badge = next(b for b in unlocked.user.badges if b.id == HYDRATED_BADGE)
        assert badge.unlocked
        assert badge.date_unlocked == LATER
        assert len(unlocked.notifications) == before + 1
        assert unlocked.notifications[0].type == "achievement"
        assert "Hidratada" in unlocked.notifications[0].message

    def test_idempotent(self, state):
        """A second unlock is a no-op."""
        once = unlock_badge(state, HYDRATED_BADGE, LATER)
        twice = unlock_badge(once, HYDRATED_BADGE, datetime(2026, 10, 20))

        assert twice is once
        assert len(achievement_notifications(twice)) == 1

    def test_unknown_badge_is_noop(self, state):
        """Unknown ids unlock nothing."""
        assert unlock_badge(state, "b99", LATER) is state

    def test_input_state_untouched(self, state):
        """The original snapshot keeps the badge locked."""
        unlock_badge(state, HYDRATED_BADGE, LATER)
        assert not is_unlocked(state, HYDRATED_BADGE)


class TestAwardAction:
    """Tests for award_action."""

    def test_points_and_level(self, state):
        """Points accumulate and level is recomputed."""
        awarded = award_action(state, "water", 1000, LATER)
        assert awarded.user.points == 1000
        assert awarded.user.level == 2

    def test_first_meal_unlocks_focused(self, state):
        """Focada unlocks when the food log was empty."""
        awarded = award_action(state, "meal", 10, LATER)
        assert is_unlocked(awarded, FOCUSED_BADGE)

    def test_meal_with_existing_log_does_not_unlock(self, state, now):
        """Focada stays locked if meals were already logged."""
        item = FoodItem(name="Pão", calories=135, protein=4, carbs=28, fat=0, date=now.date(), timestamp=now)
        state = state.model_copy(update={"food_log": [item]})
        assert not is_unlocked(award_action(state, "meal", 10, LATER), FOCUSED_BADGE)

    def test_first_workout_unlocks_fitness(self, state):
        """The pre-completed rest day does not count as a workout."""
        awarded = award_action(state, "workout", 50, LATER)
        assert is_unlocked(awarded, FITNESS_BADGE)

    def test_workout_after_completed_day_does_not_unlock(self, state):
        """Fitness stays locked when a training day was already done."""
        plan = [d.model_copy(update={"completed": True}) if d.id == "1" else d for d in state.workout_plan]
        state = state.model_copy(update={"workout_plan": plan})
        assert not is_unlocked(award_action(state, "workout", 50, LATER), FITNESS_BADGE)

    def test_first_post_unlocks_social(self, state):
        """Seed posts by others do not count."""
        awarded = award_action(state, "post", 20, LATER)
        assert is_unlocked(awarded, SOCIAL_BADGE)

    def test_post_after_own_post_does_not_unlock(self, state, now):
        """Social stays locked if the user already posted."""
        mine = Post(author="Eu", author_id="me", avatar="👩", content="Oi", timestamp=now)
        state = state.model_copy(update={"community_posts": [mine, *state.community_posts]})
        assert not is_unlocked(award_action(state, "post", 20, LATER), SOCIAL_BADGE)

    def test_muse_at_level_five(self, state):
        """Reaching 4999 points means level 5 and unlocks Musa."""
        state = state.model_copy(update={"user": state.user.model_copy(update={"points": 4989})})
        awarded = award_action(state, "water", 10, LATER)

        assert awarded.user.points == 4999
        assert awarded.user.level == 5
        assert is_unlocked(awarded, MUSE_BADGE)

    def test_muse_not_before_level_five(self, state):
        """3999 points is still level 4."""
        awarded = award_action(state, "water", 3999, LATER)
        assert not is_unlocked(awarded, MUSE_BADGE)

    def test_repeated_trigger_unlocks_once(self, state):
        """Awarding twice on the same empty log unlocks Focada exactly once."""
        once = award_action(state, "meal", 10, LATER)
        twice = award_action(once, "meal", 10, LATER)

        assert twice.user.points == 20
        focused = [n for n in achievement_notifications(twice) if "Focada" in n.message]
        assert len(focused) == 1
