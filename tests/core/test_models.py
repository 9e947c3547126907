"""Unit tests for data models - validation and defaults."""

import pytest
from datetime import date, datetime
from pydantic import ValidationError

from calorix.core.models import (
    AppState,
    DailyStats,
    FoodItem,
    Notification,
    Reminder,
    User,
)
from calorix.core.defaults import default_state


NOW = datetime(2026, 10, 19, 12, 0)


class TestFoodItem:
    """Tests for FoodItem model."""

    def test_valid_entry(self):
        """Valid entry is created with defaults."""
        entry = FoodItem(name="Coffee", calories=65, protein=4.0, carbs=6.5, fat=2.5,
                         date=NOW.date(), timestamp=NOW)
        assert entry.id is not None
        assert entry.meal_type == "snack"
        assert entry.micronutrients is None

    def test_empty_name_rejected(self):
        """Empty name is rejected."""
        with pytest.raises(ValidationError):
            FoodItem(name="", calories=65, protein=4, carbs=6, fat=2, date=NOW.date(), timestamp=NOW)

    def test_negative_calories_rejected(self):
        """Negative calories are rejected."""
        with pytest.raises(ValidationError):
            FoodItem(name="Bad", calories=-10, protein=4, carbs=6, fat=2, date=NOW.date(), timestamp=NOW)

    def test_unique_ids(self):
        """Each entry gets a unique ID."""
        a = FoodItem(name="A", calories=1, protein=0, carbs=0, fat=0, date=NOW.date(), timestamp=NOW)
        b = FoodItem(name="B", calories=1, protein=0, carbs=0, fat=0, date=NOW.date(), timestamp=NOW)
        assert a.id != b.id


class TestDailyStats:
    """Tests for DailyStats model."""

    def test_defaults(self):
        """A new day starts at zero with no goal flagged."""
        stats = DailyStats(date=date(2026, 10, 19))
        assert stats.steps == 0
        assert stats.micronutrients.vitamin_c == 0
        assert stats.notified_goals.model_dump() == {"calories": False, "protein": False, "water": False}

    def test_negative_water_rejected(self):
        """Water intake can never be negative."""
        with pytest.raises(ValidationError):
            DailyStats(date=date(2026, 10, 19), water_intake=-1)


class TestUser:
    """Tests for User model."""

    def test_unknown_activity_level_rejected(self):
        """Activity level must be one of the known keys."""
        with pytest.raises(ValidationError):
            User(activity_level="extreme", last_login=NOW)

    def test_level_starts_at_one(self):
        """Fresh users are level 1 with no points."""
        user = User(last_login=NOW)
        assert user.level == 1
        assert user.points == 0


class TestReminder:
    """Tests for Reminder model."""

    def test_time_format(self):
        """Reminders need an HH:MM time."""
        assert Reminder(title="Água", time="09:30", type="water").active is True
        with pytest.raises(ValidationError):
            Reminder(title="Água", time="9h30", type="water")


class TestAppState:
    """Tests for AppState snapshots."""

    def test_json_round_trip(self):
        """A snapshot survives serialization unchanged."""
        state = default_state(NOW)
        restored = AppState.model_validate_json(state.model_dump_json())
        assert restored == state

    def test_default_state(self):
        """Defaults: not onboarded, no goal, full badge catalog, seed content."""
        state = default_state(NOW)

        assert not state.user.onboarding_completed
        assert state.goal is None
        assert [b.id for b in state.user.badges] == ["b1", "b2", "b3", "b4", "b5", "b6"]
        assert state.user.badges[0].unlocked
        assert not any(b.unlocked for b in state.user.badges[1:])
        assert len(state.workout_plan) == 7
        assert state.community_posts
        assert isinstance(state.notifications[0], Notification)
