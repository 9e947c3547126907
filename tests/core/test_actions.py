"""Unit tests for state actions - pure functions, no mocks needed."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from calorix.core.achievements import FOCUSED_BADGE, is_unlocked
from calorix.core.actions import (
    add_food,
    add_water,
    apply_sync,
    complete_onboarding,
    edit_food,
    has_active_integrations,
    log_activity,
    mark_notifications_read,
    remove_food,
    set_mood,
    set_reminders,
    toggle_integration,
    touch_last_login,
    update_micronutrient,
    update_profile,
    update_settings,
)
from calorix.core.daily import day_key
from calorix.core.models import FoodItem, Micronutrients, Nutrient, Reminder


PROFILE = {
    "name": "Ana",
    "age": 30,
    "sex": "female",
    "weight": 70,
    "height": 165,
    "activity_level": "moderate",
    "goal_type": "lose_weight",
}


def food(now, calories=60, micros=None, name="Banana"):
    return FoodItem(name=name, calories=calories, protein=1, carbs=15, fat=0,
                    date=now.date(), timestamp=now, micronutrients=micros)


class TestProfile:
    """Tests for onboarding and profile edits."""

    def test_onboarding_computes_goal(self, state, now):
        """Finishing onboarding stores the profile and the goal."""
        onboarded = complete_onboarding(state, PROFILE, now)

        assert onboarded.user.onboarding_completed
        assert onboarded.user.name == "Ana"
        assert onboarded.goal.daily_calories == 1701
        assert onboarded.goal.daily_water == 2450

    def test_profile_edit_replaces_goal(self, state, now):
        """Changing the objective recomputes the goal wholesale."""
        onboarded = complete_onboarding(state, {**PROFILE, "target_weight": 60}, now)
        later = now + timedelta(days=3)
        edited = update_profile(onboarded, {"goal_type": "maintain", "target_weight": None}, later)

        assert edited.goal.daily_calories == 2201
        assert edited.goal.type == "maintain"
        assert edited.goal.target_weight == 70
        assert edited.goal.start_date == later

    def test_invalid_profile_raises(self, state, now):
        """Unknown activity levels are rejected."""
        with pytest.raises(ValidationError):
            update_profile(state, {"activity_level": "extreme"}, now)


class TestFoodLog:
    """Tests for add, edit and remove."""

    def test_add_prepends_and_aggregates(self, state, now):
        """New entries go first and add micronutrients to their date."""
        first = food(now, micros=Micronutrients(vitamin_c=8))
        second = food(now, name="Maçã", micros=Micronutrients(vitamin_c=4.5))
        state = add_food(add_food(state, first, now), second, now)

        assert [f.id for f in state.food_log] == [second.id, first.id]
        assert state.daily_stats[day_key(now.date())].micronutrients.vitamin_c == 12.5
        assert state.user.points == 20

    def test_first_meal_badge(self, state, now):
        """The first logged meal unlocks Focada."""
        assert is_unlocked(add_food(state, food(now), now), FOCUSED_BADGE)

    def test_remove_reverses_micronutrients(self, state, now):
        """Removing an entry takes its micronutrients back out."""
        keep = food(now, micros=Micronutrients(iron=1))
        drop = food(now, name="Feijão", micros=Micronutrients(iron=1.5, potassium=250))
        state = add_food(add_food(state, keep, now), drop, now)
        state = remove_food(state, drop.id)

        micros = state.daily_stats[day_key(now.date())].micronutrients
        assert [f.id for f in state.food_log] == [keep.id]
        assert micros.iron == 1
        assert micros.potassium == 0

    def test_remove_unknown_is_noop(self, state):
        """Unknown ids change nothing."""
        assert remove_food(state, "missing") is state

    def test_edit_keeps_micronutrient_aggregate(self, state, now):
        """Editing replaces the entry but not the day's micronutrients."""
        item = food(now, micros=Micronutrients(calcium=100))
        state = add_food(state, item, now)
        edited = edit_food(state, item.model_copy(update={"calories": 90, "micronutrients": None}))

        assert edited.food_log[0].calories == 90
        assert edited.daily_stats[day_key(now.date())].micronutrients.calcium == 100

    def test_edit_unknown_is_noop(self, state, now):
        """Editing an entry that is not logged does nothing."""
        assert edit_food(state, food(now)) is state


class TestDailyStatsActions:
    """Tests for water, activity and micronutrient actions."""

    def test_water_points_only_for_increments(self, state, now):
        """Positive water earns 5 points; removal earns none."""
        state = add_water(state, 250, now.date(), now)
        state = add_water(state, -100, now.date(), now)

        assert state.daily_stats[day_key(now.date())].water_intake == 150
        assert state.user.points == 5

    def test_activity_adds_up(self, state, now):
        """Steps and burned calories accumulate."""
        state = log_activity(state, 1000, 80, now.date())
        state = log_activity(state, 500, 20, now.date())

        day = state.daily_stats[day_key(now.date())]
        assert (day.steps, day.calories_burned) == (1500, 100)

    def test_micronutrient_set(self, state, now):
        """Manual micronutrient entry sets today's value."""
        state = update_micronutrient(state, Nutrient.MAGNESIUM, 320, now.date())
        assert state.daily_stats[day_key(now.date())].micronutrients.magnesium == 320

    def test_mood(self, state, now):
        """Mood is stored on today and can be cleared."""
        state = set_mood(state, "happy", now.date())
        assert state.daily_stats[day_key(now.date())].mood == "happy"
        assert set_mood(state, None, now.date()).daily_stats[day_key(now.date())].mood is None


class TestIntegrations:
    """Tests for integration toggles and sync."""

    def test_toggle(self, state):
        """Toggling flips one integration."""
        assert not has_active_integrations(state)
        state = toggle_integration(state, "garmin")
        assert state.integrations.garmin
        assert has_active_integrations(state)

    def test_unknown_key(self, state):
        """Unknown integrations are ignored."""
        assert toggle_integration(state, "myspace") is state

    def test_sync_adds_activity_and_stamps(self, state, now):
        """A sync adds to today and records the time."""
        state = apply_sync(state, 320, 25, now.date(), now)

        day = state.daily_stats[day_key(now.date())]
        assert (day.steps, day.calories_burned) == (320, 25)
        assert state.integrations.last_sync == now


class TestMisc:
    """Tests for notifications, reminders, settings and login."""

    def test_mark_all_read(self, state):
        """Without ids every notification is read."""
        assert all(n.read for n in mark_notifications_read(state).notifications)

    def test_mark_some_read(self, state):
        """Only listed notifications change."""
        marked = mark_notifications_read(state, ["n1"])
        assert next(n for n in marked.notifications if n.id == "n1").read
        assert [n.message for n in marked.notifications] == [n.message for n in state.notifications]

    def test_reminders_replaced(self, state):
        """Reminders are replaced as a list."""
        reminders = [Reminder(title="Beber água", time="10:00", type="water")]
        assert set_reminders(state, reminders).reminders == reminders

    def test_settings(self, state):
        """Settings are merged and validated."""
        assert update_settings(state, {"unit_system": "imperial"}).settings.unit_system == "imperial"
        with pytest.raises(ValidationError):
            update_settings(state, {"unit_system": "cubits"})

    def test_last_login_once_per_day(self, state, now):
        """Same-day logins keep the stored time."""
        assert touch_last_login(state, now + timedelta(hours=2)) is state
        tomorrow = now + timedelta(days=1)
        assert touch_last_login(state, tomorrow).user.last_login == tomorrow
