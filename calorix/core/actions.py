"""State Actions - Pure transitions for profile, nutrition and stats.

Every function takes the current AppState and returns a new one; inputs are
never mutated. Unknown ids leave the state unchanged. ``now`` and ``today``
are supplied by the caller.
"""

from datetime import date, datetime
from typing import Any, Optional

from .achievements import MEAL_POINTS, WATER_POINTS, award_action
from .biometrics import compute_goal
from .daily import apply_food_entry, apply_manual_stat, get_day, put_day, set_micronutrient
from .models import (
    INTEGRATION_KEYS,
    AppState,
    FoodItem,
    Goal,
    Mood,
    Nutrient,
    Reminder,
    Settings,
    StatField,
    User,
)


# ==================== Profile & Goal ====================


def goal_for_user(user: User, now: datetime) -> Goal:
    """Compute the goal matching a user's current profile."""
    return compute_goal(
        weight=user.weight,
        height=user.height,
        age=user.age,
        sex=user.sex,
        activity_level=user.activity_level,
        does_sports=user.sports,
        objective=user.goal_type,
        now=now,
        target_weight=user.target_weight,
        deadline_days=user.deadline,
    )


def _merge_user(user: User, updates: dict[str, Any]) -> User:
    # Validation happens on the merged record so bad values raise here
    return User.model_validate({**user.model_dump(), **updates})


def complete_onboarding(state: AppState, profile: dict[str, Any], now: datetime) -> AppState:
    """Store the onboarding answers and compute the first goal.

    Raises:
        pydantic.ValidationError: If the profile contains invalid values
    """
    user = _merge_user(state.user, {**profile, "onboarding_completed": True})
    return state.model_copy(update={"user": user, "goal": goal_for_user(user, now)})


def update_profile(state: AppState, updates: dict[str, Any], now: datetime) -> AppState:
    """Edit profile fields; the goal is replaced, not merged.

    Raises:
        pydantic.ValidationError: If an update contains invalid values
    """
    user = _merge_user(state.user, updates)
    return state.model_copy(update={"user": user, "goal": goal_for_user(user, now)})


def set_goal(state: AppState, goal: Goal) -> AppState:
    return state.model_copy(update={"goal": goal})


# ==================== Food Log ====================


def add_food(state: AppState, item: FoodItem, now: datetime) -> AppState:
    """Log a meal: newest first, micronutrients added to the item's date.

    Points and first-meal badges are evaluated on the state before the item
    is added.
    """
    state = award_action(state, "meal", MEAL_POINTS, now)
    stats = apply_food_entry(get_day(state.daily_stats, item.date), item, 1)
    return state.model_copy(
        update={
            "food_log": [item, *state.food_log],
            "daily_stats": put_day(state.daily_stats, stats),
        }
    )


def edit_food(state: AppState, item: FoodItem) -> AppState:
    """Replace an entry in place.

    The day's micronutrient aggregate is left as it was.
    """
    if not any(f.id == item.id for f in state.food_log):
        return state
    food_log = [item if f.id == item.id else f for f in state.food_log]
    return state.model_copy(update={"food_log": food_log})


def remove_food(state: AppState, food_id: str) -> AppState:
    """Delete an entry and take its micronutrients back out of its day."""
    item = find_food(state, food_id)
    if item is None:
        return state

    stats = apply_food_entry(get_day(state.daily_stats, item.date), item, -1)
    return state.model_copy(
        update={
            "food_log": [f for f in state.food_log if f.id != food_id],
            "daily_stats": put_day(state.daily_stats, stats),
        }
    )


def find_food(state: AppState, food_id: str) -> Optional[FoodItem]:
    return next((f for f in state.food_log if f.id == food_id), None)


# ==================== Daily Stats ====================


def add_water(state: AppState, amount: int, today: date, now: datetime) -> AppState:
    """Add (or with a negative amount, remove) water for today.

    Only positive increments earn points.
    """
    stats = apply_manual_stat(get_day(state.daily_stats, today), StatField.WATER_INTAKE, amount)
    state = state.model_copy(update={"daily_stats": put_day(state.daily_stats, stats)})
    if amount > 0:
        state = award_action(state, "water", WATER_POINTS, now)
    return state


def log_activity(state: AppState, steps: int, calories: int, today: date) -> AppState:
    """Add steps and burned calories to today."""
    stats = get_day(state.daily_stats, today)
    stats = apply_manual_stat(stats, StatField.STEPS, steps)
    stats = apply_manual_stat(stats, StatField.CALORIES_BURNED, calories)
    return state.model_copy(update={"daily_stats": put_day(state.daily_stats, stats)})


def update_micronutrient(state: AppState, nutrient: Nutrient, value: float, today: date) -> AppState:
    stats = set_micronutrient(get_day(state.daily_stats, today), nutrient, value)
    return state.model_copy(update={"daily_stats": put_day(state.daily_stats, stats)})


def set_mood(state: AppState, mood: Optional[Mood], today: date) -> AppState:
    stats = get_day(state.daily_stats, today).model_copy(update={"mood": mood})
    return state.model_copy(update={"daily_stats": put_day(state.daily_stats, stats)})


# ==================== Integrations ====================


def has_active_integrations(state: AppState) -> bool:
    return any(getattr(state.integrations, key) for key in INTEGRATION_KEYS)


def toggle_integration(state: AppState, key: str) -> AppState:
    if key not in INTEGRATION_KEYS:
        return state
    integrations = state.integrations.model_copy(
        update={key: not getattr(state.integrations, key)}
    )
    return state.model_copy(update={"integrations": integrations})


def apply_sync(state: AppState, steps: int, calories: int, today: date, now: datetime) -> AppState:
    """Record pulled activity and stamp the sync time."""
    state = log_activity(state, steps, calories, today)
    integrations = state.integrations.model_copy(update={"last_sync": now})
    return state.model_copy(update={"integrations": integrations})


# ==================== Notifications, Reminders, Settings ====================


def mark_notifications_read(state: AppState, ids: Optional[list[str]] = None) -> AppState:
    """Mark the given notifications (all when ``ids`` is None) as read."""
    notifications = [
        n.model_copy(update={"read": True}) if ids is None or n.id in ids else n
        for n in state.notifications
    ]
    return state.model_copy(update={"notifications": notifications})


def set_reminders(state: AppState, reminders: list[Reminder]) -> AppState:
    return state.model_copy(update={"reminders": list(reminders)})


def update_settings(state: AppState, updates: dict[str, Any]) -> AppState:
    """Raises pydantic.ValidationError on invalid values."""
    settings = Settings.model_validate({**state.settings.model_dump(), **updates})
    return state.model_copy(update={"settings": settings})


def touch_last_login(state: AppState, now: datetime) -> AppState:
    """Stamp the login time once per calendar day."""
    if state.user.last_login.date() == now.date():
        return state
    return state.model_copy(update={"user": state.user.model_copy(update={"last_login": now})})
