"""Goal Tracking - Detect goal completion for today.

Each goal kind fires at most once per calendar date: the flag lives on that
date's DailyStats record, so a new day starts with all flags cleared.
Checks run in a fixed order (calories, protein, water, hydration badge) and
every notification is prepended, so the last check ends up on top.
"""

from datetime import date, datetime

from .achievements import (
    CALORIE_GOAL_POINTS,
    HYDRATED_BADGE,
    HYDRATION_BADGE_ML,
    award_action,
    is_unlocked,
    unlock_badge,
)
from .daily import calculate_daily_totals, get_day, put_day
from .models import AppState, DailyStats, Notification


CALORIE_GOAL_TOLERANCE = 50
CALORIE_GOAL_MINIMUM = 1000

CALORIES_MESSAGE = "Parabéns! Você atingiu sua meta de calorias! 🎉"
PROTEIN_MESSAGE = "Meta de proteínas batida! 💪"
WATER_MESSAGE = "Hidratação completa! 💧"


def _notify(state: AppState, message: str, now: datetime) -> AppState:
    notification = Notification(type="goal", message=message, timestamp=now)
    return state.model_copy(update={"notifications": [notification, *state.notifications]})


def _flag(state: AppState, stats: DailyStats, kind: str) -> tuple[AppState, DailyStats]:
    stats = stats.model_copy(
        update={"notified_goals": stats.notified_goals.model_copy(update={kind: True})}
    )
    return state.model_copy(update={"daily_stats": put_day(state.daily_stats, stats)}), stats


def check_goal_completion(state: AppState, today: date, now: datetime) -> AppState:
    """Emit today's goal notifications that have not fired yet.

    Without a goal nothing is checked. Reaching the calorie goal also grants
    CALORIE_GOAL_POINTS under the ``meal`` action; the protein and water goals
    grant no points. The hydration badge uses the fixed 2000 ml milestone,
    independent of the personalised water goal.

    Args:
        state: State after the latest action
        today: The current calendar date
        now: Timestamp for notifications and unlocks

    Returns:
        New state, or the same state when nothing fired
    """
    goal = state.goal
    if goal is None:
        return state

    totals = calculate_daily_totals(state.food_log, today)
    stats = get_day(state.daily_stats, today)

    if (
        abs(totals.calories - goal.daily_calories) < CALORIE_GOAL_TOLERANCE
        and totals.calories > CALORIE_GOAL_MINIMUM
        and not stats.notified_goals.calories
    ):
        state = _notify(state, CALORIES_MESSAGE, now)
        state, stats = _flag(state, stats, "calories")
        state = award_action(state, "meal", CALORIE_GOAL_POINTS, now)

    # Display totals are rounded; the goal compares the raw sum
    protein = sum(e.protein for e in state.food_log if e.date == today)
    if protein >= goal.macros.protein and not stats.notified_goals.protein:
        state = _notify(state, PROTEIN_MESSAGE, now)
        state, stats = _flag(state, stats, "protein")

    if stats.water_intake >= goal.daily_water and not stats.notified_goals.water:
        state = _notify(state, WATER_MESSAGE, now)
        state, stats = _flag(state, stats, "water")

    if stats.water_intake >= HYDRATION_BADGE_ML and not is_unlocked(state, HYDRATED_BADGE):
        state = unlock_badge(state, HYDRATED_BADGE, now)

    return state
