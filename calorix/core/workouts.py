"""Workout Plan - Pure transitions over the weekly plan."""

from datetime import datetime

from .achievements import WORKOUT_POINTS, award_action
from .models import AppState, Exercise


def toggle_workout(state: AppState, day_id: str, now: datetime) -> AppState:
    """Flip a day's completion.

    Only marking a training day done earns points; rest days never award.
    """
    day = next((d for d in state.workout_plan if d.id == day_id), None)
    if day is None:
        return state

    if not day.completed and day.focus != "rest":
        state = award_action(state, "workout", WORKOUT_POINTS, now)

    plan = [
        d.model_copy(update={"completed": not d.completed}) if d.id == day_id else d
        for d in state.workout_plan
    ]
    return state.model_copy(update={"workout_plan": plan})


def update_workout_day(state: AppState, day_id: str, exercises: list[Exercise]) -> AppState:
    plan = [
        d.model_copy(update={"exercises": list(exercises)}) if d.id == day_id else d
        for d in state.workout_plan
    ]
    return state.model_copy(update={"workout_plan": plan})
