"""Fasting - Two-state machine: inactive, or active since a start time.

All functions are pure: the caller passes in ``now``.
"""

from datetime import datetime
from typing import Optional

from .daily import get_day, put_day
from .models import AppState, FastingMode, FastingRecord


MODE_HOURS: dict[str, float] = {
    "rabbit": 12,
    "fox": 14,
    "lion": 16,
}


def target_hours(mode: FastingMode, custom_hours: Optional[float] = None) -> Optional[float]:
    """Target duration for a mode; None for a custom mode without valid hours."""
    if mode == "custom":
        if custom_hours is None or custom_hours <= 0:
            return None
        return custom_hours
    return MODE_HOURS[mode]


def elapsed_hours(state: AppState, now: datetime) -> float:
    """Hours since the active fast started (0 when inactive)."""
    fasting = state.fasting
    if not fasting.is_active or fasting.start_time is None:
        return 0.0
    return max(0.0, (now - fasting.start_time).total_seconds() / 3600)


def start_fasting(
    state: AppState,
    mode: FastingMode,
    now: datetime,
    custom_hours: Optional[float] = None,
) -> AppState:
    """INACTIVE -> ACTIVE. Ignored when already fasting or hours are invalid."""
    hours = target_hours(mode, custom_hours)
    if state.fasting.is_active or hours is None:
        return state

    fasting = state.fasting.model_copy(
        update={"is_active": True, "start_time": now, "mode": mode, "target_duration": hours}
    )
    return state.model_copy(update={"fasting": fasting})


def stop_fasting(state: AppState, now: datetime) -> AppState:
    """ACTIVE -> INACTIVE, recording the finished fast.

    The fast is appended to the history and its hours are added to the
    fasting_hours of the date it started on.
    """
    fasting = state.fasting
    if not fasting.is_active:
        return state

    duration = round(elapsed_hours(state, now), 2)
    record = FastingRecord(
        date=(fasting.start_time or now).date(),
        duration_hours=duration,
        completed=duration >= fasting.target_duration,
    )
    fasting = fasting.model_copy(
        update={"is_active": False, "start_time": None, "history": [*fasting.history, record]}
    )
    stats = get_day(state.daily_stats, record.date)
    stats = stats.model_copy(update={"fasting_hours": round(stats.fasting_hours + duration, 2)})
    return state.model_copy(
        update={"fasting": fasting, "daily_stats": put_day(state.daily_stats, stats)}
    )
