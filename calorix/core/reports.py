"""Report Generation - Pure functions for generating reports.

All functions are pure: same input always produces same output, no side effects.
"""

import calendar
from datetime import date, timedelta

from .daily import calculate_daily_totals, get_day
from .models import AppState, CalendarDay, DaySummary, WeeklyReport


# A day counts as on target within this many kcal of the goal
CALENDAR_TOLERANCE = 200


def generate_day_summary(state: AppState, log_date: date) -> DaySummary:
    """Generate a summary for a single date.

    Args:
        state: Current state
        log_date: The date to summarize

    Returns:
        DaySummary with food totals and that day's stats
    """
    totals = calculate_daily_totals(state.food_log, log_date)
    stats = get_day(state.daily_stats, log_date)

    calories_remaining = None
    if state.goal is not None:
        calories_remaining = state.goal.daily_calories - totals.calories

    return DaySummary(
        log_date=log_date,
        totals=totals,
        steps=stats.steps,
        calories_burned=stats.calories_burned,
        water_intake=stats.water_intake,
        micronutrients=stats.micronutrients,
        calories_remaining=calories_remaining,
    )


def has_data(state: AppState, log_date: date) -> bool:
    return log_date.isoformat() in state.daily_stats or any(
        f.date == log_date for f in state.food_log
    )


def calculate_energy_balance(total_calories: int, days: int, daily_goal: int) -> int:
    """Net calories against the goal over a period.

    Positive value = eaten above goal
    Negative value = eaten below goal
    """
    return total_calories - days * daily_goal


def generate_month_calendar(state: AppState, year: int, month: int) -> list[CalendarDay]:
    """Per-day status for every date of a month.

    Days without any data are "none"; days with calories within
    CALENDAR_TOLERANCE of the goal (2000 kcal without a goal) are "on_target".
    """
    goal_calories = state.goal.daily_calories if state.goal else 2000
    _, days_in_month = calendar.monthrange(year, month)

    days = []
    for day in range(1, days_in_month + 1):
        log_date = date(year, month, day)
        calories = calculate_daily_totals(state.food_log, log_date).calories

        status = "none"
        if has_data(state, log_date) and calories > 0:
            if abs(calories - goal_calories) < CALENDAR_TOLERANCE:
                status = "on_target"
            else:
                status = "off_target"

        days.append(CalendarDay(log_date=log_date, calories=calories, status=status))
    return days


def generate_weekly_report(state: AppState, week_start: date) -> WeeklyReport:
    """Generate a weekly report from the food log and daily stats.

    Args:
        state: Current state
        week_start: First date of the seven-day window

    Returns:
        WeeklyReport with summaries for the days that have data
    """
    week_end = week_start + timedelta(days=6)

    daily_summaries = [
        generate_day_summary(state, week_start + timedelta(days=offset))
        for offset in range(7)
        if has_data(state, week_start + timedelta(days=offset))
    ]

    total_calories = sum(s.totals.calories for s in daily_summaries)
    days_logged = len(daily_summaries)
    avg_daily_calories = total_calories / days_logged if days_logged > 0 else 0

    energy_balance = None
    if state.goal is not None:
        # Uses days logged (not full week)
        energy_balance = calculate_energy_balance(
            total_calories, days_logged, state.goal.daily_calories
        )

    return WeeklyReport(
        week_start=week_start,
        week_end=week_end,
        daily_summaries=daily_summaries,
        total_calories=total_calories,
        avg_daily_calories=round(avg_daily_calories, 1),
        total_protein=round(sum(s.totals.protein for s in daily_summaries), 1),
        total_carbs=round(sum(s.totals.carbs for s in daily_summaries), 1),
        total_fat=round(sum(s.totals.fat for s in daily_summaries), 1),
        total_steps=sum(s.steps for s in daily_summaries),
        energy_balance=energy_balance,
        days_logged=days_logged,
    )
