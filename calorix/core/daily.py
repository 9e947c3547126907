"""Daily Aggregation - Pure functions over per-day records.

All functions are pure: same input always produces same output, no side effects.
Calorie and macro totals are never stored; they are summed from the food log
on demand so they stay consistent under add, edit and remove.
"""

from datetime import date
from typing import Literal

from .models import (
    DailyStats,
    DailyTotals,
    FoodItem,
    Micronutrients,
    Nutrient,
    StatField,
)


MICRONUTRIENT_PRECISION = 4


def day_key(day: date) -> str:
    """Key of a date in the daily stats map."""
    return day.isoformat()


def new_day(day: date) -> DailyStats:
    """Empty stats record for a date."""
    return DailyStats(date=day)


def get_day(daily_stats: dict[str, DailyStats], day: date) -> DailyStats:
    """Stats for a date, or a fresh record if nothing was written yet."""
    return daily_stats.get(day_key(day)) or new_day(day)


def put_day(daily_stats: dict[str, DailyStats], stats: DailyStats) -> dict[str, DailyStats]:
    """Copy of the map with ``stats`` stored under its date."""
    return {**daily_stats, day_key(stats.date): stats}


def apply_food_entry(day: DailyStats, item: FoodItem, sign: Literal[1, -1] = 1) -> DailyStats:
    """Add (sign=1) or remove (sign=-1) an entry's micronutrients.

    Missing micronutrient data counts as zero. Every component is rounded
    to MICRONUTRIENT_PRECISION decimals and floored at zero, so a removal
    exactly undoes the matching add and never drives the aggregate negative.

    Args:
        day: Current stats for the entry's date
        item: The food entry
        sign: 1 to add the entry, -1 to remove it

    Returns:
        New DailyStats with the updated micronutrient aggregate
    """
    contribution = item.micronutrients or Micronutrients()
    current = day.micronutrients

    updated = Micronutrients(
        **{
            nutrient.value: max(
                0.0,
                round(
                    getattr(current, nutrient.value) + sign * getattr(contribution, nutrient.value),
                    MICRONUTRIENT_PRECISION,
                ),
            )
            for nutrient in Nutrient
        }
    )
    return day.model_copy(update={"micronutrients": updated})


def apply_manual_stat(day: DailyStats, field: StatField, delta: int) -> DailyStats:
    """Add ``delta`` to one of the manual counters.

    Water intake is clamped at zero on decrement; steps and calories burned
    are plain additions.
    """
    value = getattr(day, field.value) + delta
    if field is StatField.WATER_INTAKE:
        value = max(0, value)
    return day.model_copy(update={field.value: value})


def set_micronutrient(day: DailyStats, nutrient: Nutrient, value: float) -> DailyStats:
    """Overwrite one micronutrient with a manually entered amount."""
    micros = day.micronutrients.model_copy(update={nutrient.value: max(0.0, value)})
    return day.model_copy(update={"micronutrients": micros})


def calculate_daily_totals(food_log: list[FoodItem], on_date: date) -> DailyTotals:
    """Calculate total calories and macros logged on a date.

    Args:
        food_log: The full food log
        on_date: Date to total

    Returns:
        DailyTotals for the entries of that date
    """
    entries = [item for item in food_log if item.date == on_date]

    return DailyTotals(
        calories=sum(e.calories for e in entries),
        protein=round(sum(e.protein for e in entries), 1),
        carbs=round(sum(e.carbs for e in entries), 1),
        fat=round(sum(e.fat for e in entries), 1),
        entry_count=len(entries),
    )
