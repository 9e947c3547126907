"""Biometric Calculations - Pure functions for goal math.

All functions are pure: same input always produces same output, no side effects.
"""

import math
from datetime import datetime
from typing import Optional

from .models import ActivityLevel, GoalType, Goal, Macros, Sex


MIN_DAILY_CALORIES = 1200
DEFAULT_GOAL_DAYS = 60
WATER_ML_PER_KG = 35
SPORTS_WATER_BONUS_ML = 500

ACTIVITY_MULTIPLIERS: dict[str, float] = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}

# (calorie adjustment, protein ratio, carbs ratio, fat ratio)
OBJECTIVE_PLANS: dict[str, tuple[int, float, float, float]] = {
    "lose_weight": (-500, 0.35, 0.35, 0.30),
    "reduce_measurements": (-500, 0.35, 0.35, 0.30),
    "define": (-250, 0.40, 0.35, 0.25),
    "condition": (-250, 0.40, 0.35, 0.25),
    "gain_muscle": (300, 0.30, 0.50, 0.20),
    "maintain": (0, 0.30, 0.40, 0.30),
    "healthy_lifestyle": (0, 0.30, 0.40, 0.30),
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (calculator rounding)."""
    return math.floor(value + 0.5)


def calculate_bmr(weight: float, height: float, age: float, sex: Sex) -> float:
    """Basal metabolic rate using the Mifflin-St Jeor equation.

    Anyone not declared male gets the female constant.

    Args:
        weight: Weight in kg
        height: Height in cm
        age: Age in years
        sex: Declared sex

    Returns:
        BMR in kcal/day (unrounded)
    """
    base = 10 * weight + 6.25 * height - 5 * age
    if sex == "male":
        return base + 5
    return base - 161


def calculate_tdee(bmr: float, activity_level: ActivityLevel) -> int:
    """Total daily energy expenditure, rounded.

    Unknown activity levels fall back to the sedentary multiplier.
    """
    multiplier = ACTIVITY_MULTIPLIERS.get(activity_level, ACTIVITY_MULTIPLIERS["sedentary"])
    return round_half_up(bmr * multiplier)


def calculate_water_goal(weight: float, does_sports: bool) -> int:
    """Daily hydration target in ml."""
    water = weight * WATER_ML_PER_KG
    if does_sports:
        water += SPORTS_WATER_BONUS_ML
    return round_half_up(water)


def compute_goal(
    weight: float,
    height: float,
    age: float,
    sex: Sex,
    activity_level: ActivityLevel,
    does_sports: bool,
    objective: GoalType,
    now: datetime,
    target_weight: Optional[float] = None,
    deadline_days: Optional[int] = None,
) -> Goal:
    """Build the full daily goal for a user's biometrics and objective.

    The calorie target is adjusted by objective and then clamped to
    MIN_DAILY_CALORIES; the macro split is taken from the clamped value.

    Args:
        weight: Weight in kg
        height: Height in cm
        age: Age in years
        sex: Declared sex
        activity_level: Activity level key
        does_sports: Whether the user practices sports (adds water)
        objective: Goal type
        now: Start date of the goal
        target_weight: Desired weight (defaults to current weight)
        deadline_days: Planned duration (defaults to 60 days)

    Returns:
        A new Goal
    """
    bmr = calculate_bmr(weight, height, age, sex)
    tdee = calculate_tdee(bmr, activity_level)

    adjustment, protein_ratio, carbs_ratio, fat_ratio = OBJECTIVE_PLANS.get(
        objective, OBJECTIVE_PLANS["maintain"]
    )
    daily_calories = max(tdee + adjustment, MIN_DAILY_CALORIES)

    return Goal(
        current_weight=weight,
        target_weight=target_weight or weight,
        days=deadline_days or DEFAULT_GOAL_DAYS,
        type=objective,
        start_date=now,
        daily_calories=round_half_up(daily_calories),
        daily_water=calculate_water_goal(weight, does_sports),
        macros=Macros(
            protein=round_half_up(daily_calories * protein_ratio / 4),
            carbs=round_half_up(daily_calories * carbs_ratio / 4),
            fat=round_half_up(daily_calories * fat_ratio / 9),
        ),
    )
