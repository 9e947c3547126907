"""MCP Server - Tool definitions for the local app surface.

Each tool is a user action: it calls one container method (or a read-only
report) and answers with plain dicts. Bad input is answered with an
``{"error": ...}`` dict instead of raising.
"""

import base64
import binascii
import logging
from datetime import date, timedelta

from mcp.server.fastmcp import FastMCP

from ..core.fasting import elapsed_hours
from ..core.foods import search_foods as search_catalog
from ..core.models import ChatMessage, Exercise, FastingMode, Feeling, FoodItem, MealType, Mood, Nutrient
from ..core.reports import generate_day_summary, generate_month_calendar, generate_weekly_report
from .ai_client import NutritionAIClient
from .container import AppStateContainer
from .store import JsonFileStore


logger = logging.getLogger(__name__)

mcp = FastMCP(
    "calorix",
    instructions="""Calorix - Personal nutrition, fasting and workout companion.

On first use, call setup_profile with the user's biometrics and objective.
When logging food, try search_foods first to reuse the built-in catalog.
After logging, show the updated daily summary and any new notifications.""",
    stateless_http=True,
)

# Lazy-initialized collaborators
_container: AppStateContainer | None = None
_ai_client: NutritionAIClient | None = None


def get_container() -> AppStateContainer:
    """Get or create the state container."""
    global _container
    if _container is None:
        _container = AppStateContainer(JsonFileStore())
    return _container


def get_ai_client() -> NutritionAIClient:
    """Get or create the AI client."""
    global _ai_client
    if _ai_client is None:
        _ai_client = NutritionAIClient()
    return _ai_client


def _decode_image(image_base64: str) -> bytes | None:
    try:
        return base64.b64decode(image_base64, validate=True)
    except (binascii.Error, ValueError):
        return None


def _daily_summary(container: AppStateContainer, log_date: date) -> dict:
    return generate_day_summary(container.state, log_date).model_dump(mode="json")


def _unread(container: AppStateContainer) -> list[dict]:
    return [
        {"id": n.id, "type": n.type, "message": n.message}
        for n in container.state.notifications
        if not n.read
    ]


# ==================== Profile Tools ====================


@mcp.tool()
def setup_profile(
    name: str,
    age: int,
    sex: str,
    weight: float,
    height: float,
    activity_level: str,
    goal_type: str,
    sports: bool = False,
    sports_type: str | None = None,
    target_weight: float | None = None,
    deadline_days: int | None = None,
) -> dict:
    """Finish onboarding and compute daily goals.

    Args:
        name: User's name
        age: Age in years
        sex: male, female or prefer_not_to_say
        weight: Weight in kg
        height: Height in cm
        activity_level: sedentary, light, moderate, active or very_active
        goal_type: lose_weight, gain_muscle, define, condition, maintain,
            reduce_measurements or healthy_lifestyle
        sports: Whether the user practices sports
        sports_type: Which sport, if any (optional)
        target_weight: Desired weight in kg (optional)
        deadline_days: Days to reach the target (optional)

    Returns:
        The computed goal
    """
    container = get_container()
    before = container.state
    state = container.complete_onboarding({
        "name": name,
        "age": age,
        "sex": sex,
        "weight": weight,
        "height": height,
        "activity_level": activity_level,
        "goal_type": goal_type,
        "sports": sports,
        "sports_type": sports_type,
        "target_weight": target_weight,
        "deadline": deadline_days,
    })
    if state is before or state.goal is None:
        return {"error": "Invalid profile. Check the values and try again."}
    return {"goal": state.goal.model_dump(mode="json")}


@mcp.tool()
def update_profile(
    weight: float | None = None,
    height: float | None = None,
    age: int | None = None,
    activity_level: str | None = None,
    goal_type: str | None = None,
    sports: bool | None = None,
    sports_type: str | None = None,
    target_weight: float | None = None,
) -> dict:
    """Update biometrics or objective; goals are recomputed.

    Returns:
        The new goal
    """
    updates = {
        key: value
        for key, value in {
            "weight": weight,
            "height": height,
            "age": age,
            "activity_level": activity_level,
            "goal_type": goal_type,
            "sports": sports,
            "sports_type": sports_type,
            "target_weight": target_weight,
        }.items()
        if value is not None
    }
    if not updates:
        return {"error": "No updates provided."}

    container = get_container()
    before = container.state
    state = container.update_profile(updates)
    if state is before:
        return {"error": "Invalid profile update."}
    return {"goal": state.goal.model_dump(mode="json") if state.goal else None}


@mcp.tool()
def get_progress() -> dict:
    """Points, level, badges and goal of the user."""
    state = get_container().state
    return {
        "points": state.user.points,
        "level": state.user.level,
        "badges": [b.model_dump(mode="json") for b in state.user.badges],
        "goal": state.goal.model_dump(mode="json") if state.goal else None,
    }


# ==================== Food Tools ====================


@mcp.tool()
def log_food(
    name: str,
    calories: int,
    protein: float = 0,
    carbs: float = 0,
    fat: float = 0,
    meal_type: MealType = "snack",
    portion: str | None = None,
    feeling: Feeling | None = None,
) -> dict:
    """Add a food entry to today's log.

    Args:
        name: Name of the food
        calories: Total calories for this serving
        protein: Protein in grams
        carbs: Carbohydrates in grams
        fat: Fat in grams
        meal_type: breakfast, lunch, dinner or snack
        portion: Optional portion description
        feeling: How the user felt after eating (optional)

    Returns:
        The created entry and updated daily summary
    """
    container = get_container()
    item = container.log_food(
        name, calories, protein, carbs, fat, meal_type, portion, feeling=feeling
    )
    if item is None:
        return {"error": "A food entry needs a name and calories."}
    return {
        "entry": item.model_dump(mode="json"),
        "daily_summary": _daily_summary(container, item.date),
        "notifications": _unread(container),
    }


@mcp.tool()
def search_foods(query: str) -> list[dict]:
    """Search the built-in food catalog by name."""
    return [food.model_dump(mode="json") for food in search_catalog(query)]


@mcp.tool()
def log_catalog_food(name: str, meal_type: MealType = "snack") -> dict:
    """Log one portion of a catalog food (first name match)."""
    container = get_container()
    item = container.log_catalog_food(name, meal_type)
    if item is None:
        return {"error": f"No catalog food matches '{name}'."}
    return {
        "entry": item.model_dump(mode="json"),
        "daily_summary": _daily_summary(container, item.date),
    }


@mcp.tool()
def update_food(
    entry_id: str,
    name: str | None = None,
    calories: int | None = None,
    protein: float | None = None,
    carbs: float | None = None,
    fat: float | None = None,
) -> dict:
    """Update an existing food entry. Only provided fields are updated."""
    container = get_container()
    entry = next((f for f in container.state.food_log if f.id == entry_id), None)
    if entry is None:
        return {"error": "Entry not found."}

    updates = {
        key: value
        for key, value in {
            "name": name, "calories": calories, "protein": protein, "carbs": carbs, "fat": fat,
        }.items()
        if value is not None
    }
    if not updates:
        return {"error": "No updates provided."}

    try:
        updated = FoodItem.model_validate({**entry.model_dump(), **updates})
    except ValueError:
        return {"error": "Invalid values."}

    container.edit_food(updated)
    return {
        "entry": updated.model_dump(mode="json"),
        "daily_summary": _daily_summary(container, updated.date),
    }


@mcp.tool()
def delete_food(entry_id: str) -> dict:
    """Delete a food entry."""
    container = get_container()
    if not any(f.id == entry_id for f in container.state.food_log):
        return {"error": "Entry not found."}
    state = container.remove_food(entry_id)
    return {"success": True, "entries_remaining": len(state.food_log)}


# ==================== Daily Stats Tools ====================


@mcp.tool()
def add_water(amount_ml: int) -> dict:
    """Add water (negative to undo) to today's intake."""
    container = get_container()
    container.add_water(amount_ml)
    return {
        "daily_summary": _daily_summary(container, container.clock.today()),
        "notifications": _unread(container),
    }


@mcp.tool()
def log_activity(steps: int, calories_burned: int) -> dict:
    """Add steps and burned calories to today."""
    container = get_container()
    container.log_activity(steps, calories_burned)
    return {"daily_summary": _daily_summary(container, container.clock.today())}


@mcp.tool()
def set_micronutrient(nutrient: Nutrient, amount_mg: float) -> dict:
    """Set today's amount of one micronutrient."""
    container = get_container()
    container.update_micronutrient(nutrient, amount_mg)
    return {"daily_summary": _daily_summary(container, container.clock.today())}


@mcp.tool()
def set_mood(mood: Mood | None) -> dict:
    """Record how the user feels today (happy, neutral or sad)."""
    container = get_container()
    state = container.set_mood(mood)
    today = container.clock.today()
    return {"date": today.isoformat(), "mood": state.daily_stats[today.isoformat()].mood}


# ==================== Query Tools ====================


@mcp.tool()
def get_today() -> dict:
    """Get today's entries, stats and remaining calories."""
    container = get_container()
    today = container.clock.today()
    return {
        "date": today.isoformat(),
        "entries": [
            f.model_dump(mode="json") for f in container.state.food_log if f.date == today
        ],
        "summary": _daily_summary(container, today),
    }


@mcp.tool()
def get_day(date_str: str) -> dict:
    """Get a specific day's summary.

    Args:
        date_str: Date in YYYY-MM-DD format
    """
    try:
        log_date = date.fromisoformat(date_str)
    except ValueError:
        return {"error": "Invalid date format. Use YYYY-MM-DD."}
    return {"summary": _daily_summary(get_container(), log_date)}


@mcp.tool()
def get_weekly_report() -> dict:
    """Report over the last seven days, including energy balance vs. goal."""
    container = get_container()
    start_date = container.clock.today() - timedelta(days=6)
    return generate_weekly_report(container.state, start_date).model_dump(mode="json")


@mcp.tool()
def get_calendar(year: int, month: int) -> list[dict]:
    """Per-day goal status for a month."""
    if not 1 <= month <= 12:
        return [{"error": "Month must be between 1 and 12."}]
    state = get_container().state
    return [day.model_dump(mode="json") for day in generate_month_calendar(state, year, month)]


# ==================== Workout & Fasting Tools ====================


@mcp.tool()
def get_workout_plan() -> list[dict]:
    """The weekly workout plan."""
    return [d.model_dump(mode="json") for d in get_container().state.workout_plan]


@mcp.tool()
def toggle_workout(day_id: str) -> dict:
    """Mark a plan day as done (or undo it)."""
    container = get_container()
    state = container.toggle_workout(day_id)
    day = next((d for d in state.workout_plan if d.id == day_id), None)
    if day is None:
        return {"error": "Workout day not found."}
    return {"day": day.model_dump(mode="json"), "points": state.user.points}


@mcp.tool()
def set_workout_exercises(day_id: str, exercises: list[Exercise]) -> dict:
    """Replace the exercises of a plan day."""
    container = get_container()
    state = container.update_workout_day(day_id, exercises)
    day = next((d for d in state.workout_plan if d.id == day_id), None)
    if day is None:
        return {"error": "Workout day not found."}
    return {"day": day.model_dump(mode="json")}


@mcp.tool()
def start_fasting(mode: FastingMode, custom_hours: float | None = None) -> dict:
    """Start a fast: rabbit (12h), fox (14h), lion (16h) or custom."""
    container = get_container()
    state = container.start_fasting(mode, custom_hours)
    return {"fasting": state.fasting.model_dump(mode="json", exclude={"history"})}


@mcp.tool()
def stop_fasting() -> dict:
    """End the current fast."""
    container = get_container()
    state = container.stop_fasting()
    last = state.fasting.history[-1] if state.fasting.history else None
    return {"last_fast": last.model_dump(mode="json") if last else None}


@mcp.tool()
def get_fasting() -> dict:
    """Current fasting status and elapsed hours."""
    container = get_container()
    state = container.state
    return {
        "fasting": state.fasting.model_dump(mode="json"),
        "elapsed_hours": round(elapsed_hours(state, container.clock.now()), 2),
    }


# ==================== Community Tools ====================


@mcp.tool()
def create_post(content: str, category: str | None = None) -> dict:
    """Publish a post to the community feed."""
    if not content.strip():
        return {"error": "Post content is empty."}
    state = get_container().create_post(content, category=category)
    return {"post": state.community_posts[0].model_dump(mode="json"), "points": state.user.points}


@mcp.tool()
def get_feed() -> list[dict]:
    """Community posts, newest first."""
    return [p.model_dump(mode="json") for p in get_container().state.community_posts]


@mcp.tool()
def like_post(post_id: str) -> dict:
    """Toggle a like on a post."""
    state = get_container().toggle_like(post_id)
    post = next((p for p in state.community_posts if p.id == post_id), None)
    if post is None:
        return {"error": "Post not found."}
    return {"likes": post.likes, "is_liked": post.is_liked}


@mcp.tool()
def comment_post(post_id: str, content: str) -> dict:
    """Comment on a post."""
    if not content.strip():
        return {"error": "Comment is empty."}
    state = get_container().add_comment(post_id, content)
    post = next((p for p in state.community_posts if p.id == post_id), None)
    if post is None:
        return {"error": "Post not found."}
    return {"comments_count": post.comments_count}


# ==================== Notification & Integration Tools ====================


@mcp.tool()
def get_notifications(unread_only: bool = False) -> list[dict]:
    """Notifications, newest first."""
    return [
        n.model_dump(mode="json")
        for n in get_container().state.notifications
        if not unread_only or not n.read
    ]


@mcp.tool()
def mark_notifications_read(ids: list[str] | None = None) -> dict:
    """Mark notifications as read (all when no ids are given)."""
    state = get_container().mark_notifications_read(ids)
    return {"unread": sum(1 for n in state.notifications if not n.read)}


@mcp.tool()
def toggle_integration(key: str) -> dict:
    """Turn a wearable integration on or off (e.g. google_fit, garmin)."""
    state = get_container().toggle_integration(key)
    return {"integrations": state.integrations.model_dump(mode="json")}


@mcp.tool()
def sync_integrations() -> dict:
    """Pull activity from the enabled integrations now."""
    container = get_container()
    if not container.has_active_integrations():
        return {"error": "No integration enabled."}
    delta = container.sync_now()
    return {"steps_added": delta.steps, "calories_added": delta.calories}


# ==================== AI Tools ====================


@mcp.tool()
def analyze_food_photo(image_base64: str) -> dict:
    """Estimate nutrition from a base64-encoded food photo (not logged)."""
    image = _decode_image(image_base64)
    if image is None:
        return {"error": "Image is not valid base64."}
    guess = get_ai_client().analyze_food_photo(image)
    if guess is None:
        return {"error": "Could not identify the food. Please try again."}
    return {"guess": guess.model_dump(mode="json")}


@mcp.tool()
def analyze_workout_photo(image_base64: str) -> dict:
    """Read exercises from a base64-encoded photo of a workout sheet."""
    image = _decode_image(image_base64)
    if image is None:
        return {"error": "Image is not valid base64."}
    guess = get_ai_client().analyze_workout_photo(image)
    if guess is None:
        return {"error": "Could not read the workout. Please try again."}
    return {"exercises": [e.model_dump() for e in guess.exercises]}


@mcp.tool()
def generate_home_workout(level: str, duration_minutes: int, equipment: str = "none") -> dict:
    """Create a home workout for a level, duration and equipment."""
    guess = get_ai_client().generate_home_workout(level, duration_minutes, equipment)
    if guess is None:
        return {"error": "Could not generate a workout. Please try again."}
    return {"exercises": [e.model_dump() for e in guess.exercises]}


@mcp.tool()
def ask_nutri(message: str, history: list[ChatMessage] | None = None) -> dict:
    """Ask the nutrition assistant a question."""
    reply = get_ai_client().chat(message, history or [])
    if reply is None:
        return {"error": "The assistant is unavailable right now. Please try again later."}
    return {"reply": reply}
