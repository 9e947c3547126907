"""Core Data Models - Pydantic models for type safety.

All models are plain value objects with no behavior beyond validation.
State transitions never mutate a model in place; they build new snapshots
with ``model_copy(update=...)``.
"""

from datetime import datetime
from datetime import date as DateType
from enum import Enum
from typing import Literal, Optional
from pydantic import BaseModel, Field
import uuid


def new_id() -> str:
    return str(uuid.uuid4())


Sex = Literal["male", "female", "prefer_not_to_say"]
ActivityLevel = Literal["sedentary", "light", "moderate", "active", "very_active"]
GoalType = Literal[
    "lose_weight",
    "gain_muscle",
    "define",
    "condition",
    "maintain",
    "reduce_measurements",
    "healthy_lifestyle",
]
UnitSystem = Literal["metric", "imperial"]
MealType = Literal["breakfast", "lunch", "dinner", "snack"]
Feeling = Literal["satisfied", "unsatisfied", "unwell", "regretful"]
Mood = Literal["happy", "neutral", "sad"]
WorkoutFocus = Literal[
    "quadriceps", "hamstrings", "glutes", "lower_body", "upper_body", "cardio", "rest"
]
FastingMode = Literal["rabbit", "fox", "lion", "custom"]
NotificationType = Literal["like", "comment", "mention", "follow", "system", "achievement", "goal"]
ActionType = Literal["meal", "water", "workout", "post"]


class Nutrient(str, Enum):
    """Selector for a single micronutrient."""

    VITAMIN_C = "vitamin_c"
    IRON = "iron"
    CALCIUM = "calcium"
    POTASSIUM = "potassium"
    MAGNESIUM = "magnesium"


class StatField(str, Enum):
    """Manually adjustable daily counters."""

    STEPS = "steps"
    CALORIES_BURNED = "calories_burned"
    WATER_INTAKE = "water_intake"


# ==================== Nutrition ====================


class Macros(BaseModel):
    """Daily macronutrient targets in grams."""

    protein: int = Field(ge=0)
    carbs: int = Field(ge=0)
    fat: int = Field(ge=0)


class Goal(BaseModel):
    """Derived daily targets for the current objective.

    Recomputed wholesale whenever biometrics or the objective change.
    """

    current_weight: float = Field(description="Weight in kg when the goal was computed")
    target_weight: float
    days: int = Field(ge=1, description="Planned duration in days")
    type: GoalType
    start_date: datetime
    daily_calories: int = Field(ge=0)
    daily_water: int = Field(ge=0, description="Hydration target in ml")
    macros: Macros


class Micronutrients(BaseModel):
    """Micronutrient amounts in milligrams."""

    vitamin_c: float = Field(default=0, ge=0)
    iron: float = Field(default=0, ge=0)
    calcium: float = Field(default=0, ge=0)
    potassium: float = Field(default=0, ge=0)
    magnesium: float = Field(default=0, ge=0)


class FoodItem(BaseModel):
    """A single logged meal entry."""

    id: str = Field(default_factory=new_id)
    name: str = Field(min_length=1, description="Name of the food")
    calories: int = Field(ge=0, description="Total calories")
    protein: float = Field(ge=0, description="Protein in grams")
    carbs: float = Field(ge=0, description="Carbohydrates in grams")
    fat: float = Field(ge=0, description="Fat in grams")
    portion: Optional[str] = Field(default=None, description='e.g. "100g", "1 unit"')
    feeling: Optional[Feeling] = None
    meal_type: MealType = "snack"
    date: DateType
    timestamp: datetime
    micronutrients: Optional[Micronutrients] = None


class NotifiedGoals(BaseModel):
    """Per-day flags recording which goal notifications already fired."""

    calories: bool = False
    protein: bool = False
    water: bool = False


class DailyStats(BaseModel):
    """Activity and intake aggregate for one calendar date."""

    date: DateType
    steps: int = 0
    calories_burned: int = 0
    water_intake: int = Field(default=0, ge=0, description="Water in ml")
    fasting_hours: float = Field(default=0, ge=0, description="Hours of fasts that started on this date")
    mood: Optional[Mood] = None
    micronutrients: Micronutrients = Field(default_factory=Micronutrients)
    notified_goals: NotifiedGoals = Field(default_factory=NotifiedGoals)


class DailyTotals(BaseModel):
    """Calorie and macro totals summed from the food log for one date."""

    calories: int = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    entry_count: int = Field(ge=0)


class CatalogFood(BaseModel):
    """An entry of the built-in food table."""

    name: str = Field(min_length=1)
    portion: str
    calories: int = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    micronutrients: Micronutrients


# ==================== Workouts & Fasting ====================


class Exercise(BaseModel):
    name: str = Field(min_length=1)
    sets: int = Field(ge=0)
    reps: str = Field(description='e.g. "12" or "30min"')


class WorkoutDay(BaseModel):
    """One day of the weekly workout plan."""

    id: str
    day_name: str
    focus: WorkoutFocus
    completed: bool = False
    exercises: list[Exercise] = Field(default_factory=list)


class FastingRecord(BaseModel):
    """A finished fast."""

    date: DateType
    duration_hours: float = Field(ge=0)
    completed: bool


class FastingState(BaseModel):
    """Two-state fasting machine: inactive, or active since start_time."""

    is_active: bool = False
    start_time: Optional[datetime] = None
    target_duration: float = Field(default=12, gt=0, description="Target in hours")
    mode: FastingMode = "rabbit"
    history: list[FastingRecord] = Field(default_factory=list)


# ==================== Gamification & Notifications ====================


class Badge(BaseModel):
    """A catalog achievement. Unlocking is monotonic."""

    id: str
    name: str
    description: str
    icon: str
    unlocked: bool = False
    date_unlocked: Optional[datetime] = None


class Notification(BaseModel):
    """An event shown in the notification list. Only ``read`` ever changes."""

    id: str = Field(default_factory=new_id)
    type: NotificationType
    message: str
    timestamp: datetime
    read: bool = False
    from_user: Optional[str] = None


class Reminder(BaseModel):
    id: str = Field(default_factory=new_id)
    title: str = Field(min_length=1)
    time: str = Field(pattern=r"^\d{2}:\d{2}$", description="HH:MM")
    active: bool = True
    type: Literal["water", "meal", "workout"]


# ==================== Community ====================


class Comment(BaseModel):
    id: str = Field(default_factory=new_id)
    post_id: str
    author: str
    avatar: str
    content: str = Field(min_length=1)
    timestamp: datetime


class Post(BaseModel):
    """A community feed post. Only likes, saves and comments change."""

    id: str = Field(default_factory=new_id)
    author: str
    author_id: Optional[str] = None
    avatar: str
    content: str
    image: Optional[str] = None
    video: Optional[str] = None
    likes: int = Field(default=0, ge=0)
    comments_count: int = Field(default=0, ge=0)
    comments: list[Comment] = Field(default_factory=list)
    timestamp: datetime
    is_liked: bool = False
    is_saved: bool = False
    category: str = "general"


# ==================== User & App State ====================


class User(BaseModel):
    """The single local user: biometrics, habits and progression."""

    name: str = ""
    age: int = Field(default=0, ge=0)
    sex: Sex = "female"
    weight: float = Field(default=0, ge=0, description="kg")
    height: float = Field(default=0, ge=0, description="cm")
    unit_system: UnitSystem = "metric"
    activity_level: ActivityLevel = "sedentary"
    sports: bool = False
    sports_type: Optional[str] = None

    goal_type: GoalType = "lose_weight"
    target_weight: Optional[float] = None
    deadline: Optional[int] = Field(default=None, description="Days")

    conditions: list[str] = Field(default_factory=list)
    allergies: list[str] = Field(default_factory=list)
    diet_style: Literal[
        "normal", "vegetarian", "vegan", "low_carb", "high_protein", "flexible"
    ] = "normal"
    water_consumption: Literal["low", "medium", "high"] = "medium"
    alcohol_consumption: Literal["never", "sometimes", "frequent"] = "sometimes"
    sleep_hours: Literal["less_5", "5_6", "6_7", "7_8", "more_8"] = "6_7"
    sleep_quality: Literal["bad", "average", "good"] = "average"
    discipline: Literal["low", "medium", "high"] = "medium"
    motivation: list[str] = Field(default_factory=list)
    likes_notifications: bool = True

    onboarding_completed: bool = False
    allow_local_storage: bool = True
    auto_personalization: bool = True

    avatar: Optional[str] = None
    points: int = Field(default=0, ge=0)
    level: int = Field(default=1, ge=1)
    badges: list[Badge] = Field(default_factory=list)
    last_login: datetime
    following: list[str] = Field(default_factory=list)


class Settings(BaseModel):
    notifications: bool = True
    unit_system: UnitSystem = "metric"


class Integrations(BaseModel):
    """Wearable / health-platform toggles (local mocks)."""

    google_fit: bool = False
    apple_health: bool = False
    fitbit: bool = False
    samsung_health: bool = False
    garmin: bool = False
    strava: bool = False
    xiaomi: bool = False
    apple_watch: bool = False
    last_sync: Optional[datetime] = None


INTEGRATION_KEYS = (
    "google_fit",
    "apple_health",
    "fitbit",
    "samsung_health",
    "garmin",
    "strava",
    "xiaomi",
    "apple_watch",
)


class AppState(BaseModel):
    """The whole application state; replaced as a unit on every action."""

    user: User
    goal: Optional[Goal] = None
    food_log: list[FoodItem] = Field(default_factory=list)
    workout_plan: list[WorkoutDay] = Field(default_factory=list)
    daily_stats: dict[str, DailyStats] = Field(
        default_factory=dict, description="Keyed by ISO date (YYYY-MM-DD)"
    )
    fasting: FastingState = Field(default_factory=FastingState)
    community_posts: list[Post] = Field(default_factory=list)
    notifications: list[Notification] = Field(default_factory=list)
    reminders: list[Reminder] = Field(default_factory=list)
    settings: Settings = Field(default_factory=Settings)
    integrations: Integrations = Field(default_factory=Integrations)


# ==================== Derived Views ====================


class DaySummary(BaseModel):
    """Everything known about a single date."""

    log_date: DateType
    totals: DailyTotals
    steps: int
    calories_burned: int
    water_intake: int
    micronutrients: Micronutrients
    calories_remaining: Optional[int] = Field(default=None, description="None without a goal")


class CalendarDay(BaseModel):
    log_date: DateType
    calories: int
    status: Literal["none", "on_target", "off_target"]


class WeeklyReport(BaseModel):
    """Weekly report with daily summaries and aggregate metrics."""

    week_start: DateType
    week_end: DateType
    daily_summaries: list[DaySummary]
    total_calories: int
    avg_daily_calories: float
    total_protein: float
    total_carbs: float
    total_fat: float
    total_steps: int
    energy_balance: Optional[int] = Field(
        default=None,
        description="Total calories - (days * goal calories). Negative = deficit.",
    )
    days_logged: int


# ==================== AI Results ====================


class FoodGuess(BaseModel):
    """Nutrition estimate returned by photo analysis."""

    name: str = Field(min_length=1)
    calories: int = Field(ge=0)
    protein: float = Field(default=0, ge=0)
    carbs: float = Field(default=0, ge=0)
    fat: float = Field(default=0, ge=0)
    micronutrients: Optional[Micronutrients] = None


class WorkoutGuess(BaseModel):
    exercises: list[Exercise] = Field(default_factory=list)


class ChatMessage(BaseModel):
    id: str = Field(default_factory=new_id)
    role: Literal["user", "model"]
    text: str
    timestamp: datetime
