"""State Container - Composition root holding the single AppState.

Every user action goes through one method here: the matching pure
transition from ``core`` runs, then today's goal checks, then the snapshot is
persisted (unless the user turned local storage off) and listeners are told.
Transitions run one at a time to completion; the state object is replaced,
never mutated.
"""

import logging
from datetime import date
from typing import Any, Callable, Optional

from pydantic import ValidationError

from ..core import actions, community, fasting, workouts
from ..core.defaults import default_state
from ..core.foods import food_item_from_catalog, search_foods
from ..core.goal_tracking import check_goal_completion
from ..core.models import (
    AppState,
    Exercise,
    FastingMode,
    Feeling,
    FoodItem,
    Goal,
    MealType,
    Micronutrients,
    Mood,
    Nutrient,
    Reminder,
)
from .clock import Clock, SystemClock
from .integrations import ActivityDelta, IntegrationSource, RandomIntegrationSource
from .store import StateStore


logger = logging.getLogger(__name__)

Listener = Callable[[AppState], None]


class AppStateContainer:
    """Owns the application state and applies actions to it."""

    def __init__(
        self,
        store: StateStore,
        clock: Clock | None = None,
        integration_source: IntegrationSource | None = None,
    ) -> None:
        """Load the saved snapshot, or start fresh.

        Args:
            store: Where snapshots are persisted
            clock: Source of now/today
            integration_source: Activity source used by sync_now
        """
        self.store = store
        self.clock = clock or SystemClock()
        self.integration_source = integration_source or RandomIntegrationSource()
        self._listeners: list[Listener] = []

        loaded = store.load()
        if loaded is None:
            logger.info("No saved state, starting from defaults")
            loaded = default_state(self.clock.now())
        self._state = actions.touch_last_login(loaded, self.clock.now())

    @property
    def state(self) -> AppState:
        return self._state

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ==================== Transition Plumbing ====================

    def _commit(self, new_state: AppState) -> AppState:
        now = self.clock.now()
        new_state = check_goal_completion(new_state, self.clock.today(), now)
        new_state = actions.touch_last_login(new_state, now)
        self._state = new_state

        if new_state.user.allow_local_storage:
            if not self.store.save(new_state):
                logger.warning("State not persisted; continuing in memory")

        for listener in list(self._listeners):
            listener(new_state)
        return new_state

    def _apply(self, name: str, transition: Callable[..., AppState], *args, **kwargs) -> AppState:
        try:
            new_state = transition(self._state, *args, **kwargs)
        except ValidationError as e:
            logger.warning("Rejected %s: %s", name, str(e))
            return self._state
        logger.info("Applied %s", name)
        return self._commit(new_state)

    # ==================== Profile & Goal ====================

    def complete_onboarding(self, profile: dict[str, Any]) -> AppState:
        return self._apply("complete_onboarding", actions.complete_onboarding, profile, self.clock.now())

    def update_profile(self, updates: dict[str, Any]) -> AppState:
        return self._apply("update_profile", actions.update_profile, updates, self.clock.now())

    def set_goal(self, goal: Goal) -> AppState:
        return self._apply("set_goal", actions.set_goal, goal)

    # ==================== Food Log ====================

    def add_food(self, item: FoodItem) -> AppState:
        return self._apply("add_food", actions.add_food, item, self.clock.now())

    def log_food(
        self,
        name: str,
        calories: int,
        protein: float = 0,
        carbs: float = 0,
        fat: float = 0,
        meal_type: MealType = "snack",
        portion: Optional[str] = None,
        micronutrients: Optional[Micronutrients] = None,
        log_date: Optional[date] = None,
        feeling: Optional[Feeling] = None,
    ) -> Optional[FoodItem]:
        """Build and log an entry from form values.

        Entries without a name or calories are ignored.

        Returns:
            The logged FoodItem, or None if the input was rejected
        """
        if not name or not name.strip() or not calories:
            logger.warning("Ignoring food entry without name or calories")
            return None
        try:
            item = FoodItem(
                name=name.strip(),
                calories=calories,
                protein=protein,
                carbs=carbs,
                fat=fat,
                meal_type=meal_type,
                portion=portion,
                micronutrients=micronutrients,
                feeling=feeling,
                date=log_date or self.clock.today(),
                timestamp=self.clock.now(),
            )
        except ValidationError as e:
            logger.warning("Rejected food entry: %s", str(e))
            return None
        self.add_food(item)
        return item

    def log_catalog_food(self, name: str, meal_type: MealType = "snack") -> Optional[FoodItem]:
        """Log the first catalog food matching ``name``."""
        matches = search_foods(name)
        if not matches:
            logger.warning("No catalog food matches %r", name)
            return None
        item = food_item_from_catalog(matches[0], meal_type, self.clock.today(), self.clock.now())
        self.add_food(item)
        return item

    def edit_food(self, item: FoodItem) -> AppState:
        return self._apply("edit_food", actions.edit_food, item)

    def remove_food(self, food_id: str) -> AppState:
        return self._apply("remove_food", actions.remove_food, food_id)

    # ==================== Daily Stats ====================

    def add_water(self, amount: int) -> AppState:
        return self._apply("add_water", actions.add_water, amount, self.clock.today(), self.clock.now())

    def log_activity(self, steps: int, calories: int) -> AppState:
        return self._apply("log_activity", actions.log_activity, steps, calories, self.clock.today())

    def update_micronutrient(self, nutrient: Nutrient, value: float) -> AppState:
        return self._apply(
            "update_micronutrient", actions.update_micronutrient, nutrient, value, self.clock.today()
        )

    def set_mood(self, mood: Optional[Mood]) -> AppState:
        return self._apply("set_mood", actions.set_mood, mood, self.clock.today())

    # ==================== Workouts & Fasting ====================

    def toggle_workout(self, day_id: str) -> AppState:
        return self._apply("toggle_workout", workouts.toggle_workout, day_id, self.clock.now())

    def update_workout_day(self, day_id: str, exercises: list[Exercise]) -> AppState:
        return self._apply("update_workout_day", workouts.update_workout_day, day_id, exercises)

    def start_fasting(self, mode: FastingMode, custom_hours: Optional[float] = None) -> AppState:
        return self._apply("start_fasting", fasting.start_fasting, mode, self.clock.now(), custom_hours)

    def stop_fasting(self) -> AppState:
        return self._apply("stop_fasting", fasting.stop_fasting, self.clock.now())

    # ==================== Community ====================

    def create_post(
        self,
        content: str,
        image: Optional[str] = None,
        video: Optional[str] = None,
        category: Optional[str] = None,
    ) -> AppState:
        if not content.strip() and not image and not video:
            logger.warning("Ignoring empty post")
            return self._state
        return self._apply(
            "create_post", community.create_post, content, self.clock.now(), image, video, category
        )

    def toggle_like(self, post_id: str) -> AppState:
        return self._apply("toggle_like", community.toggle_like, post_id)

    def toggle_save(self, post_id: str) -> AppState:
        return self._apply("toggle_save", community.toggle_save, post_id)

    def add_comment(self, post_id: str, content: str) -> AppState:
        return self._apply("add_comment", community.add_comment, post_id, content, self.clock.now())

    def toggle_follow(self, user_id: str) -> AppState:
        return self._apply("toggle_follow", community.toggle_follow, user_id)

    # ==================== Notifications, Reminders, Settings ====================

    def mark_notifications_read(self, ids: Optional[list[str]] = None) -> AppState:
        return self._apply("mark_notifications_read", actions.mark_notifications_read, ids)

    def set_reminders(self, reminders: list[Reminder]) -> AppState:
        return self._apply("set_reminders", actions.set_reminders, reminders)

    def update_settings(self, updates: dict[str, Any]) -> AppState:
        return self._apply("update_settings", actions.update_settings, updates)

    # ==================== Integrations ====================

    def has_active_integrations(self) -> bool:
        return actions.has_active_integrations(self._state)

    def toggle_integration(self, key: str) -> AppState:
        return self._apply("toggle_integration", actions.toggle_integration, key)

    def sync_now(self) -> ActivityDelta:
        """Pull activity from the integration source into today's stats."""
        delta = self.integration_source.pull()
        logger.info("Synced +%d steps, +%d kcal", delta.steps, delta.calories)
        self._apply(
            "sync", actions.apply_sync, delta.steps, delta.calories, self.clock.today(), self.clock.now()
        )
        return delta
