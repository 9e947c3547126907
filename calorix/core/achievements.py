"""Achievements - Points, levels and badge unlocking.

All functions are pure: the caller passes in ``now``; nothing here reads a
clock. Badge unlocking is idempotent: an already unlocked badge is never
touched again and never produces a second notification.
"""

from datetime import datetime

from .models import ActionType, AppState, Badge, Notification


POINTS_PER_LEVEL = 1000
MUSE_LEVEL = 5
HYDRATION_BADGE_ML = 2000

# Points granted per user action
MEAL_POINTS = 10
WATER_POINTS = 5
WORKOUT_POINTS = 50
POST_POINTS = 20
CALORIE_GOAL_POINTS = 100

# Posts written by the local user carry this author id
SELF_AUTHOR_ID = "me"

STARTER_BADGE = "b1"
FOCUSED_BADGE = "b2"
HYDRATED_BADGE = "b3"
FITNESS_BADGE = "b4"
SOCIAL_BADGE = "b5"
MUSE_BADGE = "b6"

BADGE_CATALOG: tuple[Badge, ...] = (
    Badge(id=STARTER_BADGE, name="Iniciante", description="Created an account", icon="Star", unlocked=True),
    Badge(id=FOCUSED_BADGE, name="Focada", description="Logged a first meal", icon="Utensils"),
    Badge(id=HYDRATED_BADGE, name="Hidratada", description="Drank 2L of water in a day", icon="Droplets"),
    Badge(id=FITNESS_BADGE, name="Fitness", description="Completed a first workout", icon="Dumbbell"),
    Badge(id=SOCIAL_BADGE, name="Social", description="Published a first post", icon="MessageCircle"),
    Badge(id=MUSE_BADGE, name="Musa", description="Reached level 5", icon="Crown"),
)


def initial_badges() -> list[Badge]:
    """Fresh copy of the badge catalog for a new user."""
    return [badge.model_copy() for badge in BADGE_CATALOG]


def calculate_level(points: int) -> int:
    """Level for a point total: 1 at zero, one more every 1000 points."""
    return points // POINTS_PER_LEVEL + 1


def is_unlocked(state: AppState, badge_id: str) -> bool:
    return any(b.id == badge_id and b.unlocked for b in state.user.badges)


def unlock_badge(state: AppState, badge_id: str, now: datetime) -> AppState:
    """Unlock a badge and prepend an achievement notification.

    Unknown ids and already unlocked badges leave the state unchanged.

    Args:
        state: Current state
        badge_id: Catalog id of the badge
        now: Unlock timestamp

    Returns:
        New state, or the same state when there was nothing to unlock
    """
    badges = list(state.user.badges)
    for i, badge in enumerate(badges):
        if badge.id == badge_id:
            break
    else:
        return state

    if badge.unlocked:
        return state

    badges[i] = badge.model_copy(update={"unlocked": True, "date_unlocked": now})
    notification = Notification(
        type="achievement",
        message=f"Você desbloqueou a medalha {badge.name}!",
        timestamp=now,
    )
    return state.model_copy(
        update={
            "user": state.user.model_copy(update={"badges": badges}),
            "notifications": [notification, *state.notifications],
        }
    )


def _completed_workouts(state: AppState) -> int:
    return sum(1 for day in state.workout_plan if day.completed and day.focus != "rest")


def _own_posts(state: AppState) -> int:
    return sum(1 for post in state.community_posts if post.author_id == SELF_AUTHOR_ID)


def award_action(state: AppState, action: ActionType, points_delta: int, now: datetime) -> AppState:
    """Grant points for an action and unlock any badges it earns.

    ``state`` is the state *before* the action took effect: first-time
    badges check that the food log, completed workouts or own posts are
    still empty.

    Args:
        state: State prior to the action
        action: Kind of action performed
        points_delta: Points to add
        now: Timestamp for unlocks

    Returns:
        New state with updated points, level, badges and notifications
    """
    points = state.user.points + points_delta
    level = calculate_level(points)

    awarded = state.model_copy(
        update={"user": state.user.model_copy(update={"points": points, "level": level})}
    )

    if action == "meal" and not state.food_log:
        awarded = unlock_badge(awarded, FOCUSED_BADGE, now)
    if action == "workout" and _completed_workouts(state) == 0:
        awarded = unlock_badge(awarded, FITNESS_BADGE, now)
    if action == "post" and _own_posts(state) == 0:
        awarded = unlock_badge(awarded, SOCIAL_BADGE, now)
    if level >= MUSE_LEVEL:
        awarded = unlock_badge(awarded, MUSE_BADGE, now)

    return awarded
