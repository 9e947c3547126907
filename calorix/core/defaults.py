"""Default State - The snapshot a fresh install starts from."""

from datetime import datetime, timedelta

from .achievements import initial_badges
from .models import (
    AppState,
    Comment,
    Exercise,
    Notification,
    Post,
    User,
    WorkoutDay,
)


def initial_workout_plan() -> list[WorkoutDay]:
    """Seven-day starter plan; the rest day counts as done."""
    return [
        WorkoutDay(id="1", day_name="Segunda", focus="quadriceps",
                   exercises=[Exercise(name="Agachamento", sets=4, reps="12")]),
        WorkoutDay(id="2", day_name="Terça", focus="upper_body",
                   exercises=[Exercise(name="Supino", sets=3, reps="15")]),
        WorkoutDay(id="3", day_name="Quarta", focus="glutes",
                   exercises=[Exercise(name="Elevação Pélvica", sets=4, reps="12")]),
        WorkoutDay(id="4", day_name="Quinta", focus="hamstrings",
                   exercises=[Exercise(name="Stiff", sets=4, reps="12")]),
        WorkoutDay(id="5", day_name="Sexta", focus="lower_body",
                   exercises=[Exercise(name="Afundo", sets=3, reps="12")]),
        WorkoutDay(id="6", day_name="Sábado", focus="cardio",
                   exercises=[Exercise(name="Esteira", sets=1, reps="30min")]),
        WorkoutDay(id="7", day_name="Domingo", focus="rest", completed=True),
    ]


def seed_posts(now: datetime) -> list[Post]:
    """Sample community feed shown before the user posts anything."""
    return [
        Post(
            id="1", author="Ana Clara", author_id="u1", avatar="👱‍♀️",
            content="Consegui bater minha meta de jejum de 16h hoje! 💪",
            likes=12, comments_count=1,
            comments=[Comment(id="c1", post_id="1", author="Mariana", avatar="👩",
                              content="Parabéns!!", timestamp=now)],
            timestamp=now, category="motivation",
        ),
        Post(
            id="2", author="Beatriz Costa", author_id="u2", avatar="👩‍🦱",
            content="Alguém tem receita de panqueca fit sem banana? 🥞",
            likes=5, timestamp=now - timedelta(hours=1), is_liked=True, category="recipes",
        ),
        Post(
            id="3", author="Carla Dias", author_id="u3", avatar="👩‍🦰",
            content="Dica rápida: bebam 500ml de água logo ao acordar. 💧",
            likes=25, comments_count=3, timestamp=now - timedelta(hours=2),
            is_saved=True, category="tips",
        ),
    ]


def default_state(now: datetime) -> AppState:
    """A brand new, not yet onboarded state."""
    return AppState(
        user=User(badges=initial_badges(), last_login=now),
        workout_plan=initial_workout_plan(),
        community_posts=seed_posts(now),
        notifications=[
            Notification(id="n1", type="like", message="Beatriz curtiu seu post.",
                         timestamp=now - timedelta(seconds=100), from_user="Beatriz Costa"),
            Notification(id="n2", type="system", message="Bem-vinda à comunidade!",
                         timestamp=now - timedelta(seconds=500), read=True),
        ],
    )
