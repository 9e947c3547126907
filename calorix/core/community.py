"""Community - Local social feed transitions.

Posts are append-only; likes, saves and comments are the only changes.
"""

from datetime import datetime
from typing import Optional

from .achievements import POST_POINTS, SELF_AUTHOR_ID, award_action
from .models import AppState, Comment, Post


DEFAULT_AVATAR = "👩"


def create_post(
    state: AppState,
    content: str,
    now: datetime,
    image: Optional[str] = None,
    video: Optional[str] = None,
    category: Optional[str] = None,
) -> AppState:
    """Publish a post by the local user at the top of the feed."""
    post = Post(
        author=state.user.name or "Usuária",
        author_id=SELF_AUTHOR_ID,
        avatar=state.user.avatar or DEFAULT_AVATAR,
        content=content,
        image=image,
        video=video,
        timestamp=now,
        category=category or "general",
    )
    state = award_action(state, "post", POST_POINTS, now)
    return state.model_copy(update={"community_posts": [post, *state.community_posts]})


def toggle_like(state: AppState, post_id: str) -> AppState:
    posts = []
    for p in state.community_posts:
        if p.id == post_id:
            liked = not p.is_liked
            p = p.model_copy(
                update={"is_liked": liked, "likes": p.likes + 1 if liked else max(0, p.likes - 1)}
            )
        posts.append(p)
    return state.model_copy(update={"community_posts": posts})


def toggle_save(state: AppState, post_id: str) -> AppState:
    posts = [
        p.model_copy(update={"is_saved": not p.is_saved}) if p.id == post_id else p
        for p in state.community_posts
    ]
    return state.model_copy(update={"community_posts": posts})


def add_comment(state: AppState, post_id: str, content: str, now: datetime) -> AppState:
    """Append a comment by the local user and bump the post's count."""
    posts = []
    for p in state.community_posts:
        if p.id == post_id:
            comment = Comment(
                post_id=post_id,
                author=state.user.name or "Eu",
                avatar=state.user.avatar or DEFAULT_AVATAR,
                content=content,
                timestamp=now,
            )
            p = p.model_copy(
                update={"comments": [*p.comments, comment], "comments_count": p.comments_count + 1}
            )
        posts.append(p)
    return state.model_copy(update={"community_posts": posts})


def toggle_follow(state: AppState, user_id: str) -> AppState:
    following = state.user.following
    if user_id in following:
        following = [uid for uid in following if uid != user_id]
    else:
        following = [*following, user_id]
    return state.model_copy(update={"user": state.user.model_copy(update={"following": following})})
