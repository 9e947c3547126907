"""Unit tests for community feed transitions."""

from calorix.core.achievements import SELF_AUTHOR_ID, SOCIAL_BADGE, is_unlocked
from calorix.core.community import (
    add_comment,
    create_post,
    toggle_follow,
    toggle_like,
    toggle_save,
)


def post(state, post_id):
    return next(p for p in state.community_posts if p.id == post_id)


class TestCreatePost:
    """Tests for create_post."""

    def test_post_goes_on_top(self, state, now):
        """New posts are first and authored by the local user."""
        posted = create_post(state, "Treino pago!", now, category="motivation")

        first = posted.community_posts[0]
        assert first.content == "Treino pago!"
        assert first.author_id == SELF_AUTHOR_ID
        assert first.category == "motivation"
        assert len(posted.community_posts) == len(state.community_posts) + 1

    def test_first_post_awards(self, state, now):
        """The first post earns 20 points and unlocks Social."""
        posted = create_post(state, "Oi!", now)

        assert posted.user.points == 20
        assert is_unlocked(posted, SOCIAL_BADGE)

    def test_second_post_no_new_badge(self, state, now):
        """Only the first post produces an achievement notification."""
        once = create_post(state, "Oi!", now)
        twice = create_post(once, "De novo", now)

        assert twice.user.points == 40
        assert len(twice.notifications) == len(once.notifications)


class TestInteractions:
    """Tests for likes, saves, comments and follows."""

    def test_like_toggles_count(self, state):
        """Liking adds one; unliking removes one."""
        liked = toggle_like(state, "1")
        assert post(liked, "1").is_liked
        assert post(liked, "1").likes == 13

        unliked = toggle_like(state, "2")
        assert not post(unliked, "2").is_liked
        assert post(unliked, "2").likes == 4

    def test_save(self, state):
        """Saving flips the flag."""
        assert not post(toggle_save(state, "3"), "3").is_saved

    def test_comment_appends(self, state, now):
        """Comments are appended and counted."""
        commented = add_comment(state, "1", "Arrasou!", now)

        target = post(commented, "1")
        assert target.comments_count == 2
        assert target.comments[-1].content == "Arrasou!"
        assert target.comments[-1].post_id == "1"

    def test_follow_round_trip(self, state):
        """Following twice unfollows."""
        followed = toggle_follow(state, "u2")
        assert followed.user.following == ["u2"]
        assert toggle_follow(followed, "u2").user.following == []
