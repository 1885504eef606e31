"""Tests for the Post matching state machine."""

import pytest
from protean.exceptions import ValidationError

from marketplace.errors import AuthorizationError, ConflictError, StateError
from marketplace.post.events import InterestExpressed, MemberSelected, PostCancelled, PostCompleted
from marketplace.post.post import Post, PostStatus

AUTHOR = "author-1"
HELPER = "helper-1"


def _open_post():
    post = Post.create(
        author_id=AUTHOR,
        title="React help for a design swap",
        description="Need help wiring a React dashboard; I can design your logo.",
        post_type="barter",
        category="programming",
        skills=["React"],
        offered_skills=["Design"],
        location="Delhi",
    )
    post._events.clear()
    return post


def _in_progress_post():
    post = _open_post()
    post.express_interest(HELPER, "interested")
    post.select_member(AUTHOR, HELPER)
    post._events.clear()
    return post


class TestExpressInterest:
    def test_adds_interest(self):
        post = _open_post()
        post.express_interest(HELPER, "interested")
        assert len(post.interested) == 1
        assert post.interested[0].message == "interested"
        assert isinstance(post._events[-1], InterestExpressed)

    def test_interests_keep_order(self):
        post = _open_post()
        for member in ("m-1", "m-2", "m-3"):
            post.express_interest(member)
        assert [str(i.member_id) for i in post.interested] == ["m-1", "m-2", "m-3"]

    def test_author_cannot_express_interest(self):
        post = _open_post()
        with pytest.raises(AuthorizationError):
            post.express_interest(AUTHOR)

    def test_duplicate_interest_rejected(self):
        post = _open_post()
        post.express_interest(HELPER)
        with pytest.raises(ConflictError):
            post.express_interest(HELPER)
        assert len(post.interests) == 1

    def test_interest_on_in_progress_post_rejected(self):
        post = _in_progress_post()
        with pytest.raises(StateError):
            post.express_interest("latecomer")


class TestSelectMember:
    def test_selection_starts_exchange(self):
        post = _open_post()
        post.express_interest(HELPER)
        post.select_member(AUTHOR, HELPER)

        assert post.status == PostStatus.IN_PROGRESS.value
        assert str(post.selected_member_id) == HELPER
        assert isinstance(post._events[-1], MemberSelected)

    def test_only_author_selects(self):
        post = _open_post()
        post.express_interest(HELPER)
        with pytest.raises(AuthorizationError):
            post.select_member(HELPER, HELPER)
        assert post.status == PostStatus.OPEN.value
        assert post.selected_member_id is None

    def test_must_select_interested_member(self):
        post = _open_post()
        with pytest.raises(ValidationError) as exc:
            post.select_member(AUTHOR, "stranger")
        assert "selected_member_id" in exc.value.messages

    def test_cannot_select_twice(self):
        post = _in_progress_post()
        with pytest.raises(StateError):
            post.select_member(AUTHOR, HELPER)


class TestCompletePost:
    def test_author_completion_credits_helper(self):
        post = _in_progress_post()
        credited = post.complete(AUTHOR)
        assert credited == HELPER
        assert post.status == PostStatus.COMPLETED.value
        assert isinstance(post._events[-1], PostCompleted)

    def test_helper_completion_credits_author(self):
        post = _in_progress_post()
        assert post.complete(HELPER) == AUTHOR

    def test_outsider_cannot_complete(self):
        post = _in_progress_post()
        with pytest.raises(AuthorizationError):
            post.complete("outsider")

    def test_open_post_cannot_complete(self):
        post = _open_post()
        with pytest.raises(StateError):
            post.complete(AUTHOR)

    def test_completed_post_is_terminal(self):
        post = _in_progress_post()
        post.complete(AUTHOR)
        with pytest.raises(StateError):
            post.complete(HELPER)
        with pytest.raises(StateError):
            post.cancel(AUTHOR)


class TestCancelPost:
    def test_cancel_open_post(self):
        post = _open_post()
        post.cancel(AUTHOR, reason="No longer needed")
        assert post.status == PostStatus.CANCELLED.value
        event = post._events[-1]
        assert isinstance(event, PostCancelled)
        assert event.previous_status == "open"

    def test_cancel_in_progress_post(self):
        post = _in_progress_post()
        post.cancel(AUTHOR)
        assert post.status == PostStatus.CANCELLED.value

    def test_only_author_cancels(self):
        post = _in_progress_post()
        with pytest.raises(AuthorizationError):
            post.cancel(HELPER)

    def test_cancelled_post_is_terminal(self):
        post = _open_post()
        post.cancel(AUTHOR)
        with pytest.raises(StateError):
            post.cancel(AUTHOR)
