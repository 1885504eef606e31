"""Tests for Post creation and invariants."""

from datetime import UTC, datetime, timedelta

import pytest
from protean.exceptions import ValidationError

from marketplace.post.events import PostCreated
from marketplace.post.post import Post, PostStatus


def _make_post(**overrides):
    defaults = {
        "author_id": "author-1",
        "title": "React help for a design swap",
        "description": "Need help wiring a React dashboard; I can design your logo.",
        "post_type": "barter",
        "category": "programming",
        "skills": ["React"],
        "offered_skills": ["Design"],
        "location": "Delhi",
    }
    defaults.update(overrides)
    return Post.create(**defaults)


class TestPostCreation:
    def test_new_post_is_open(self):
        post = _make_post()
        assert post.status == PostStatus.OPEN.value
        assert post.interested == []
        assert post.selected_member_id is None

    def test_expires_after_ttl(self):
        before = datetime.now(UTC)
        post = _make_post(ttl_days=30)
        assert before + timedelta(days=30) <= post.expires_at <= datetime.now(UTC) + timedelta(days=30)

    def test_raises_post_created(self):
        post = _make_post()
        assert len(post._events) == 1
        assert isinstance(post._events[0], PostCreated)

    def test_title_is_trimmed(self):
        assert _make_post(title="   Tabla lessons   ").title == "Tabla lessons"

    def test_paid_post_defaults_to_inr(self):
        post = _make_post(post_type="paid", budget=2000.0, offered_skills=None)
        assert post.currency == "INR"
        assert post.offered_skill_list == []

    def test_barter_post_drops_budget(self):
        post = _make_post(budget=500.0)
        assert post.budget is None
        assert post.currency is None


class TestPostInvariants:
    def test_short_title_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _make_post(title="  abc  ")
        assert "title" in exc.value.messages

    def test_long_title_rejected(self):
        with pytest.raises(ValidationError):
            _make_post(title="t" * 101)

    def test_short_description_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _make_post(description="Too short")
        assert "description" in exc.value.messages

    def test_long_description_rejected(self):
        with pytest.raises(ValidationError):
            _make_post(description="d" * 1001)

    def test_skills_required(self):
        with pytest.raises(ValidationError) as exc:
            _make_post(skills=["  "])
        assert "skills" in exc.value.messages

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError):
            _make_post(category="astrology")

    def test_paid_post_needs_budget(self):
        with pytest.raises(ValidationError) as exc:
            _make_post(post_type="paid", budget=None)
        assert "budget" in exc.value.messages

    def test_paid_post_rejects_zero_budget(self):
        with pytest.raises(ValidationError):
            _make_post(post_type="paid", budget=0.0)

    def test_barter_post_needs_offered_skills(self):
        with pytest.raises(ValidationError) as exc:
            _make_post(offered_skills=[])
        assert "offered_skills" in exc.value.messages


class TestExpiry:
    def test_not_expired_before_deadline(self):
        post = _make_post()
        assert post.is_expired() is False

    def test_expired_at_deadline(self):
        post = _make_post()
        assert post.is_expired(post.expires_at) is True

    def test_naive_as_of_treated_as_utc(self):
        post = _make_post()
        naive_future = (datetime.now(UTC) + timedelta(days=31)).replace(tzinfo=None)
        assert post.is_expired(naive_future) is True
