"""Tests for Member registration and reputation fields."""

import pytest
from protean.exceptions import ValidationError

from marketplace.member.events import MemberRegistered, RatingRecalculated
from marketplace.member.member import Member


def _make_member(**overrides):
    defaults = {
        "name": "Asha Rao",
        "email": "Asha@Example.com",
        "skills": ["Python", " Data Analysis ", "Python", ""],
        "location": "Bengaluru",
    }
    defaults.update(overrides)
    return Member.register(**defaults)


class TestMemberRegistration:
    def test_starts_with_zero_reputation(self):
        member = _make_member()
        assert member.rating == 0.0
        assert member.total_ratings == 0
        assert member.completed_exchanges == 0
        assert member.is_active is True

    def test_starts_as_newbie(self):
        member = _make_member()
        assert member.badge_list == ["newbie"]

    def test_email_is_lower_cased(self):
        member = _make_member()
        assert member.email.address == "asha@example.com"

    def test_skills_are_cleaned(self):
        member = _make_member()
        assert member.skill_list == ["Python", "Data Analysis"]

    def test_raises_member_registered(self):
        member = _make_member()
        assert len(member._events) == 1
        event = member._events[0]
        assert isinstance(event, MemberRegistered)
        assert event.email == "asha@example.com"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _make_member(name="   ")
        assert "name" in exc.value.messages

    def test_name_longer_than_50_rejected(self):
        with pytest.raises(ValidationError):
            _make_member(name="x" * 51)


class TestMemberEmail:
    @pytest.mark.parametrize(
        "email",
        ["plainaddress", "missing@tld", "two@@example.com", "space in@example.com", "a@-bad.com"],
    )
    def test_malformed_email_rejected(self, email):
        with pytest.raises(ValidationError) as exc:
            _make_member(email=email)
        assert "email" in exc.value.messages

    @pytest.mark.parametrize("email", ["first.last@example.co.in", "dev+tag@mail.example.org"])
    def test_well_formed_email_accepted(self, email):
        assert _make_member(email=email).email.address == email


class TestSkillOverlap:
    def test_match_ignores_case(self):
        member = _make_member(skills=["React", "Figma"])
        assert member.shares_skills_with(["react"]) is True

    def test_no_common_skill(self):
        member = _make_member(skills=["React"])
        assert member.shares_skills_with(["Guitar", "Tabla"]) is False


class TestApplyRating:
    def test_sets_rating_and_count(self):
        member = _make_member()
        member._events.clear()

        member.apply_rating(4.5, 2)

        assert member.rating == 4.5
        assert member.total_ratings == 2
        assert isinstance(member._events[-1], RatingRecalculated)
        assert member._events[-1].previous_rating == 0.0

    def test_rating_above_five_rejected(self):
        member = _make_member()
        with pytest.raises(ValidationError):
            member.apply_rating(5.5, 1)
