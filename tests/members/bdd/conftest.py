"""Shared BDD fixtures and step definitions for members."""

from pytest_bdd import given, parsers, then

from marketplace.member.events import BadgeEarned
from marketplace.member.member import Member


def _registered_member():
    member = Member.register(name="Nisha", email="nisha@example.com", skills=["Baking"])
    member._events.clear()
    return member


@given("a newly registered member", target_fixture="member")
def newly_registered_member():
    return _registered_member()


@given(parsers.cfparse("a member with {count:d} completed exchanges"), target_fixture="member")
def member_with_exchanges(count):
    member = _registered_member()
    for i in range(count):
        member.credit_exchange(post_id=f"post-{i}")
    member._events.clear()
    return member


@then(parsers.cfparse('the member has badges "{badges}"'))
def member_has_badges(member, badges):
    assert member.badge_list == badges.split(",")


@then(parsers.cfparse('a BadgeEarned event is raised for "{badge}"'))
def badge_earned_raised(member, badge):
    earned = [e.badge for e in member._events if isinstance(e, BadgeEarned)]
    assert badge in earned, f"No BadgeEarned for {badge}. Events: {[type(e).__name__ for e in member._events]}"
