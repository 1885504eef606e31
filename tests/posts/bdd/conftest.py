"""Shared BDD fixtures and step definitions for posts."""

import json

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then, when

from marketplace.errors import AuthorizationError, StateError
from marketplace.member.member import Member
from marketplace.post.interest import ExpressInterest
from marketplace.post.post import Post
from marketplace.post.selection import SelectMember


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


@pytest.fixture()
def members(register):
    """Lazily registered members keyed by their scenario name."""
    registry = {}

    def _lookup(name):
        if name not in registry:
            registry[name] = register(name=f"Member {name}")
        return registry[name]

    return _lookup


@given(
    parsers.cfparse('a barter post wanting "{skill}" and offering "{offered}"'),
    target_fixture="post_ctx",
)
def barter_post(members, create_post, skill, offered):
    author = members("author")
    post_id = create_post(author, skills=json.dumps([skill]), offered_skills=json.dumps([offered]))
    return {"post_id": post_id, "author": author}


@given(parsers.cfparse('member "{name}" expresses interest with message "{message}"'))
@when(parsers.cfparse('member "{name}" expresses interest with message "{message}"'))
def express_interest(post_ctx, members, name, message):
    current_domain.process(
        ExpressInterest(post_id=post_ctx["post_id"], member_id=members(name), message=message),
        asynchronous=False,
    )


@given(parsers.cfparse('the author selects member "{name}"'))
@when(parsers.cfparse('the author selects member "{name}"'))
def author_selects(post_ctx, members, name):
    current_domain.process(
        SelectMember(post_id=post_ctx["post_id"], member_id=post_ctx["author"], selected_member_id=members(name)),
        asynchronous=False,
    )


@then(parsers.cfparse('the post status is "{status}"'))
def post_status_is(post_ctx, status):
    assert current_domain.repository_for(Post).get(post_ctx["post_id"]).status == status


@then(parsers.cfparse("the post has {count:d} interested member"))
def post_interest_count(post_ctx, count):
    assert len(current_domain.repository_for(Post).get(post_ctx["post_id"]).interested) == count


@then(parsers.cfparse('member "{name}" is the selected member'))
def selected_member_is(post_ctx, members, name):
    post = current_domain.repository_for(Post).get(post_ctx["post_id"])
    assert str(post.selected_member_id) == members(name)


@then(parsers.cfparse('member "{name}" has {count:d} completed exchange'))
def member_exchange_count(members, name, count):
    assert current_domain.repository_for(Member).get(members(name)).completed_exchanges == count


@then("the action fails with a state error")
def fails_with_state_error(error):
    assert isinstance(error["exc"], StateError), f"Expected StateError, got {error['exc']!r}"


@then("the action fails with an authorization error")
def fails_with_authorization_error(error):
    assert isinstance(error["exc"], AuthorizationError), f"Expected AuthorizationError, got {error['exc']!r}"
