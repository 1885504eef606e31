"""Shared BDD fixtures and step definitions for reviews."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then

from marketplace.errors import ConflictError
from marketplace.member.member import Member


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


@given("a reviewee with no prior reviews", target_fixture="review_ctx")
def reviewee_without_reviews(register):
    return {"reviewer": register(), "reviewee": register(), "post_id": None, "review_id": None}


@then(parsers.cfparse("the reviewee's rating is {rating:f} from {count:d} ratings"))
def reviewee_rating(review_ctx, rating, count):
    member = current_domain.repository_for(Member).get(review_ctx["reviewee"])
    assert member.rating == rating
    assert member.total_ratings == count


@then("the review fails with a conflict error")
def review_conflicts(error):
    assert isinstance(error["exc"], ConflictError), f"Expected ConflictError, got {error['exc']!r}"
