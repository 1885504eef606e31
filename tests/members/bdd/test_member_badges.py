"""BDD tests for member badges."""

from pytest_bdd import scenarios, when

scenarios("features/member_badges.feature")


@when("the member is credited with a completed exchange")
def credit_exchange(member):
    member.credit_exchange(post_id="post-bdd")
