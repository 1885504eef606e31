"""Rating aggregation — recompute a member's average from every review they received.

Called explicitly by the review command handlers after each successful write,
inside the same unit of work. The review set is re-queried on every call so
concurrent reviews for the same member never build on a stale count. The
review being written (``upserted``) or removed (``removed_id``) is folded in
on top of the query result.
"""

from decimal import ROUND_HALF_UP, Decimal

import structlog
from protean.utils.globals import current_domain

from marketplace.member.member import Member
from marketplace.shared.lookup import fetch_all, load

logger = structlog.get_logger(__name__)


def average_rating(ratings):
    """Mean of ``ratings`` rounded half-up to one decimal place; 0.0 when empty."""
    if not ratings:
        return 0.0
    mean = Decimal(sum(ratings)) / Decimal(len(ratings))
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def ratings_received(member_id, upserted=None, removed_id=None):
    """Current star ratings for ``member_id``, keyed by review id."""
    from marketplace.review.review import Review

    reviews = fetch_all(current_domain.repository_for(Review)._dao.query.filter(reviewee_id=str(member_id)))
    ratings = {str(review.id): review.rating for review in reviews}
    if upserted is not None:
        ratings[str(upserted.id)] = upserted.rating
    if removed_id is not None:
        ratings.pop(str(removed_id), None)
    return ratings


def recalculate_rating(member_id, upserted=None, removed_id=None):
    """Recompute and persist ``rating`` and ``total_ratings`` for ``member_id``."""
    ratings = list(ratings_received(member_id, upserted, removed_id).values())
    average = average_rating(ratings)

    member = load(Member, member_id, label="reviewee_id")
    member.apply_rating(average, len(ratings))
    current_domain.repository_for(Member).add(member)

    logger.info(
        "Member rating recalculated",
        member_id=str(member_id),
        rating=average,
        total_ratings=len(ratings),
    )
    return member
