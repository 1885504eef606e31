"""Reviews received by a member, newest first."""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from marketplace.review.review import Review

MAX_PAGE_SIZE = 100


def reviews_received(member_id, limit=10, page=1):
    """Return ``(reviews, total)`` for one page of ``member_id``'s reviews."""
    if limit < 1 or limit > MAX_PAGE_SIZE:
        raise ValidationError({"limit": [f"Limit must be between 1 and {MAX_PAGE_SIZE}"]})
    if page < 1:
        raise ValidationError({"page": ["Page must be 1 or greater"]})

    result = (
        current_domain.repository_for(Review)
        ._dao.query.filter(reviewee_id=str(member_id))
        .order_by("-created_at")
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return result.items, result.total
