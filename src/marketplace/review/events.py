"""Domain events for the Review aggregate.

Every review event carries ``reviewee_id`` so the MemberReviewStats projector
knows which member's statistics to rebuild.
"""

from protean.fields import DateTime, Identifier, Integer, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Review")
class ReviewSubmitted:
    """A participant reviewed the counterpart on a completed post."""

    __version__ = 1

    review_id = Identifier(required=True)
    reviewer_id = Identifier(required=True)
    reviewee_id = Identifier(required=True)
    post_id = Identifier(required=True)
    rating = Integer(required=True)
    review_type = String(required=True)
    submitted_at = DateTime(required=True)


@marketplace.event(part_of="Review")
class ReviewEdited:
    """The reviewer changed the rating, comment or sub-scores."""

    __version__ = 1

    review_id = Identifier(required=True)
    reviewee_id = Identifier(required=True)
    previous_rating = Integer(required=True)
    rating = Integer(required=True)
    edited_at = DateTime(required=True)


@marketplace.event(part_of="Review")
class ReviewDeleted:
    """The reviewer withdrew the review."""

    __version__ = 1

    review_id = Identifier(required=True)
    reviewer_id = Identifier(required=True)
    reviewee_id = Identifier(required=True)
    post_id = Identifier(required=True)
    rating = Integer(required=True)
    deleted_at = DateTime(required=True)
