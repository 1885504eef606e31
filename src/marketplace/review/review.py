"""Review aggregate — feedback one participant leaves for the other after completion.

A review is written once per (reviewer, post) and may later be edited or
deleted by its reviewer. Reviewer, reviewee and post never change.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, ValueObject

from marketplace.domain import marketplace
from marketplace.review.events import ReviewDeleted, ReviewEdited, ReviewSubmitted

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()

SCORE_CATEGORIES = ("communication", "quality", "timeliness", "professionalism")


class ReviewType(Enum):
    BARTER = "barter"
    PAID = "paid"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@marketplace.value_object(part_of="Review")
class ScoreBreakdown:
    """Optional 1-5 sub-scores. Any subset of the four categories may be scored."""

    communication = Integer(min_value=1, max_value=5)
    quality = Integer(min_value=1, max_value=5)
    timeliness = Integer(min_value=1, max_value=5)
    professionalism = Integer(min_value=1, max_value=5)

    @classmethod
    def from_dict(cls, scores):
        if not scores:
            return None
        unknown = set(scores) - set(SCORE_CATEGORIES)
        if unknown:
            raise ValidationError({"categories": [f"Unknown score categories: {', '.join(sorted(unknown))}"]})
        return cls(**{name: value for name, value in scores.items() if value is not None})

    def to_dict(self):
        return {name: getattr(self, name) for name in SCORE_CATEGORIES if getattr(self, name) is not None}


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@marketplace.aggregate
class Review:
    """A rating and comment about the counterpart on a completed post."""

    reviewer_id = Identifier(required=True)
    reviewee_id = Identifier(required=True)
    post_id = Identifier(required=True)

    # Content
    rating = Integer(required=True, min_value=1, max_value=5)
    comment = String(max_length=500, default="")
    review_type = String(required=True, choices=ReviewType)
    payment_amount = Float(min_value=0.0)
    categories = ValueObject(ScoreBreakdown)

    # Editing
    is_edited = Boolean(default=False)
    edited_at = DateTime()

    # Timestamps
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def payment_only_on_paid_reviews(self):
        if self.payment_amount is not None and self.review_type != ReviewType.PAID.value:
            raise ValidationError({"payment_amount": ["Payment amount applies only to paid posts"]})

    @invariant.post
    def reviewer_cannot_review_self(self):
        if self.reviewer_id and str(self.reviewer_id) == str(self.reviewee_id):
            raise ValidationError({"reviewee_id": ["Members cannot review themselves"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def submit(
        cls,
        reviewer_id,
        reviewee_id,
        post_id,
        rating,
        review_type,
        comment=None,
        categories=None,
        payment_amount=None,
    ):
        now = datetime.now(UTC)
        breakdown = ScoreBreakdown.from_dict(categories)

        review = cls(
            reviewer_id=reviewer_id,
            reviewee_id=reviewee_id,
            post_id=post_id,
            rating=rating,
            comment=(comment or "").strip(),
            review_type=review_type,
            payment_amount=payment_amount,
            categories=breakdown,
            is_edited=False,
            created_at=now,
            updated_at=now,
        )

        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                reviewer_id=str(reviewer_id),
                reviewee_id=str(reviewee_id),
                post_id=str(post_id),
                rating=rating,
                review_type=review_type,
                submitted_at=now,
            )
        )
        return review

    @property
    def category_scores(self):
        return self.categories.to_dict() if self.categories else {}

    def is_reviewer(self, member_id):
        return str(self.reviewer_id) == str(member_id)

    # -------------------------------------------------------------------
    # Edit
    # -------------------------------------------------------------------
    def edit(self, rating=_UNSET, comment=_UNSET, categories=_UNSET, payment_amount=_UNSET):
        """Change review content. Returns True when the rating changed."""
        now = datetime.now(UTC)
        previous_rating = self.rating

        with atomic_change(self):
            if rating is not _UNSET:
                self.rating = rating
            if comment is not _UNSET:
                self.comment = (comment or "").strip()
            if categories is not _UNSET:
                self.categories = ScoreBreakdown.from_dict(categories)
            if payment_amount is not _UNSET:
                self.payment_amount = payment_amount

            self.is_edited = True
            self.edited_at = now
            self.updated_at = now

        self.raise_(
            ReviewEdited(
                review_id=str(self.id),
                reviewee_id=str(self.reviewee_id),
                previous_rating=previous_rating,
                rating=self.rating,
                edited_at=now,
            )
        )
        return self.rating != previous_rating

    # -------------------------------------------------------------------
    # Removal
    # -------------------------------------------------------------------
    def mark_deleted(self):
        now = datetime.now(UTC)
        self.raise_(
            ReviewDeleted(
                review_id=str(self.id),
                reviewer_id=str(self.reviewer_id),
                reviewee_id=str(self.reviewee_id),
                post_id=str(self.post_id),
                rating=self.rating,
                deleted_at=now,
            )
        )
