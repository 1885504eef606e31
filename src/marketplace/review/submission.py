"""SubmitReview — a participant reviews the counterpart on a completed post.

Checks run in a fixed order so callers get a stable error for each failure:
the post must exist, the reviewer must be a participant, the post must be
completed, the reviewee must be the counterpart and the terms must match the
post type, and finally the reviewer must not have reviewed this post already.
The reviewee's rating is recalculated in the same unit of work.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.errors import AuthorizationError, ConflictError, StateError
from marketplace.member.reputation import recalculate_rating
from marketplace.post.post import Post, PostStatus, PostType
from marketplace.review.review import Review
from marketplace.shared.json_fields import load_object
from marketplace.shared.lookup import fetch_all, load

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Review")
class SubmitReview:
    post_id = Identifier(required=True)
    reviewer_id = Identifier(required=True)
    reviewee_id = Identifier(required=True)
    rating = Integer(required=True)
    review_type = String()  # Defaults to the post type
    comment = String(max_length=500)
    categories = Text()  # JSON object of sub-scores
    payment_amount = Float()


@marketplace.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        post = load(Post, command.post_id, label="post_id")

        if not post.is_participant(command.reviewer_id):
            raise AuthorizationError({"review": ["Only participants of the post can review it"]})

        if PostStatus(post.status) != PostStatus.COMPLETED:
            raise StateError({"status": ["Reviews can only be submitted for completed posts"]})

        if str(command.reviewee_id) != post.counterpart_of(command.reviewer_id):
            raise ValidationError({"reviewee_id": ["Reviewee must be the other participant of the post"]})

        review_type = command.review_type or post.post_type
        if review_type != post.post_type:
            raise ValidationError({"review_type": [f"Review type must match the post type ({post.post_type})"]})

        if command.payment_amount is not None and post.post_type != PostType.PAID.value:
            raise ValidationError({"payment_amount": ["Payment amount applies only to paid posts"]})

        repo = current_domain.repository_for(Review)
        existing = fetch_all(
            repo._dao.query.filter(
                reviewer_id=str(command.reviewer_id),
                post_id=str(command.post_id),
            )
        )
        if existing:
            raise ConflictError({"review": ["You have already reviewed this post"]})

        review = Review.submit(
            reviewer_id=command.reviewer_id,
            reviewee_id=command.reviewee_id,
            post_id=command.post_id,
            rating=command.rating,
            review_type=review_type,
            comment=command.comment,
            categories=load_object(command.categories),
            payment_amount=command.payment_amount,
        )
        repo.add(review)

        recalculate_rating(command.reviewee_id, upserted=review)

        logger.info(
            "Review submitted",
            review_id=str(review.id),
            post_id=str(command.post_id),
            reviewer_id=str(command.reviewer_id),
            reviewee_id=str(command.reviewee_id),
            rating=command.rating,
        )
        return str(review.id)
