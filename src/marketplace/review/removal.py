"""DeleteReview — the reviewer withdraws a review; the reviewee's rating is recomputed."""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.errors import AuthorizationError
from marketplace.member.reputation import recalculate_rating
from marketplace.review.review import Review
from marketplace.shared.lookup import load

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Review")
class DeleteReview:
    review_id = Identifier(required=True)
    member_id = Identifier(required=True)  # Must be the reviewer


@marketplace.command_handler(part_of=Review)
class DeleteReviewHandler:
    @handle(DeleteReview)
    def delete_review(self, command):
        review = load(Review, command.review_id, label="review_id")

        if not review.is_reviewer(command.member_id):
            raise AuthorizationError({"review": ["Only the reviewer can delete this review"]})

        review.mark_deleted()
        repo = current_domain.repository_for(Review)
        repo.add(review)
        repo._dao.delete(review)

        recalculate_rating(review.reviewee_id, removed_id=review.id)

        logger.info("Review deleted", review_id=str(review.id), reviewee_id=str(review.reviewee_id))
