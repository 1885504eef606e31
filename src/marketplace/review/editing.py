"""EditReview — the reviewer revises their own review.

Only fields present on the command are changed. The reviewee's rating is
recalculated when the star rating changed.
"""

import structlog
from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.errors import AuthorizationError
from marketplace.member.reputation import recalculate_rating
from marketplace.review.review import Review
from marketplace.shared.json_fields import load_object
from marketplace.shared.lookup import load

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Review")
class EditReview:
    review_id = Identifier(required=True)
    member_id = Identifier(required=True)  # Must be the reviewer
    rating = Integer()
    comment = String(max_length=500)
    categories = Text()  # JSON object of sub-scores
    payment_amount = Float()


@marketplace.command_handler(part_of=Review)
class EditReviewHandler:
    @handle(EditReview)
    def edit_review(self, command):
        review = load(Review, command.review_id, label="review_id")

        if not review.is_reviewer(command.member_id):
            raise AuthorizationError({"review": ["Only the reviewer can edit this review"]})

        changes = {}
        if command.rating is not None:
            changes["rating"] = command.rating
        if command.comment is not None:
            changes["comment"] = command.comment
        if command.categories is not None:
            changes["categories"] = load_object(command.categories)
        if command.payment_amount is not None:
            changes["payment_amount"] = command.payment_amount

        rating_changed = review.edit(**changes)
        current_domain.repository_for(Review).add(review)

        if rating_changed:
            recalculate_rating(review.reviewee_id, upserted=review)

        logger.info(
            "Review edited",
            review_id=str(review.id),
            fields=sorted(changes),
            rating_changed=rating_changed,
        )
