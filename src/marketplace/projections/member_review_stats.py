"""MemberReviewStats — per-member review statistics for profile pages.

Rebuilt from the full review set on every review event, so edits and
deletions never leave the counters drifting from the stored reviews.
"""

import json
from datetime import UTC, datetime

import structlog
from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Float, Identifier, Integer, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.review.events import ReviewDeleted, ReviewEdited, ReviewSubmitted
from marketplace.review.review import SCORE_CATEGORIES, Review
from marketplace.shared.lookup import fetch_all

logger = structlog.get_logger(__name__)


@marketplace.projection
class MemberReviewStats:
    member_id = Identifier(identifier=True, required=True)
    total_reviews = Integer(default=0)
    average_rating = Float(default=0.0)
    rating_distribution = Text()  # JSON: {"1": 0, "2": 0, "3": 0, "4": 0, "5": 0}
    category_averages = Text()  # JSON: {"communication": 4.5, ...}
    updated_at = DateTime()


def summarize(reviews):
    """Distribution, mean and per-category means for a set of reviews."""
    distribution = {str(star): 0 for star in range(1, 6)}
    category_totals = {name: [] for name in SCORE_CATEGORIES}

    for review in reviews:
        distribution[str(review.rating)] += 1
        for name, score in review.category_scores.items():
            category_totals[name].append(score)

    total = len(reviews)
    average = round(sum(r.rating for r in reviews) / total, 2) if total else 0.0
    category_averages = {
        name: round(sum(scores) / len(scores), 2) for name, scores in category_totals.items() if scores
    }
    return {
        "total_reviews": total,
        "average_rating": average,
        "rating_distribution": distribution,
        "category_averages": category_averages,
    }


def rebuild_stats(member_id):
    """Recompute and store the stats row for ``member_id``."""
    reviews = fetch_all(current_domain.repository_for(Review)._dao.query.filter(reviewee_id=str(member_id)))
    summary = summarize(reviews)

    repo = current_domain.repository_for(MemberReviewStats)
    try:
        stats = repo.get(str(member_id))
    except ObjectNotFoundError:
        stats = MemberReviewStats(member_id=str(member_id))

    stats.total_reviews = summary["total_reviews"]
    stats.average_rating = summary["average_rating"]
    stats.rating_distribution = json.dumps(summary["rating_distribution"])
    stats.category_averages = json.dumps(summary["category_averages"])
    stats.updated_at = datetime.now(UTC)
    repo.add(stats)

    logger.debug("Member review stats rebuilt", member_id=str(member_id), total_reviews=stats.total_reviews)
    return stats


@marketplace.projector(projector_for=MemberReviewStats, aggregates=[Review])
class MemberReviewStatsProjector:
    @on(ReviewSubmitted)
    def on_review_submitted(self, event):
        rebuild_stats(event.reviewee_id)

    @on(ReviewEdited)
    def on_review_edited(self, event):
        rebuild_stats(event.reviewee_id)

    @on(ReviewDeleted)
    def on_review_deleted(self, event):
        rebuild_stats(event.reviewee_id)
