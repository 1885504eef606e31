"""Member activity — post counts and completion rate for a member's profile."""

import structlog
from protean.utils.globals import current_domain

from marketplace.member.member import Member
from marketplace.post.post import Post, PostStatus
from marketplace.shared.lookup import load

logger = structlog.get_logger(__name__)


def member_activity(member_id):
    """Posts the member authored, exchanges they completed as the selected member,
    and the ratio of the two as a percentage.

    Completed exchanges count posts where the member was selected, not posts they
    authored, so the completion rate can exceed 100.
    """
    member = load(Member, member_id, label="member_id")
    posts = current_domain.repository_for(Post)._dao.query

    posts_created = posts.filter(author_id=str(member.id)).all().total
    posts_completed = (
        posts.filter(selected_member_id=str(member.id), status=PostStatus.COMPLETED.value).all().total
    )
    completion_rate = round(posts_completed / posts_created * 100, 2) if posts_created else 0.0

    logger.debug(
        "Member activity computed",
        member_id=str(member.id),
        posts_created=posts_created,
        posts_completed=posts_completed,
    )
    return {
        "member_id": str(member.id),
        "total_reviews": member.total_ratings or 0,
        "average_rating": member.rating or 0.0,
        "posts_created": posts_created,
        "posts_completed": posts_completed,
        "completion_rate": completion_rate,
    }
