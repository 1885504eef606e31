"""Candidate suggestions — members whose skills fit a post, best rated first."""

import structlog
from protean.utils.globals import current_domain

from marketplace.domain import setting
from marketplace.member.member import Member
from marketplace.post.post import Post
from marketplace.shared.lookup import fetch_all, load

logger = structlog.get_logger(__name__)

DEFAULT_SUGGESTION_LIMIT = 10


def suggest_members(post_id, limit=None):
    """Active members other than the author who share at least one of the post's skills."""
    post = load(Post, post_id, label="post_id")
    limit = limit or setting("SUGGESTION_LIMIT", DEFAULT_SUGGESTION_LIMIT)

    wanted = post.skill_list
    candidates = [
        member
        for member in fetch_all(current_domain.repository_for(Member)._dao.query.filter(is_active=True))
        if not post.is_author(member.id) and member.shares_skills_with(wanted)
    ]
    candidates.sort(key=lambda m: (-(m.rating or 0.0), -(m.completed_exchanges or 0), m.name))

    logger.debug("Suggested members", post_id=str(post_id), matched=len(candidates), limit=limit)
    return candidates[:limit]
