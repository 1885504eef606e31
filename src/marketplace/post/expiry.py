"""Post expiry — remove open posts that passed their ``expires_at``.

Expiry is passive: nothing changes on the post when the deadline passes.
Designed to be triggered periodically by an external scheduler (cron, K8s
CronJob) via the maintenance API endpoint.
"""

from datetime import UTC, datetime

import structlog
from protean import handle
from protean.fields import DateTime
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.post.post import Post, PostStatus
from marketplace.post.removal import remove_post
from marketplace.shared.lookup import fetch_all

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Post")
class PurgeExpiredPosts:
    """Delete open posts whose expiry is at or before ``as_of``."""

    as_of = DateTime()  # Optional: defaults to now


@marketplace.command_handler(part_of=Post)
class PurgeExpiredPostsHandler:
    @handle(PurgeExpiredPosts)
    def purge_expired_posts(self, command):
        as_of = command.as_of or datetime.now(UTC)

        open_posts = fetch_all(current_domain.repository_for(Post)._dao.query.filter(status=PostStatus.OPEN.value))
        expired = [post for post in open_posts if post.is_expired(as_of)]

        if not expired:
            logger.info("No expired posts found", as_of=as_of.isoformat())
            return 0

        purged = 0
        for post in expired:
            post.mark_deleted(reason="expired")
            remove_post(post)
            purged += 1
            logger.info("Purged expired post", post_id=str(post.id), expired_at=str(post.expires_at))

        logger.info("Expired post purge complete", purged=purged)
        return purged
