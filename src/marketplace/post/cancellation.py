"""CancelPost — the author withdraws an open or in-progress post."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.post.post import Post
from marketplace.shared.lookup import load

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Post")
class CancelPost:
    post_id = Identifier(required=True)
    member_id = Identifier(required=True)
    reason = String(max_length=500)


@marketplace.command_handler(part_of=Post)
class CancelPostHandler:
    @handle(CancelPost)
    def cancel_post(self, command):
        post = load(Post, command.post_id, label="post_id")

        post.cancel(command.member_id, reason=command.reason)
        current_domain.repository_for(Post).add(post)

        logger.info("Post cancelled", post_id=str(post.id), reason=command.reason)
