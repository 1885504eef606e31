"""DeletePost — the author removes an open or cancelled post.

Posts that are in progress or completed are referenced by reviews and
conversations and cannot be deleted.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.post.post import Post
from marketplace.shared.lookup import load

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Post")
class DeletePost:
    post_id = Identifier(required=True)
    member_id = Identifier(required=True)


def remove_post(post):
    """Persist the deletion event, then drop the post from the store."""
    repo = current_domain.repository_for(Post)
    repo.add(post)
    repo._dao.delete(post)


@marketplace.command_handler(part_of=Post)
class DeletePostHandler:
    @handle(DeletePost)
    def delete_post(self, command):
        post = load(Post, command.post_id, label="post_id")

        post.mark_deleted(command.member_id)
        remove_post(post)

        logger.info("Post deleted", post_id=str(command.post_id))
