"""SelectMember — the author picks one interested member.

The status check and the status change happen on the same aggregate version;
a competing selection persisted in between is rejected by the repository's
version check, so only one selection can ever win.
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
class SelectMember:
    post_id = Identifier(required=True)
    member_id = Identifier(required=True)  # Acting member, must be the author
    selected_member_id = Identifier(required=True)


@marketplace.command_handler(part_of=Post)
class SelectMemberHandler:
    @handle(SelectMember)
    def select_member(self, command):
        post = load(Post, command.post_id, label="post_id")

        post.select_member(command.member_id, command.selected_member_id)
        current_domain.repository_for(Post).add(post)

        logger.info(
            "Member selected",
            post_id=str(post.id),
            selected_member_id=str(command.selected_member_id),
        )
