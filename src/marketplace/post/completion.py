"""CompletePost — either participant marks the exchange done.

Only the counterpart of the member who completes is credited with an
exchange: when the author completes, the selected member is credited, and
vice versa.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.member.member import Member
from marketplace.post.post import Post
from marketplace.shared.lookup import load

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Post")
class CompletePost:
    post_id = Identifier(required=True)
    member_id = Identifier(required=True)  # Author or selected member


@marketplace.command_handler(part_of=Post)
class CompletePostHandler:
    @handle(CompletePost)
    def complete_post(self, command):
        post = load(Post, command.post_id, label="post_id")

        credited_member_id = post.complete(command.member_id)
        current_domain.repository_for(Post).add(post)

        member = load(Member, credited_member_id, label="credited_member_id")
        member.credit_exchange(post.id)
        current_domain.repository_for(Member).add(member)

        logger.info(
            "Post completed",
            post_id=str(post.id),
            completed_by=str(command.member_id),
            credited_member_id=credited_member_id,
            completed_exchanges=member.completed_exchanges,
            badges=member.badge_list,
        )
        return credited_member_id
