"""ExpressInterest — a member asks to be selected for an open post."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.member.member import Member
from marketplace.post.post import Post
from marketplace.shared.lookup import load

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Post")
class ExpressInterest:
    post_id = Identifier(required=True)
    member_id = Identifier(required=True)
    message = String(max_length=200)


@marketplace.command_handler(part_of=Post)
class ExpressInterestHandler:
    @handle(ExpressInterest)
    def express_interest(self, command):
        post = load(Post, command.post_id, label="post_id")
        load(Member, command.member_id, label="member_id")

        post.express_interest(command.member_id, message=command.message)
        current_domain.repository_for(Post).add(post)

        logger.info(
            "Interest expressed",
            post_id=str(post.id),
            member_id=str(command.member_id),
            interest_count=len(post.interests),
        )
