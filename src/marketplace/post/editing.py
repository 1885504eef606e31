"""UpdatePost — the author edits listing content while the post is open.

Only title, description, skills, location, budget, offered skills and images
can change. Post type, category and author are fixed at creation.
"""

import structlog
from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.post.post import Post
from marketplace.shared.json_fields import load_list
from marketplace.shared.lookup import load

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Post")
class UpdatePost:
    post_id = Identifier(required=True)
    member_id = Identifier(required=True)  # Must match the author
    title = String(max_length=100)
    description = Text()
    skills = Text()  # JSON array of strings
    location = String(max_length=255)
    budget = Float()
    offered_skills = Text()  # JSON array of strings
    images = Text()  # JSON array of URLs


@marketplace.command_handler(part_of=Post)
class UpdatePostHandler:
    @handle(UpdatePost)
    def update_post(self, command):
        post = load(Post, command.post_id, label="post_id")

        # Build kwargs with sentinel for unset fields
        kwargs = {}
        if command.title is not None:
            kwargs["title"] = command.title
        if command.description is not None:
            kwargs["description"] = command.description
        if command.skills is not None:
            kwargs["skills"] = load_list(command.skills)
        if command.location is not None:
            kwargs["location"] = command.location
        if command.budget is not None:
            kwargs["budget"] = command.budget
        if command.offered_skills is not None:
            kwargs["offered_skills"] = load_list(command.offered_skills)
        if command.images is not None:
            kwargs["images"] = load_list(command.images)

        post.update(command.member_id, **kwargs)
        current_domain.repository_for(Post).add(post)

        logger.info(
            "Post updated",
            post_id=str(post.id),
            author_id=str(command.member_id),
            fields=sorted(kwargs),
        )
