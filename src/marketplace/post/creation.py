"""CreatePost — publish a barter or paid listing."""

import structlog
from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace, setting
from marketplace.member.member import Member
from marketplace.post.post import DEFAULT_TTL_DAYS, Post, PostType
from marketplace.shared.json_fields import load_list
from marketplace.shared.lookup import load

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Post")
class CreatePost:
    author_id = Identifier(required=True)
    title = String(required=True, max_length=100)
    description = Text(required=True)
    post_type = String(required=True, choices=PostType)
    category = String(required=True, max_length=20)
    skills = Text(required=True)  # JSON array of strings
    location = String(required=True, max_length=255)
    budget = Float()
    offered_skills = Text()  # JSON array of strings
    images = Text()  # JSON array of URLs


@marketplace.command_handler(part_of=Post)
class CreatePostHandler:
    @handle(CreatePost)
    def create_post(self, command):
        load(Member, command.author_id, label="author_id")

        post = Post.create(
            author_id=command.author_id,
            title=command.title,
            description=command.description,
            post_type=command.post_type,
            category=command.category,
            skills=load_list(command.skills),
            location=command.location,
            budget=command.budget,
            offered_skills=load_list(command.offered_skills),
            images=load_list(command.images),
            ttl_days=setting("POST_TTL_DAYS", DEFAULT_TTL_DAYS),
        )
        current_domain.repository_for(Post).add(post)

        logger.info(
            "Post created",
            post_id=str(post.id),
            author_id=str(command.author_id),
            post_type=post.post_type,
            category=post.category,
        )
        return str(post.id)
