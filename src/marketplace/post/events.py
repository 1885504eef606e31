"""Domain events for the Post aggregate.

``MemberSelected`` doubles as the chat-eligible signal: the conversation
gateway opens a thread between the author and the selected member when it
sees one.
"""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="Post")
class PostCreated:
    """A member published a new barter or paid post."""

    __version__ = 1

    post_id = Identifier(required=True)
    author_id = Identifier(required=True)
    title = String(required=True)
    post_type = String(required=True)
    category = String(required=True)
    skills = Text(required=True)  # JSON array
    offered_skills = Text()  # JSON array, barter only
    budget = Float()
    currency = String()
    location = String(required=True)
    expires_at = DateTime(required=True)
    created_at = DateTime(required=True)


@marketplace.event(part_of="Post")
class InterestExpressed:
    """A member asked to be selected for the post."""

    __version__ = 1

    post_id = Identifier(required=True)
    member_id = Identifier(required=True)
    message = String()
    interest_count = Integer(required=True)
    expressed_at = DateTime(required=True)


@marketplace.event(part_of="Post")
class MemberSelected:
    """The author chose one interested member; the exchange is now in progress."""

    __version__ = 1

    post_id = Identifier(required=True)
    author_id = Identifier(required=True)
    selected_member_id = Identifier(required=True)
    selected_at = DateTime(required=True)


@marketplace.event(part_of="Post")
class PostCompleted:
    """One participant marked the exchange as done."""

    __version__ = 1

    post_id = Identifier(required=True)
    author_id = Identifier(required=True)
    selected_member_id = Identifier(required=True)
    completed_by = Identifier(required=True)
    credited_member_id = Identifier(required=True)
    completed_at = DateTime(required=True)


@marketplace.event(part_of="Post")
class PostCancelled:
    """The author withdrew the post."""

    __version__ = 1

    post_id = Identifier(required=True)
    author_id = Identifier(required=True)
    previous_status = String(required=True)
    selected_member_id = Identifier()
    reason = String()
    cancelled_at = DateTime(required=True)


@marketplace.event(part_of="Post")
class PostUpdated:
    """The author changed listing content while the post was open."""

    __version__ = 1

    post_id = Identifier(required=True)
    changed_fields = Text(required=True)  # JSON array of field names
    updated_at = DateTime(required=True)


@marketplace.event(part_of="Post")
class PostDeleted:
    """The post was removed by its author or by the expiry purge."""

    __version__ = 1

    post_id = Identifier(required=True)
    author_id = Identifier(required=True)
    status = String(required=True)
    reason = String(required=True)  # "author" or "expired"
    deleted_at = DateTime(required=True)
