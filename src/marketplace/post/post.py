"""Post aggregate — a barter or paid listing and its matching state machine.

CQRS (not event sourced). A post collects interest from other members while
open, the author selects exactly one interested member, and either side
completes the exchange.

State Machine (4 states):
    OPEN → IN_PROGRESS | CANCELLED
    IN_PROGRESS → COMPLETED | CANCELLED
    COMPLETED → (terminal)
    CANCELLED → (terminal)

Expiry is passive: an open post past ``expires_at`` stays OPEN until the
purge job removes it.
"""

from datetime import UTC, datetime, timedelta
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, String, Text

from marketplace.domain import marketplace
from marketplace.errors import AuthorizationError, ConflictError, StateError
from marketplace.post.events import (
    InterestExpressed,
    MemberSelected,
    PostCancelled,
    PostCompleted,
    PostCreated,
    PostDeleted,
    PostUpdated,
)
from marketplace.shared.json_fields import clean_strings, dump_list, load_list

DEFAULT_TTL_DAYS = 30

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class PostType(Enum):
    BARTER = "barter"
    PAID = "paid"


class PostStatus(Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Category(Enum):
    ACADEMIC = "academic"
    DESIGN = "design"
    PROGRAMMING = "programming"
    WRITING = "writing"
    MARKETING = "marketing"
    PHOTOGRAPHY = "photography"
    MUSIC = "music"
    ART = "art"
    TUTORING = "tutoring"
    CONSULTING = "consulting"
    OTHER = "other"


# ---------------------------------------------------------------------------
# State Machine
# ---------------------------------------------------------------------------
_VALID_TRANSITIONS = {
    PostStatus.OPEN: {PostStatus.IN_PROGRESS, PostStatus.CANCELLED},
    PostStatus.IN_PROGRESS: {PostStatus.COMPLETED, PostStatus.CANCELLED},
    PostStatus.COMPLETED: set(),  # Terminal
    PostStatus.CANCELLED: set(),  # Terminal
}

# Statuses in which the author may remove the post outright
_DELETABLE_STATES = {PostStatus.OPEN, PostStatus.CANCELLED}


def _as_utc(moment):
    # Naive datetimes come back from some providers; they are stored as UTC
    return moment if moment.tzinfo else moment.replace(tzinfo=UTC)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@marketplace.entity(part_of="Post")
class Interest:
    """A member's non-binding request to be selected for the post."""

    member_id = Identifier(required=True)
    message = String(max_length=200, default="")
    expressed_at = DateTime(required=True)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@marketplace.aggregate
class Post:
    """A listing offering a skill swap or a paid gig."""

    author_id = Identifier(required=True)

    # Content
    title = String(required=True, max_length=100)
    description = Text(required=True)
    post_type = String(choices=PostType, default=PostType.BARTER.value)
    category = String(required=True, choices=Category)
    skills = Text(required=True)  # JSON array of strings
    location = String(required=True, max_length=255)
    images = Text()  # JSON array of URLs

    # Type-dependent terms
    offered_skills = Text()  # JSON array, barter only
    budget = Float(min_value=0.0)  # paid only
    currency = String(max_length=3)

    # Lifecycle and matching
    status = String(choices=PostStatus, default=PostStatus.OPEN.value)
    interests = HasMany(Interest)
    selected_member_id = Identifier()

    # Timestamps
    expires_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------
    @invariant.post
    def title_must_not_be_blank(self):
        if self.title is not None and len(self.title.strip()) < 5:
            raise ValidationError({"title": ["Title must be 5-100 characters"]})

    @invariant.post
    def description_length_within_bounds(self):
        if self.description is not None and not 20 <= len(self.description) <= 1000:
            raise ValidationError({"description": ["Description must be 20-1000 characters"]})

    @invariant.post
    def location_must_not_be_blank(self):
        if self.location is not None and not self.location.strip():
            raise ValidationError({"location": ["Location is required"]})

    @invariant.post
    def at_least_one_skill(self):
        if not self.skill_list:
            raise ValidationError({"skills": ["At least one skill is required"]})

    @invariant.post
    def paid_posts_need_positive_budget(self):
        if self.post_type == PostType.PAID.value and (self.budget is None or self.budget <= 0):
            raise ValidationError({"budget": ["Budget is required for paid posts"]})

    @invariant.post
    def barter_posts_need_offered_skills(self):
        if self.post_type == PostType.BARTER.value and not self.offered_skill_list:
            raise ValidationError({"offered_skills": ["Offered skills are required for barter posts"]})

    @invariant.post
    def one_interest_per_member(self):
        members = [str(i.member_id) for i in self.interests]
        if len(members) != len(set(members)):
            raise ValidationError({"interests": ["A member can express interest only once"]})

    @invariant.post
    def selected_member_must_be_interested(self):
        if self.selected_member_id and not self.has_interest_from(self.selected_member_id):
            raise ValidationError({"selected_member_id": ["Selected member has not expressed interest"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        author_id,
        title,
        description,
        category,
        skills,
        location,
        post_type=PostType.BARTER.value,
        budget=None,
        offered_skills=None,
        images=None,
        currency="INR",
        ttl_days=DEFAULT_TTL_DAYS,
    ):
        """Create an open post. Terms that belong to the other post type are dropped."""
        now = datetime.now(UTC)
        is_paid = post_type == PostType.PAID.value

        post = cls(
            author_id=author_id,
            title=title.strip() if title else title,
            description=description,
            post_type=post_type,
            category=category,
            skills=dump_list(clean_strings(skills)),
            location=location.strip() if location else location,
            images=dump_list(clean_strings(images)),
            budget=budget if is_paid else None,
            currency=currency if is_paid else None,
            offered_skills=None if is_paid else dump_list(clean_strings(offered_skills)),
            status=PostStatus.OPEN.value,
            expires_at=now + timedelta(days=ttl_days),
            created_at=now,
            updated_at=now,
        )

        post.raise_(
            PostCreated(
                post_id=str(post.id),
                author_id=str(author_id),
                title=post.title,
                post_type=post_type,
                category=category,
                skills=post.skills,
                offered_skills=post.offered_skills,
                budget=post.budget,
                currency=post.currency,
                location=post.location,
                expires_at=post.expires_at,
                created_at=now,
            )
        )
        return post

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def skill_list(self):
        return load_list(self.skills)

    @property
    def offered_skill_list(self):
        return load_list(self.offered_skills)

    @property
    def image_list(self):
        return load_list(self.images)

    @property
    def interested(self):
        """Interests in the order they were expressed."""
        return sorted(self.interests, key=lambda i: i.expressed_at)

    def has_interest_from(self, member_id):
        return any(str(i.member_id) == str(member_id) for i in self.interests)

    def is_author(self, member_id):
        return str(self.author_id) == str(member_id)

    def is_selected(self, member_id):
        return self.selected_member_id is not None and str(self.selected_member_id) == str(member_id)

    def is_participant(self, member_id):
        return self.is_author(member_id) or self.is_selected(member_id)

    def counterpart_of(self, member_id):
        """The other side of the exchange relative to ``member_id``."""
        if self.is_author(member_id):
            return str(self.selected_member_id) if self.selected_member_id else None
        if self.is_selected(member_id):
            return str(self.author_id)
        return None

    def is_expired(self, as_of=None):
        if self.expires_at is None:
            return False
        return _as_utc(self.expires_at) <= _as_utc(as_of or datetime.now(UTC))

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        """Validate state machine transition."""
        current = PostStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise StateError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def _assert_author(self, member_id, action):
        if not self.is_author(member_id):
            raise AuthorizationError({"post": [f"Only the author can {action} this post"]})

    # -------------------------------------------------------------------
    # Matching
    # -------------------------------------------------------------------
    def express_interest(self, member_id, message=None):
        """Register ``member_id`` as a candidate for selection."""
        if self.is_author(member_id):
            raise AuthorizationError({"post": ["Cannot express interest in your own post"]})

        if PostStatus(self.status) != PostStatus.OPEN:
            raise StateError({"status": ["Post is no longer accepting interest"]})

        if self.has_interest_from(member_id):
            raise ConflictError({"interests": ["Already expressed interest in this post"]})

        now = datetime.now(UTC)
        message = (message or "").strip()

        interest = Interest(member_id=member_id, message=message, expressed_at=now)
        self.add_interests(interest)
        self.updated_at = now

        self.raise_(
            InterestExpressed(
                post_id=str(self.id),
                member_id=str(member_id),
                message=message,
                interest_count=len(self.interests),
                expressed_at=now,
            )
        )
        return interest

    def select_member(self, acting_member_id, selected_member_id):
        """Bind the post to one interested member and start the exchange."""
        self._assert_author(acting_member_id, "select a member for")

        if PostStatus(self.status) != PostStatus.OPEN:
            raise StateError({"status": ["Post is no longer open for selection"]})

        if not self.has_interest_from(selected_member_id):
            raise ValidationError({"selected_member_id": ["Member has not expressed interest in this post"]})

        now = datetime.now(UTC)
        with atomic_change(self):
            self.selected_member_id = selected_member_id
            self.status = PostStatus.IN_PROGRESS.value
            self.updated_at = now

        self.raise_(
            MemberSelected(
                post_id=str(self.id),
                author_id=str(self.author_id),
                selected_member_id=str(selected_member_id),
                selected_at=now,
            )
        )

    def complete(self, acting_member_id):
        """Mark the exchange done. Returns the counterpart to be credited."""
        if not self.is_participant(acting_member_id):
            raise AuthorizationError({"post": ["Only the author or the selected member can complete this post"]})

        if PostStatus(self.status) != PostStatus.IN_PROGRESS:
            raise StateError({"status": ["Post is not in progress"]})

        credited_member_id = self.counterpart_of(acting_member_id)
        now = datetime.now(UTC)
        self.status = PostStatus.COMPLETED.value
        self.updated_at = now

        self.raise_(
            PostCompleted(
                post_id=str(self.id),
                author_id=str(self.author_id),
                selected_member_id=str(self.selected_member_id),
                completed_by=str(acting_member_id),
                credited_member_id=credited_member_id,
                completed_at=now,
            )
        )
        return credited_member_id

    def cancel(self, acting_member_id, reason=None):
        """Withdraw the post while it is open or in progress."""
        self._assert_author(acting_member_id, "cancel")
        self._assert_can_transition(PostStatus.CANCELLED)

        previous_status = self.status
        now = datetime.now(UTC)
        self.status = PostStatus.CANCELLED.value
        self.updated_at = now

        self.raise_(
            PostCancelled(
                post_id=str(self.id),
                author_id=str(self.author_id),
                previous_status=previous_status,
                selected_member_id=str(self.selected_member_id) if self.selected_member_id else None,
                reason=reason,
                cancelled_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------
    def update(
        self,
        acting_member_id,
        title=_UNSET,
        description=_UNSET,
        skills=_UNSET,
        location=_UNSET,
        budget=_UNSET,
        offered_skills=_UNSET,
        images=_UNSET,
    ):
        """Change listing content. Type, category and author never change."""
        self._assert_author(acting_member_id, "update")

        if PostStatus(self.status) != PostStatus.OPEN:
            raise StateError({"status": ["Cannot update closed or in-progress posts"]})

        is_paid = self.post_type == PostType.PAID.value
        if budget is not _UNSET and not is_paid:
            raise ValidationError({"budget": ["Budget applies only to paid posts"]})
        if offered_skills is not _UNSET and is_paid:
            raise ValidationError({"offered_skills": ["Offered skills apply only to barter posts"]})

        changed = {}
        now = datetime.now(UTC)

        with atomic_change(self):
            if title is not _UNSET:
                self.title = title.strip() if title else title
                changed["title"] = self.title
            if description is not _UNSET:
                self.description = description
                changed["description"] = description
            if skills is not _UNSET:
                self.skills = dump_list(clean_strings(skills))
                changed["skills"] = self.skills
            if location is not _UNSET:
                self.location = location.strip() if location else location
                changed["location"] = self.location
            if budget is not _UNSET:
                self.budget = budget
                changed["budget"] = budget
            if offered_skills is not _UNSET:
                self.offered_skills = dump_list(clean_strings(offered_skills))
                changed["offered_skills"] = self.offered_skills
            if images is not _UNSET:
                self.images = dump_list(clean_strings(images))
                changed["images"] = self.images
            self.updated_at = now

        self.raise_(
            PostUpdated(
                post_id=str(self.id),
                changed_fields=dump_list(sorted(changed)),
                updated_at=now,
            )
        )
        return changed

    # -------------------------------------------------------------------
    # Removal
    # -------------------------------------------------------------------
    def mark_deleted(self, acting_member_id=None, reason="author"):
        """Check the post may be removed and record why.

        ``acting_member_id`` is None for system removals (expiry purge), which
        skip the author check.
        """
        if acting_member_id is not None:
            self._assert_author(acting_member_id, "delete")

        current = PostStatus(self.status)
        if current not in _DELETABLE_STATES:
            raise StateError({"status": [f"Cannot delete a post that is {current.value}"]})

        now = datetime.now(UTC)
        self.raise_(
            PostDeleted(
                post_id=str(self.id),
                author_id=str(self.author_id),
                status=self.status,
                reason=reason,
                deleted_at=now,
            )
        )
