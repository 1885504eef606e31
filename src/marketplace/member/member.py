"""Member aggregate — identity and derived reputation.

Reputation fields are never written by clients. ``rating`` and
``total_ratings`` change only through ``apply_rating`` (called by the rating
aggregator); ``completed_exchanges`` and ``badges`` change only through
``credit_exchange`` (called when a post is completed).
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text, ValueObject

from marketplace.domain import marketplace
from marketplace.member.events import (
    BadgeEarned,
    ExchangeCredited,
    MemberRegistered,
    RatingRecalculated,
)
from marketplace.shared.email import EmailAddress
from marketplace.shared.json_fields import clean_strings, dump_list, load_list


class Badge(Enum):
    NEWBIE = "newbie"
    HELPER = "helper"
    EXPERT = "expert"
    SUPERSTAR = "superstar"
    MENTOR = "mentor"


# Minimum completed exchanges for each badge, lowest tier first
BADGE_THRESHOLDS = (
    (0, Badge.NEWBIE),
    (5, Badge.HELPER),
    (15, Badge.EXPERT),
    (30, Badge.SUPERSTAR),
    (50, Badge.MENTOR),
)


def badges_for(completed_exchanges):
    """Return every badge earned at ``completed_exchanges``, lowest tier first."""
    return [badge.value for threshold, badge in BADGE_THRESHOLDS if completed_exchanges >= threshold]


@marketplace.aggregate
class Member:
    """A registered participant who can author posts, express interest and review."""

    name = String(required=True, max_length=50)
    email = ValueObject(EmailAddress, required=True)
    skills = Text()  # JSON array of strings
    location = String(max_length=255, default="")
    bio = String(max_length=500, default="")
    is_active = Boolean(default=True)

    # Derived reputation
    rating = Float(default=0.0, min_value=0.0, max_value=5.0)
    total_ratings = Integer(default=0, min_value=0)
    completed_exchanges = Integer(default=0, min_value=0)
    badges = Text()  # JSON array of Badge values

    registered_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def name_must_not_be_blank(self):
        if self.name is not None and not self.name.strip():
            raise ValidationError({"name": ["Name cannot be blank"]})

    @invariant.post
    def badges_follow_completed_exchanges(self):
        if self.completed_exchanges is not None and self.badge_list != badges_for(self.completed_exchanges):
            raise ValidationError({"badges": ["Badges do not match completed exchanges"]})

    @classmethod
    def register(cls, name, email, skills=None, location="", bio=""):
        now = datetime.now(UTC)
        skill_list = clean_strings(skills)

        member = cls(
            name=name.strip() if name else name,
            email=EmailAddress(address=email.strip().lower() if email else email),
            skills=dump_list(skill_list),
            location=location or "",
            bio=bio or "",
            rating=0.0,
            total_ratings=0,
            completed_exchanges=0,
            badges=dump_list(badges_for(0)),
            registered_at=now,
            updated_at=now,
        )
        member.raise_(
            MemberRegistered(
                member_id=str(member.id),
                name=member.name,
                email=member.email.address,
                skills=member.skills,
                registered_at=now,
            )
        )
        return member

    @property
    def skill_list(self):
        return load_list(self.skills)

    @property
    def badge_list(self):
        return load_list(self.badges)

    def credit_exchange(self, post_id):
        """Count one more completed exchange and bring badges up to date."""
        previous = set(self.badge_list)
        exchanges = self.completed_exchanges + 1
        earned = badges_for(exchanges)
        now = datetime.now(UTC)

        with atomic_change(self):
            self.completed_exchanges = exchanges
            self.badges = dump_list(earned)
            self.updated_at = now

        self.raise_(
            ExchangeCredited(
                member_id=str(self.id),
                post_id=str(post_id),
                completed_exchanges=exchanges,
                badges=self.badges,
                credited_at=now,
            )
        )
        for badge in earned:
            if badge not in previous:
                self.raise_(
                    BadgeEarned(
                        member_id=str(self.id),
                        badge=badge,
                        completed_exchanges=exchanges,
                        earned_at=now,
                    )
                )

    def apply_rating(self, average, count):
        """Store a freshly recomputed rating. Only the rating aggregator calls this."""
        now = datetime.now(UTC)
        previous_rating = self.rating

        with atomic_change(self):
            self.rating = average
            self.total_ratings = count
            self.updated_at = now

        self.raise_(
            RatingRecalculated(
                member_id=str(self.id),
                previous_rating=previous_rating,
                rating=average,
                total_ratings=count,
                recalculated_at=now,
            )
        )

    def shares_skills_with(self, skills):
        """True when any of ``skills`` matches one of the member's, ignoring case."""
        own = {skill.lower() for skill in self.skill_list}
        return any(skill.lower() in own for skill in skills)
