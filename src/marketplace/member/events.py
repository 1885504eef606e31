"""Domain events for the Member aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="Member")
class MemberRegistered:
    """A new member joined the marketplace."""

    __version__ = 1

    member_id = Identifier(required=True)
    name = String(required=True)
    email = String(required=True)
    skills = Text()
    registered_at = DateTime(required=True)


@marketplace.event(part_of="Member")
class ExchangeCredited:
    """A completed post was credited to the member's exchange count."""

    __version__ = 1

    member_id = Identifier(required=True)
    post_id = Identifier(required=True)
    completed_exchanges = Integer(required=True)
    badges = Text(required=True)  # JSON array
    credited_at = DateTime(required=True)


@marketplace.event(part_of="Member")
class BadgeEarned:
    """The member reached a new badge tier."""

    __version__ = 1

    member_id = Identifier(required=True)
    badge = String(required=True)
    completed_exchanges = Integer(required=True)
    earned_at = DateTime(required=True)


@marketplace.event(part_of="Member")
class RatingRecalculated:
    """The member's average rating was recomputed from the reviews they received."""

    __version__ = 1

    member_id = Identifier(required=True)
    previous_rating = Float()
    rating = Float(required=True)
    total_ratings = Integer(required=True)
    recalculated_at = DateTime(required=True)
