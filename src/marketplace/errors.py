"""Error taxonomy for marketplace operations.

Field and invariant failures use Protean's ``ValidationError`` directly. The
classes below cover the remaining kinds a caller can act on. Each carries a
stable ``kind`` and a ``messages`` dict shaped like ``ValidationError.messages``
so the API layer can render every error the same way.
"""

from protean.exceptions import ValidationError

__all__ = [
    "AuthorizationError",
    "ConflictError",
    "InternalError",
    "MarketplaceError",
    "NotFoundError",
    "StateError",
    "ValidationError",
]


class MarketplaceError(Exception):
    kind = "internal"

    def __init__(self, messages: dict[str, list[str]]):
        self.messages = messages
        super().__init__(messages)

    def __str__(self):
        return f"{self.messages}"


class AuthorizationError(MarketplaceError):
    """The acting member may not perform this operation on the post or review."""

    kind = "authorization"


class StateError(MarketplaceError):
    """The operation is not valid for the current lifecycle state."""

    kind = "state"


class ConflictError(MarketplaceError):
    """A duplicate interest or review."""

    kind = "conflict"


class NotFoundError(MarketplaceError):
    """A referenced post, member or review does not exist."""

    kind = "not_found"


class InternalError(MarketplaceError):
    """Unexpected storage or programming failure. Never carries internal detail."""

    kind = "internal"
