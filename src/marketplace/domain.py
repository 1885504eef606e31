"""Marketplace bounded context — skill barter and paid micro-gig matching.

Owns the post lifecycle (open → in_progress → completed | cancelled), the
interest/selection handshake between members, post-completion reviews, and
the derived reputation kept on each member (rating, exchange count, badges).
"""

from protean.domain import Domain

from marketplace.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
marketplace = Domain(name="marketplace")


def setting(name, default=None):
    """Read an application setting from the ``[custom]`` table of domain.toml."""
    from protean.utils.globals import current_domain

    custom = current_domain.config.get("custom") or {}
    return custom.get(name, default)
