"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state — no cross-user sharing.
State tracks entity IDs returned by creation endpoints so follow-up
operations can reference them.
"""

from dataclasses import dataclass


@dataclass
class ExchangeState:
    """Tracks one author/helper pair through a post's lifecycle."""

    author_id: str | None = None
    helper_id: str | None = None
    post_id: str | None = None
    review_id: str | None = None
    current_status: str = "open"
