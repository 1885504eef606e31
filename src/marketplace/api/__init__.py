"""Marketplace domain API package."""

from marketplace.api.errors import register_error_handlers
from marketplace.api.routes import member_router, post_router, review_router

__all__ = ["member_router", "post_router", "review_router", "register_error_handlers"]
