"""Repository lookups that report missing aggregates as ``NotFoundError``."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.errors import NotFoundError


def load(aggregate_cls, identifier, label=None):
    """Fetch an aggregate by id or raise ``NotFoundError``."""
    label = label or aggregate_cls.__name__.lower()
    try:
        return current_domain.repository_for(aggregate_cls).get(str(identifier))
    except ObjectNotFoundError:
        raise NotFoundError({label: [f"{aggregate_cls.__name__} {identifier} not found"]}) from None


def fetch_all(query):
    """Evaluate a DAO query without the default page cap."""
    result = query.all()
    if result.total > len(result.items):
        result = query.limit(result.total).all()
    return result.items
