import itertools
import json
import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config overlay before the domain module is imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def _marketplace_domain():
    """Initialize the marketplace domain once per session."""
    from marketplace.domain import marketplace

    marketplace.init()
    return marketplace


@pytest.fixture(scope="session", autouse=True)
def setup_db(_marketplace_domain):
    from marketplace.utils.db import drop_db, setup_db

    setup_db(_marketplace_domain)

    yield

    drop_db(_marketplace_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_marketplace_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _marketplace_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


# ---------------------------------------------------------------------------
# Command-driven factories shared by application, integration and BDD tests
# ---------------------------------------------------------------------------
_sequence = itertools.count(1)


def _register(name=None, email=None, skills=("Python",), location="Chennai", bio=""):
    from protean import current_domain

    from marketplace.member.registration import RegisterMember

    n = next(_sequence)
    command = RegisterMember(
        name=name or f"Member {n}",
        email=email or f"member{n}@example.com",
        skills=json.dumps(list(skills)),
        location=location,
        bio=bio,
    )
    return current_domain.process(command, asynchronous=False)


def _create_post(author_id, **overrides):
    from protean import current_domain

    from marketplace.post.creation import CreatePost

    post_type = overrides.pop("post_type", "barter")
    defaults = {
        "author_id": author_id,
        "title": "Logo design needed",
        "description": "Looking for a clean, modern logo for a student club.",
        "post_type": post_type,
        "category": "design",
        "skills": json.dumps(["Logo Design"]),
        "location": "Pune",
    }
    if post_type == "paid":
        defaults["budget"] = 1500.0
    else:
        defaults["offered_skills"] = json.dumps(["Python"])
    defaults.update(overrides)
    return current_domain.process(CreatePost(**defaults), asynchronous=False)


def _start_exchange(author_id, helper_id, **overrides):
    from protean import current_domain

    from marketplace.post.interest import ExpressInterest
    from marketplace.post.selection import SelectMember

    post_id = _create_post(author_id, **overrides)
    current_domain.process(ExpressInterest(post_id=post_id, member_id=helper_id), asynchronous=False)
    current_domain.process(
        SelectMember(post_id=post_id, member_id=author_id, selected_member_id=helper_id),
        asynchronous=False,
    )
    return post_id


def _complete_exchange(author_id, helper_id, completed_by=None, **overrides):
    from protean import current_domain

    from marketplace.post.completion import CompletePost

    post_id = _start_exchange(author_id, helper_id, **overrides)
    current_domain.process(
        CompletePost(post_id=post_id, member_id=completed_by or author_id),
        asynchronous=False,
    )
    return post_id


@pytest.fixture()
def register():
    return _register


@pytest.fixture()
def create_post():
    return _create_post


@pytest.fixture()
def start_exchange():
    return _start_exchange


@pytest.fixture()
def complete_exchange():
    return _complete_exchange
