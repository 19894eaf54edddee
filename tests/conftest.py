import os
from pathlib import Path

import pytest

os.environ.setdefault("RAWSY_ENV", "test")
os.environ.setdefault("RAWSY_LOG_TO_FILE", "false")
os.environ.setdefault("RAWSY_EVENT_PROCESSING", "sync")


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    os.environ["RAWSY_ENV"] = session.config.option.env

    from rawsy.config import get_settings

    get_settings.cache_clear()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


# ---------------------------------------------------------------
# Domain and marketplace wiring
# ---------------------------------------------------------------
@pytest.fixture(scope="session")
def _rawsy_domain():
    """Initialize the rawsy domain once per session."""
    from rawsy.domain import init_domain

    return init_domain()


@pytest.fixture(scope="session", autouse=True)
def setup_db(_rawsy_domain):
    from rawsy.utils.db import drop_db, setup_db

    setup_db(_rawsy_domain)

    yield

    drop_db(_rawsy_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_rawsy_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _rawsy_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


@pytest.fixture()
def push():
    from rawsy.notifications.channel import FakePushTransport, reset_push_transport, set_push_transport

    transport = FakePushTransport()
    set_push_transport(transport)
    yield transport
    reset_push_transport()


@pytest.fixture()
def marketplace(push):
    from rawsy.marketplace import Marketplace

    return Marketplace()


# ---------------------------------------------------------------
# Users and actors
# ---------------------------------------------------------------
def _actor(user):
    from rawsy.shared.auth import Actor

    return Actor.of(user.id, user.role)


@pytest.fixture()
def supplier(marketplace):
    return marketplace.identity.register_user(name="Sani Mills", role="supplier", company_name="Sani Mills Ltd")


@pytest.fixture()
def buyer(marketplace):
    return marketplace.identity.register_user(name="Amina Foods", role="buyer")


@pytest.fixture()
def admin(marketplace):
    return marketplace.identity.register_user(name="Ops", role="admin")


@pytest.fixture()
def supplier_actor(supplier):
    return _actor(supplier)


@pytest.fixture()
def buyer_actor(buyer):
    return _actor(buyer)


@pytest.fixture()
def admin_actor(admin):
    return _actor(admin)


@pytest.fixture()
def product(marketplace, supplier_actor):
    return marketplace.catalogue.create_product(
        supplier_actor,
        name="Yellow Maize",
        category="grains",
        price=50.0,
        unit="ton",
        stock=100,
        negotiable=True,
    )
