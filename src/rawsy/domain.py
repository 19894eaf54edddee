"""Domain initialization and configuration."""

import importlib

import structlog
from protean.domain import Domain

from rawsy.config import Settings, get_settings
from rawsy.utils.logging import configure_logging

# Configure logging for the application
configure_logging(get_settings())

logger = structlog.get_logger(__name__)

SQL_PROVIDERS = ("sqlite", "postgresql")

# Modules that register aggregates, events, repositories and event handlers.
# Imported explicitly before ``init`` instead of letting protean walk the package.
ELEMENT_MODULES = (
    "rawsy.identity.user",
    "rawsy.identity.repository",
    "rawsy.catalogue.product.events",
    "rawsy.catalogue.product.product",
    "rawsy.catalogue.product.repository",
    "rawsy.negotiation.quote.events",
    "rawsy.negotiation.quote.quote",
    "rawsy.negotiation.quote.repository",
    "rawsy.notifications.notification.notification",
    "rawsy.notifications.notification.repository",
    "rawsy.notifications.notification.catalogue_events",
    "rawsy.notifications.notification.quote_events",
)


def database_config(database_uri: str | None) -> dict:
    """Provider settings for ``database_uri``; in-memory when unset."""
    if not database_uri:
        return {"provider": "memory"}
    scheme = database_uri.split(":", 1)[0].split("+", 1)[0]
    provider = "postgresql" if scheme in ("postgres", "postgresql") else scheme
    if provider not in SQL_PROVIDERS:
        raise ValueError(f"Unsupported database URI scheme: {scheme}")
    return {"provider": provider, "database_uri": database_uri}


def domain_config(settings: Settings) -> dict:
    return {
        "databases": {"default": database_config(settings.database_uri)},
        "event_processing": settings.event_processing,
        "command_processing": "sync",
    }


# Domain Composition Root
rawsy = Domain(name="rawsy", config=domain_config(get_settings()))

_initialized = False


def init_domain() -> Domain:
    """Register every domain element and initialise adapters, once per process."""
    global _initialized
    if _initialized:
        return rawsy

    for module in ELEMENT_MODULES:
        importlib.import_module(module)

    rawsy.init(traverse=False)
    _initialized = True

    logger.info(
        "Domain initialised",
        domain=rawsy.name,
        provider=rawsy.config["databases"]["default"]["provider"],
        event_processing=rawsy.config["event_processing"],
    )
    return rawsy


def use_database(database_uri: str | None) -> Domain:
    """Point the default provider at ``database_uri`` and reconnect."""
    rawsy.config["databases"]["default"] = database_config(database_uri)
    rawsy.providers._initialize()
    return rawsy
