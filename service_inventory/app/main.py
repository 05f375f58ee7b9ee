"""
Wiring for the inventory access layer.

Build one ``InventoryService`` per process at startup and share it; the cache
store it owns lives exactly as long as that instance.
"""

from typing import Optional

import httpx
from prometheus_client import CollectorRegistry

from shared.config import InventoryConfig, get_config
from shared.logging import configure_logging, get_logger
from shared.metrics import get_metrics_collector
from .adapters.backend_client import BackendClient
from .caching.cached_reader import CachedReader
from .caching.store import CacheStore
from .domain.inventory import InventoryService
from .notifications.email_client import EmailNotifier


def create_inventory_service(
    config: Optional[InventoryConfig] = None,
    *,
    registry: Optional[CollectorRegistry] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    setup_logging: bool = True,
) -> InventoryService:
    """Create a fully wired ``InventoryService``.

    A missing backend URL is logged as a warning rather than raised; requests
    made in that state fail with ``TransportError``.
    """
    config = config or get_config()
    if setup_logging:
        configure_logging(config.service_name, config.log_level)
    logger = get_logger("inventory.main")

    if not config.backend_configured:
        logger.warning(
            "INVENTORY_BACKEND_URL is not set. Create a .env file with the backend deployment URL."
        )

    metrics = get_metrics_collector(config.service_name, registry)
    backend = BackendClient(
        config.backend_url,
        timeout=config.request_timeout_seconds,
        metrics=metrics,
        transport=transport,
    )
    store = CacheStore(ttl_seconds=config.cache_ttl_seconds, max_entries=config.cache_max_entries)
    reader = CachedReader(store, backend, metrics=metrics)

    logger.info(
        "Inventory service initialised",
        env=config.env,
        cache_ttl_seconds=config.cache_ttl_seconds,
        cache_max_entries=config.cache_max_entries,
    )
    return InventoryService(backend, reader, metrics=metrics)


def create_email_notifier(
    config: Optional[InventoryConfig] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> EmailNotifier:
    """Create the alert e-mail sender from configuration."""
    config = config or get_config()
    if not config.email_configured:
        get_logger("inventory.main").info(
            "Email notifications disabled; set INVENTORY_BREVO_API_KEY, INVENTORY_ADMIN_EMAIL and INVENTORY_FROM_EMAIL to enable"
        )
    return EmailNotifier(
        config.brevo_api_key,
        config.admin_email,
        config.from_email,
        config.from_name,
        api_url=config.brevo_api_url,
        timeout=config.request_timeout_seconds,
        transport=transport,
    )
