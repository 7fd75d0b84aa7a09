"""App settings, read from the ``TENANT_EVENTS`` dict in Django settings."""

from typing import Any

from django.conf import settings
from django.utils.module_loading import import_string

DEFAULTS: dict[str, Any] = {
    "DEFAULT_PAGE_SIZE": 10,
    "QUERY_STORE": "tenant_events.stores.django_store.DjangoQueryStore",
    "EVENT_STORE": "tenant_events.stores.django_store.DjangoEventStore",
}


def get_setting(name: str) -> Any:
    if name not in DEFAULTS:
        raise KeyError(f"Unknown TENANT_EVENTS setting: {name}")
    overrides = getattr(settings, "TENANT_EVENTS", {})
    return overrides.get(name, DEFAULTS[name])


def query_store():
    """Instantiate the configured ``QueryStore`` implementation."""
    return import_string(get_setting("QUERY_STORE"))()


def event_store():
    return import_string(get_setting("EVENT_STORE"))()
