"""Dependency helpers for request-scoped lookup services."""

from __future__ import annotations

from fastapi import Request

from asnwho.cache import ResponseCache
from asnwho.services.lookup import LookupService
from asnwho.settings import get_settings


def get_registry_client(request: Request):
    """Return the RDAP client created during application startup."""

    client = getattr(request.app.state, "registry_client", None)
    if client is None:
        raise RuntimeError("Registry client is not initialised")
    return client


def get_lookup_service(request: Request) -> LookupService:
    """Build a lookup service bound to the configured cache directory."""

    settings = get_settings()
    return LookupService(
        get_registry_client(request),
        ResponseCache(settings.data_dir),
        retry_delay=settings.rate_limit_retry_delay,
        strict_cache_writes=settings.cache_write_strict,
    )
