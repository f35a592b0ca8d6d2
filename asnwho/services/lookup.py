"""Cache-aware RDAP lookups with rate-limit retry."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Protocol

from asnwho.cache import ResponseCache, validate_key
from asnwho.errors import CacheReadError, CacheWriteError, RateLimitedError
from asnwho.models import AsnSummary, RegistryResponse
from asnwho.services.summary import build_summary

logger = logging.getLogger(__name__)

DEFAULT_RETRY_DELAY = 10.0


class RegistryClient(Protocol):
    async def resolve(self, key: str) -> RegistryResponse: ...


@dataclass(frozen=True)
class LookupResult:
    response: RegistryResponse
    fetched_at: str
    cached: bool


class LookupService:
    """Answer lookups from the response cache or the registry.

    Throttled registry calls (:class:`RateLimitedError`) are retried forever
    with a fixed ``retry_delay``. Any other registry error propagates.
    """

    def __init__(
        self,
        client: RegistryClient,
        cache: ResponseCache,
        *,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        strict_cache_writes: bool = True,
    ) -> None:
        self.client = client
        self.cache = cache
        self.retry_delay = retry_delay
        self._sleep = sleep
        self.strict_cache_writes = strict_cache_writes

    async def lookup(self, key: str, *, bypass_cache: bool = False) -> LookupResult:
        validate_key(key)

        if not bypass_cache:
            entry = await self._read_cache(key)
            if entry is not None:
                return entry

        response = await self._fetch(key)
        return await self._store(key, response)

    async def summarize(self, key: str, *, bypass_cache: bool = False) -> AsnSummary:
        result = await self.lookup(key, bypass_cache=bypass_cache)
        return build_summary(result.response, result.fetched_at)

    async def _read_cache(self, key: str) -> Optional[LookupResult]:
        try:
            entry = await self.cache.read(key)
        except CacheReadError as exc:
            logger.warning("Error reading cache for %s: %s", key, exc)
            return None
        if entry is None:
            return None
        logger.debug("Cache hit for %s (fetched at %s)", key, entry.fetched_at)
        return LookupResult(response=entry.response, fetched_at=entry.fetched_at, cached=True)

    async def _fetch(self, key: str) -> RegistryResponse:
        attempt = 0
        while True:
            attempt += 1
            try:
                return await self.client.resolve(key)
            except RateLimitedError as exc:
                logger.warning(
                    "Registry throttled %s (attempt %d, status %s); sleeping %ss",
                    key,
                    attempt,
                    exc.status_code,
                    self.retry_delay,
                )
                await self._sleep(self.retry_delay)

    async def _store(self, key: str, response: RegistryResponse) -> LookupResult:
        try:
            entry = await self.cache.write(key, response)
        except CacheWriteError as exc:
            if self.strict_cache_writes:
                raise
            logger.error("Failed to cache response for %s: %s", key, exc)
            fetched_at = self.cache.clock().isoformat()
            return LookupResult(response=response, fetched_at=fetched_at, cached=False)
        return LookupResult(response=entry.response, fetched_at=entry.fetched_at, cached=False)
