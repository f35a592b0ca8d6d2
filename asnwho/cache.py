"""Response snapshots on disk and the in-process bootstrap cache."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import re
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

from aiocache import Cache

from asnwho.errors import (
    CacheReadError,
    CacheWriteError,
    InvalidLookupKeyError,
    MalformedResponseError,
)
from asnwho.models import CachedEntry, RegistryResponse, dump_response, parse_response
from asnwho.settings import get_settings

T = TypeVar("T")


logger = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r"[A-Za-z0-9][A-Za-z0-9._:-]{0,199}")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def validate_key(key: str) -> str:
    """Reject lookup keys that cannot be used verbatim as a file name."""

    if not _SAFE_KEY.fullmatch(key) or ".." in key:
        raise InvalidLookupKeyError(f"Invalid lookup key: {key!r}")
    return key


class ResponseCache:
    """One JSON file per lookup key under ``root``.

    Files hold ``{"response": <RDAP JSON>, "fetched_at": <ISO-8601>}``.
    Entries are never expired; remove them by hand or with :meth:`delete`.
    """

    suffix = ".json"

    def __init__(
        self,
        root: Path,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.root = Path(root)
        self.clock = clock

    def path_for(self, key: str) -> Path:
        return self.root / f"{validate_key(key)}{self.suffix}"

    async def read(self, key: str) -> Optional[CachedEntry]:
        path = self.path_for(key)
        return await asyncio.to_thread(self._read_file, path)

    async def write(self, key: str, response: RegistryResponse) -> CachedEntry:
        path = self.path_for(key)
        fetched_at = self.clock().isoformat()
        document = {"response": dump_response(response), "fetched_at": fetched_at}
        await asyncio.to_thread(self._write_file, path, document)
        return CachedEntry(response=response, fetched_at=fetched_at)

    async def delete(self, key: str) -> bool:
        path = self.path_for(key)

        def _unlink() -> bool:
            try:
                path.unlink()
            except FileNotFoundError:
                return False
            return True

        return await asyncio.to_thread(_unlink)

    def _read_file(self, path: Path) -> Optional[CachedEntry]:
        try:
            with path.open("r", encoding="utf-8") as fh:
                document = json.load(fh)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as exc:
            raise CacheReadError(f"Unable to read {path}: {exc}") from exc

        if not isinstance(document, dict):
            raise CacheReadError(f"Unexpected cache document in {path}")

        fetched_at = document.get("fetched_at")
        if not isinstance(fetched_at, str):
            raise CacheReadError(f"Missing fetched_at in {path}")
        try:
            datetime.fromisoformat(fetched_at)
        except ValueError as exc:
            raise CacheReadError(f"Invalid fetched_at in {path}: {fetched_at!r}") from exc

        try:
            response = parse_response(document.get("response"))
        except MalformedResponseError as exc:
            raise CacheReadError(f"Invalid cached response in {path}: {exc}") from exc

        return CachedEntry(response=response, fetched_at=fetched_at)

    def _write_file(self, path: Path, document: Dict[str, Any]) -> None:
        tmp_name: Optional[str] = None
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.root, prefix=f".{path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(document, fh)
            os.replace(tmp_name, path)
        except (OSError, TypeError, ValueError) as exc:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass
            raise CacheWriteError(f"Unable to write {path}: {exc}") from exc


bootstrap_cache = Cache(Cache.MEMORY, namespace="asnwho-bootstrap")


async def fetch_from_cache(
    key: str,
    fetch_func: Callable[[], Awaitable[T]],
    *,
    ttl: Optional[int] = None,
    refresh: bool = False,
) -> T:
    """Retrieve ``key`` from the bootstrap cache or compute it with ``fetch_func``.

    Parameters
    ----------
    key:
        Cache key to look up.
    fetch_func:
        Zero-argument coroutine that computes the value when there is a
        cache miss.
    ttl:
        Time-to-live for the cached value in seconds. Defaults to
        ``CACHE_EXPIRE``.
    refresh:
        When ``True`` the value is recomputed and the cache entry replaced.
    """

    if not refresh:
        cached = await bootstrap_cache.get(key)
        if cached is not None:
            return cached

    value = await fetch_func()
    if ttl is None:
        ttl = get_settings().cache_expire
    await bootstrap_cache.set(key, value, ttl=ttl)
    return value


async def invalidate_cache(key: str) -> None:
    """Remove ``key`` from the bootstrap cache if it exists."""

    await bootstrap_cache.delete(key)
