"""RDAP client built on whoisit's IANA bootstrap and lookups."""

from __future__ import annotations

import ipaddress
import logging
import re
from dataclasses import dataclass
from typing import Any, Union

import httpx
import whoisit
from whoisit import errors as whoisit_errors

from asnwho.cache import fetch_from_cache
from asnwho.errors import (
    BootstrapError,
    InvalidQueryError,
    MalformedResponseError,
    NotFoundError,
    RateLimitedError,
    RegistryClientError,
)
from asnwho.models import RegistryResponse, parse_response

logger = logging.getLogger(__name__)

MAX_ASN = 2**32 - 1
BOOTSTRAP_CACHE_KEY = "whoisit-bootstrap"

_ASN_PATTERN = re.compile(r"(?:[Aa][Ss])?(\d+)")

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


@dataclass(frozen=True)
class RdapQuery:
    kind: str
    value: Union[int, IPAddress]


def classify_query(key: str) -> RdapQuery:
    """Turn a lookup key into an RDAP query (``AS701``, ``701`` or an IP)."""

    match = _ASN_PATTERN.fullmatch(key)
    if match:
        number = int(match.group(1))
        if number > MAX_ASN:
            raise InvalidQueryError(f"AS number out of range: {key}")
        return RdapQuery(kind="autnum", value=number)

    try:
        return RdapQuery(kind="ip", value=ipaddress.ip_address(key))
    except ValueError:
        pass

    raise InvalidQueryError(f"Unsupported query: {key!r}")


class RdapClient:
    """Resolve lookup keys to RDAP objects.

    whoisit locates the authoritative registry from the IANA bootstrap files.
    Its serialised bootstrap data is kept in the in-process bootstrap cache
    so it is refreshed every ``CACHE_EXPIRE`` seconds.
    """

    async def resolve(self, key: str) -> RegistryResponse:
        query = classify_query(key)
        await self.ensure_bootstrap()
        logger.info("Fetching %s (%s) via RDAP", key, query.kind)
        payload = await self._query(query)
        return parse_response(payload)

    async def ensure_bootstrap(self) -> None:
        async def _load() -> str:
            logger.debug("Loading RDAP bootstrap data from IANA")
            try:
                await whoisit.bootstrap_async(overrides=True)
            except whoisit_errors.BootstrapError as exc:
                raise BootstrapError(f"RDAP bootstrap failed: {exc}") from exc
            return whoisit.save_bootstrap_data()

        data = await fetch_from_cache(BOOTSTRAP_CACHE_KEY, _load)
        if not whoisit.is_bootstrapped():
            whoisit.load_bootstrap_data(data)

    async def _query(self, query: RdapQuery) -> Any:
        try:
            if query.kind == "autnum":
                return await whoisit.asn_async(query.value, raw=True)
            return await whoisit.ip_async(str(query.value), raw=True)
        except whoisit_errors.RateLimitedError as exc:
            raise RateLimitedError(f"Too Many Requests: {exc}") from exc
        except whoisit_errors.ResourceDoesNotExist as exc:
            raise NotFoundError(f"Not found: {exc}", status_code=404) from exc
        except (whoisit_errors.BootstrapError, whoisit_errors.UnsupportedError) as exc:
            raise BootstrapError(f"No RDAP service for {query.value}: {exc}") from exc
        except whoisit_errors.ParseError as exc:
            raise MalformedResponseError(f"Invalid RDAP data: {exc}") from exc
        except (whoisit_errors.QueryError, whoisit_errors.ResourceAccessDeniedError) as exc:
            raise RegistryClientError(f"RDAP query failed: {exc}") from exc
        except httpx.HTTPError as exc:
            raise RegistryClientError(f"RDAP request failed: {exc}") from exc
