"""Exceptions raised by the lookup pipeline and the RDAP client."""

from __future__ import annotations

from typing import Optional


class AsnWhoError(Exception):
    """Base class for every error raised by :mod:`asnwho`."""


class InvalidLookupKeyError(AsnWhoError, ValueError):
    """The lookup key cannot be used as a cache file name."""


class CacheError(AsnWhoError):
    pass


class CacheReadError(CacheError):
    pass


class CacheWriteError(CacheError):
    pass


class RegistryClientError(AsnWhoError):
    """A registry lookup failed.

    ``status_code`` carries the HTTP status returned by the registry when the
    failure came from an HTTP response, and is ``None`` for transport errors.
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RateLimitedError(RegistryClientError):
    def __init__(
        self,
        message: str = "Too Many Requests",
        *,
        status_code: int = 429,
        retry_after: Optional[str] = None,
    ):
        super().__init__(message, status_code=status_code)
        self.retry_after = retry_after


class NotFoundError(RegistryClientError):
    pass


class InvalidQueryError(RegistryClientError):
    pass


class BootstrapError(RegistryClientError):
    pass


class MalformedResponseError(RegistryClientError):
    pass
