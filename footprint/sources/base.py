"""Shared plumbing for external data sources.

Every source consults the response cache first, performs its HTTP
calls with an explicit timeout, normalizes the upstream JSON into a
typed model, and caches only successful answers.  ``fetch`` never
raises: any failure is logged and returned as ``Unavailable``.
"""

from __future__ import annotations

import abc
from collections.abc import Awaitable, Callable
from typing import Any, ClassVar, Generic, TypeVar

import aiohttp
import pydantic

from footprint import config
from footprint.models.result import Ok, Partial, Unavailable
from footprint.utils import cache as cache_mod
from footprint.utils import errors, logger

log = logger.create_logger("Sources")

T = TypeVar("T")

USER_AGENT = "DigitalFootprintChecker/1.0"

DEFAULT_TIMEOUT = aiohttp.ClientTimeout(total=10)


class Source(abc.ABC, Generic[T]):
    """Base class for one external data source.

    Subclasses set ``name`` (used in cache keys and status maps),
    ``label`` (used in error messages), ``adapter`` (a
    ``pydantic.TypeAdapter`` for the cached shape) and implement
    :meth:`_fetch`.
    """

    name: ClassVar[str]
    label: ClassVar[str]
    adapter: ClassVar[pydantic.TypeAdapter[Any]]
    timeout: ClassVar[aiohttp.ClientTimeout] = DEFAULT_TIMEOUT

    def __init__(
        self,
        session: aiohttp.ClientSession,
        cache: cache_mod.ResponseCache,
        settings: config.Settings,
    ) -> None:
        self._session = session
        self._cache = cache
        self._settings = settings

    def cache_key(self, email: str) -> str:
        return f"{self.name}_{email}"

    async def fetch(self, email: str) -> Ok[T] | Unavailable:
        """Look up *email*, serving from cache when possible."""
        return await self._lookup(self.cache_key(email), lambda: self._fetch(email))

    @abc.abstractmethod
    async def _fetch(self, email: str) -> T | Partial[T]:
        """Query the upstream API and return normalized data.

        Raises on any failure; :meth:`fetch` converts the error.
        Returns :class:`Partial` when an optional sub-call failed.
        """

    async def _lookup(self, key: str, producer: Callable[[], Awaitable[Any]]) -> Ok[Any] | Unavailable:
        """Serve *key* from cache or run *producer* and cache its result."""
        cached = self._cache.get(key)
        if cached is not None:
            log.debug("Cache hit", {"source": self.name})
            return Ok(self.adapter.validate_python(cached), cached=True)

        try:
            data = await producer()
        except errors.SourceNotConfiguredError as exc:
            log.warn("Source skipped", {"source": self.name, "reason": errors.get_error_message(exc)})
            return Unavailable(errors.get_error_message(exc))
        except Exception as exc:
            reason = errors.get_error_message(exc)
            log.warn(
                "Source unavailable",
                {"source": self.name, "status": getattr(exc, "status", None), "reason": reason},
            )
            return Unavailable(reason)

        if isinstance(data, Partial):
            log.debug("Partial result not cached", {"source": self.name})
            return Ok(data.data, partial=True)

        self._cache.set(key, self.adapter.dump_python(data, mode="json"))
        return Ok(data)

    # ── HTTP helpers ────────────────────────────────────────────

    def _headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        headers = {"User-Agent": USER_AGENT}
        if extra:
            headers.update(extra)
        return headers

    @staticmethod
    def _raise_for_status(label: str, status: int) -> None:
        if status == 429:
            raise errors.RateLimitedError(label)
        if not 200 <= status < 300:
            raise errors.UpstreamStatusError(label, status)

    async def _get_json(
        self,
        url: str,
        *,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
        label: str | None = None,
    ) -> Any | None:
        """GET *url* and decode JSON.

        Returns ``None`` on HTTP 404 ("nothing known"), raises
        ``RateLimitedError`` on 429 and ``UpstreamStatusError`` on
        any other non-2xx status.
        """
        async with self._session.get(
            url,
            params=params,
            headers=self._headers(headers),
            timeout=self.timeout,
        ) as response:
            if response.status == 404:
                return None
            self._raise_for_status(label or self.label, response.status)
            return await response.json(content_type=None)

    async def _get_text(
        self,
        url: str,
        *,
        headers: dict[str, str] | None = None,
    ) -> str:
        """GET *url* and return the body; any non-2xx status raises."""
        async with self._session.get(
            url,
            headers=self._headers(headers),
            timeout=self.timeout,
        ) as response:
            self._raise_for_status(self.label, response.status)
            return await response.text()


def as_dict(value: object) -> dict[str, Any]:
    """Return *value* when it is a dict, else an empty dict."""
    return value if isinstance(value, dict) else {}


def as_list(value: object) -> list[Any]:
    """Return *value* when it is a list, else an empty list."""
    return value if isinstance(value, list) else []
