"""Process-wide response cache shared by all data sources.

Entries are keyed by ``"<source>_<email>"`` and expire a fixed TTL
after they were stored.  An expired entry is treated as absent and
evicted by the read that finds it.  There is no capacity bound; the
TTL keeps memory bounded under steady traffic.

The cache is constructed explicitly and handed to every source, so
tests can substitute a deterministic clock.
"""

from __future__ import annotations

import dataclasses
import threading
import time
from collections.abc import Callable
from typing import Any

from footprint.utils import logger

log = logger.create_logger("ResponseCache")

DEFAULT_TTL_SECONDS = 10 * 60


@dataclasses.dataclass(frozen=True)
class CacheEntry:
    """A stored value and the clock reading at which it was stored."""

    key: str
    value: Any
    stored_at: float


class ResponseCache:
    """Time-expiring key/value store.

    Single-key ``get`` and ``set`` are atomic.  Concurrent writers
    for the same key are allowed; the last one wins.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, key: str) -> Any | None:
        """Return the stored value, or ``None`` when absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() - entry.stored_at >= self._ttl:
                del self._entries[key]
                log.debug("Cache entry expired", {"key": key})
                return None
            return entry.value

    def set(self, key: str, value: Any) -> None:
        """Store *value* under *key*, stamped with the current time."""
        with self._lock:
            self._entries[key] = CacheEntry(key=key, value=value, stored_at=self._clock())

    def clear(self) -> int:
        """Drop every entry and return how many were removed."""
        with self._lock:
            removed = len(self._entries)
            self._entries.clear()
        if removed:
            log.info("Response cache cleared", {"entriesRemoved": removed})
        return removed

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
