"""Tagged result returned by every data source.

``Ok`` carries normalized data (possibly an empty-but-valid answer
such as "no breaches"); ``Unavailable`` means the source could not
answer this request.  Keeping the two apart lets callers tell a
confirmed-clean address from a failed lookup.
"""

from __future__ import annotations

import dataclasses
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclasses.dataclass(frozen=True)
class Ok(Generic[T]):
    """A successful lookup."""

    data: T
    cached: bool = False
    partial: bool = False

    @property
    def status(self) -> str:
        if self.cached:
            return "cached"
        return "partial" if self.partial else "ok"


@dataclasses.dataclass(frozen=True)
class Partial(Generic[T]):
    """Degraded data from a fetch that lost an optional sub-call.

    Sources return it instead of the bare data; it is served as
    ``Ok(partial=True)`` and never cached, so the next request tries
    the failed sub-call again.
    """

    data: T


@dataclasses.dataclass(frozen=True)
class Unavailable:
    """A lookup that failed or was skipped, with the reason why."""

    reason: str

    @property
    def status(self) -> str:
        return "unavailable"


SourceResult = Ok[T] | Unavailable


def unwrap_or(result: Ok[T] | Unavailable, default: T) -> T:
    """Return the data of an ``Ok`` result, else *default*."""
    if isinstance(result, Ok):
        return result.data
    return default
