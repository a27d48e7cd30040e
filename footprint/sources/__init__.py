"""External data sources.

One module per upstream service.  :class:`SourceSet` bundles one
instance of each, sharing a single HTTP session and response cache.
"""

from __future__ import annotations

import dataclasses

import aiohttp

from footprint import config
from footprint.sources.emailrep import EmailRepSource
from footprint.sources.hibp import HibpSource
from footprint.sources.hunter import HunterSource
from footprint.sources.pwned_passwords import PwnedPasswordsSource
from footprint.sources.xposedornot import XposedOrNotSource
from footprint.utils import cache as cache_mod


@dataclasses.dataclass(frozen=True)
class SourceSet:
    """The sources queried for every scan."""

    primary_breaches: HibpSource
    secondary_breaches: XposedOrNotSource
    reputation: EmailRepSource
    discovery: HunterSource
    passwords: PwnedPasswordsSource


def build_sources(
    session: aiohttp.ClientSession,
    cache: cache_mod.ResponseCache,
    settings: config.Settings,
) -> SourceSet:
    """Create every source against a shared session and cache."""
    return SourceSet(
        primary_breaches=HibpSource(session, cache, settings),
        secondary_breaches=XposedOrNotSource(session, cache, settings),
        reputation=EmailRepSource(session, cache, settings),
        discovery=HunterSource(session, cache, settings),
        passwords=PwnedPasswordsSource(session, cache, settings),
    )


__all__ = [
    "EmailRepSource",
    "HibpSource",
    "HunterSource",
    "PwnedPasswordsSource",
    "SourceSet",
    "XposedOrNotSource",
    "build_sources",
]
