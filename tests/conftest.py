"""Shared fixtures for the test suite."""

from __future__ import annotations

import dataclasses
from typing import Any

import pytest

from footprint import config
from footprint.models import analysis, exposure
from footprint.sources import SourceSet, build_sources
from footprint.utils import cache as cache_mod

# ── Fake HTTP layer ─────────────────────────────────────────────


class FakeResponse:
    """Minimal stand-in for an ``aiohttp.ClientResponse``."""

    def __init__(self, status: int = 200, json_data: Any = None, text: str = "") -> None:
        self.status = status
        self._json = json_data
        self._text = text

    async def json(self, content_type: str | None = None) -> Any:
        return self._json

    async def text(self) -> str:
        return self._text

    async def __aenter__(self) -> FakeResponse:
        return self

    async def __aexit__(self, *exc: object) -> bool:
        return False


@dataclasses.dataclass
class Call:
    url: str
    params: dict[str, str] | None
    headers: dict[str, str] | None
    timeout: Any


class FakeSession:
    """Routes GET requests by URL prefix to queued responses.

    Each route holds a list; responses are consumed in order and the
    last one repeats.  An ``Exception`` in the list is raised instead.
    Every request is recorded in ``calls``.
    """

    def __init__(self, routes: dict[str, list[FakeResponse | Exception]] | None = None) -> None:
        self._routes = routes or {}
        self.calls: list[Call] = []

    def get(self, url: str, *, params=None, headers=None, timeout=None) -> FakeResponse:
        self.calls.append(Call(url=url, params=params, headers=headers, timeout=timeout))
        for prefix, queue in self._routes.items():
            if url.startswith(prefix):
                item = queue.pop(0) if len(queue) > 1 else queue[0]
                if isinstance(item, Exception):
                    raise item
                return item
        raise AssertionError(f"Unexpected request to {url}")

    def calls_to(self, prefix: str) -> list[Call]:
        return [c for c in self.calls if c.url.startswith(prefix)]


HIBP_URL = "https://haveibeenpwned.com/api/v3/breachedaccount/"
XON_CHECK_URL = "https://api.xposedornot.com/v1/check-email/"
XON_ANALYTICS_URL = "https://api.xposedornot.com/v1/breach-analytics"
EMAILREP_URL = "https://emailrep.io/"
HUNTER_DISCOVER_URL = "https://api.hunter.io/v2/discover"
HUNTER_DOMAIN_URL = "https://api.hunter.io/v2/domain-search"
PWNED_RANGE_URL = "https://api.pwnedpasswords.com/range/"


def clean_routes() -> dict[str, list[FakeResponse | Exception]]:
    """Routes under which every source reports nothing."""
    return {
        HIBP_URL: [FakeResponse(404)],
        XON_CHECK_URL: [FakeResponse(404)],
        XON_ANALYTICS_URL: [FakeResponse(404)],
        EMAILREP_URL: [FakeResponse(200, {"reputation": "high", "suspicious": False, "details": {}})],
        HUNTER_DISCOVER_URL: [FakeResponse(404)],
        HUNTER_DOMAIN_URL: [FakeResponse(404)],
        PWNED_RANGE_URL: [FakeResponse(200, text="")],
    }


# ── Clock / cache / settings ────────────────────────────────────


class FakeClock:
    """Manually advanced clock for cache expiry tests."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def response_cache(clock: FakeClock) -> cache_mod.ResponseCache:
    return cache_mod.ResponseCache(ttl_seconds=600, clock=clock)


@pytest.fixture()
def settings(tmp_path) -> config.Settings:
    """Settings with every key configured and no retry delay."""
    return config.Settings(
        hibp_api_key="hibp-test-key",
        hunter_api_key="hunter-test-key",
        emailrep_api_key="",
        rate_limit_delay_seconds=0.0,
        db_path=str(tmp_path / "footprint.db"),
    )


def make_sources(
    session: FakeSession,
    cache: cache_mod.ResponseCache,
    settings: config.Settings,
) -> SourceSet:
    return build_sources(session, cache, settings)  # type: ignore[arg-type]


# ── Findings factories ──────────────────────────────────────────


def breach(name: str = "Adobe", source: exposure.BreachSource = "PrimaryBreachDB") -> exposure.BreachRecord:
    return exposure.BreachRecord(name=name, source=source)


def contact(value: str = "someone@example.com") -> exposure.Contact:
    return exposure.Contact(value=value)


def make_findings(
    *,
    primary: int = 0,
    secondary: int = 0,
    risk_score: int | None = None,
    weak_storage: bool = False,
    discovered: int = 0,
    domain_contacts: int = 0,
    reputation: exposure.ReputationData | None = None,
    password: exposure.PasswordExposure | None = None,
) -> analysis.Findings:
    """Build merged findings with the given counts."""
    analytics = None
    if risk_score is not None or weak_storage:
        analytics = exposure.BreachAnalytics(
            risk_score=risk_score,
            plaintext_passwords=1 if weak_storage else 0,
        )
    return analysis.Findings(
        email="user@example.com",
        breaches=[breach(f"P{i}") for i in range(primary)]
        + [breach(f"S{i}", "SecondaryBreachDB") for i in range(secondary)],
        breach_analytics=analytics,
        discovery=exposure.DiscoveryData(
            discovered_contacts=[contact(f"d{i}@example.com") for i in range(discovered)],
            domain_contacts=[contact(f"c{i}@example.com") for i in range(domain_contacts)],
        ),
        reputation=reputation,
        password_exposure=password or exposure.PasswordExposure(),
    )
