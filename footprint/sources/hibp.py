"""Primary breach directory: HaveIBeenPwned v3.

Requires an API key.  Without one the source is skipped rather than
queried, so it never produces a 401.  A 404 means the address is in
no known breach, which is a valid and cacheable answer.  A 429 is
retried exactly once after a fixed delay.
"""

from __future__ import annotations

import urllib.parse
from typing import Any

import aiohttp
import pydantic

from footprint.models import exposure
from footprint.sources import base
from footprint.utils import errors, logger, retry

log = logger.create_logger("HIBP")

_BREACHED_ACCOUNT_URL = "https://haveibeenpwned.com/api/v3/breachedaccount/{email}"


def normalize_breach(raw: dict[str, Any]) -> exposure.BreachRecord:
    """Map one HIBP breach object onto a ``BreachRecord``."""
    return exposure.BreachRecord(
        name=str(raw.get("Name") or raw.get("Title") or "Unknown"),
        domain=raw.get("Domain") or None,
        breach_date=raw.get("BreachDate") or None,
        affected_count=raw.get("PwnCount"),
        description=raw.get("Description") or None,
        data_classes=raw.get("DataClasses"),
        source="PrimaryBreachDB",
    )


class HibpSource(base.Source[list[exposure.BreachRecord]]):
    """Breaches for an address from HaveIBeenPwned."""

    name = "hibp"
    label = "HIBP"
    adapter = pydantic.TypeAdapter(list[exposure.BreachRecord])
    timeout = aiohttp.ClientTimeout(total=15)

    async def _fetch(self, email: str) -> list[exposure.BreachRecord]:
        api_key = self._settings.hibp_api_key
        if not api_key:
            raise errors.SourceNotConfiguredError("HIBP_API_KEY")

        url = _BREACHED_ACCOUNT_URL.format(email=urllib.parse.quote(email, safe=""))

        async def request() -> Any | None:
            return await self._get_json(
                url,
                params={"truncateResponse": "false"},
                headers={"hibp-api-key": api_key},
            )

        payload = await retry.with_retry(
            request,
            max_retries=1,
            delay_seconds=self._settings.rate_limit_delay_seconds,
            context=self.label,
        )
        if payload is None:
            log.info("No breaches found")
            return []

        breaches = [normalize_breach(item) for item in base.as_list(payload) if isinstance(item, dict)]
        log.info("Breaches found", {"count": len(breaches)})
        return breaches
