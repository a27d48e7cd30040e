"""Contact and domain discovery: Hunter.io.

Runs a broad ``discover`` call and a ``domain-search`` call for the
address's domain.  Each sub-call stands alone: a 404 is an empty
answer, any other failure is logged and treated as empty, and
neither failure blocks the other.  A result missing one sub-call is
served but not cached.  Only when both sub-calls fail is the whole
source reported unavailable.
"""

from __future__ import annotations

from typing import Any

import pydantic

from footprint.models import exposure
from footprint.models.result import Partial
from footprint.sources import base
from footprint.utils import email as email_utils
from footprint.utils import errors, logger

log = logger.create_logger("Hunter")

_DISCOVER_URL = "https://api.hunter.io/v2/discover"
_DOMAIN_SEARCH_URL = "https://api.hunter.io/v2/domain-search"


def normalize_contact(raw: dict[str, Any]) -> exposure.Contact | None:
    """Map one Hunter email entry onto a ``Contact``; skip entries without an address."""
    value = raw.get("value") or raw.get("email")
    if not value:
        return None
    confidence = raw.get("confidence")
    return exposure.Contact(
        value=str(value),
        type=raw.get("type") or None,
        confidence=confidence if isinstance(confidence, int) and not isinstance(confidence, bool) else None,
        first_name=raw.get("first_name") or None,
        last_name=raw.get("last_name") or None,
        position=raw.get("position") or None,
        sources_count=len(base.as_list(raw.get("sources"))),
    )


def _contacts(data: dict[str, Any]) -> list[exposure.Contact]:
    contacts = (normalize_contact(item) for item in base.as_list(data.get("emails")) if isinstance(item, dict))
    return [c for c in contacts if c is not None]


def normalize_discovery(
    email: str,
    discover_payload: Any | None,
    domain_search_payload: Any | None,
) -> exposure.DiscoveryData:
    """Combine both sub-call payloads into one ``DiscoveryData``.

    Domain metadata is taken from the domain search when present,
    else from the discover response.  ``confidence`` is Hunter's
    confidence for *email* itself when it appears among the results.
    """
    discover = base.as_dict(base.as_dict(discover_payload).get("data"))
    search = base.as_dict(base.as_dict(domain_search_payload).get("data"))
    meta = search or discover

    discovered = _contacts(discover)
    domain_contacts = _contacts(search)

    target = email.lower()
    confidence = next(
        (c.confidence for c in (*domain_contacts, *discovered) if c.value.lower() == target),
        None,
    )

    return exposure.DiscoveryData(
        domain=meta.get("domain") or None,
        confidence=confidence,
        country=meta.get("country") or None,
        is_disposable=bool(meta.get("disposable")),
        is_webmail=bool(meta.get("webmail")),
        discovered_contacts=discovered,
        domain_contacts=domain_contacts,
    )


class HunterSource(base.Source[exposure.DiscoveryData]):
    """Public contacts associated with an address's domain."""

    name = "hunter"
    label = "Hunter.io"
    adapter = pydantic.TypeAdapter(exposure.DiscoveryData)

    async def _fetch(self, email: str) -> exposure.DiscoveryData | Partial[exposure.DiscoveryData]:
        api_key = self._settings.hunter_api_key
        if not api_key:
            raise errors.SourceNotConfiguredError("HUNTER_API_KEY")

        domain = email_utils.extract_domain(email)
        params = {"domain": domain, "api_key": api_key}

        discover, discover_failed = await self._sub_call(_DISCOVER_URL, params, "Discover")
        search, search_failed = await self._sub_call(_DOMAIN_SEARCH_URL, params, "Domain Search")

        if discover_failed and search_failed:
            raise errors.SourceUnavailableError("Hunter.io Discover and Domain Search both failed")

        data = normalize_discovery(email, discover, search)
        log.info(
            "Discovery complete",
            {
                "domain": domain,
                "discovered": len(data.discovered_contacts),
                "domainSearch": len(data.domain_contacts),
            },
        )
        if discover_failed or search_failed:
            return Partial(data)
        return data

    async def _sub_call(self, url: str, params: dict[str, str], step: str) -> tuple[Any | None, bool]:
        """Run one sub-call; return ``(payload, failed)``.

        A 404 yields ``(None, False)``.  Any other failure is logged
        and yields ``(None, True)``.
        """
        try:
            return await self._get_json(url, params=params, label=f"{self.label} {step}"), False
        except Exception as exc:
            log.warn(f"{step} failed", {"reason": errors.get_error_message(exc)})
            return None, True
