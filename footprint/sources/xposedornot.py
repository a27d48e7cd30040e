"""Secondary breach directory: XposedOrNot.

Two calls are made.  The basic check lists breach names for the
address (404 means none).  When it finds anything, the analytics
call adds a risk rating, password-storage metrics and per-breach
detail.  Analytics are enrichment only: a failure there is swallowed
and the basic answer is still returned, but not cached.
"""

from __future__ import annotations

import urllib.parse
from typing import Any

import pydantic

from footprint.models import exposure
from footprint.models.result import Partial
from footprint.sources import base
from footprint.utils import errors, logger

log = logger.create_logger("XposedOrNot")

_CHECK_EMAIL_URL = "https://api.xposedornot.com/v1/check-email/{email}"
_ANALYTICS_URL = "https://api.xposedornot.com/v1/breach-analytics"


def normalize_breach_names(payload: Any) -> list[str]:
    """Flatten the ``breaches`` field of a check-email response.

    The API nests names one level deep (``[["Adobe", "Canva"]]``);
    flat lists are accepted too.
    """
    names: list[str] = []
    for item in base.as_list(base.as_dict(payload).get("breaches")):
        if isinstance(item, list):
            names.extend(str(name) for name in item if name)
        elif item:
            names.append(str(item))
    return names


def _first(value: Any) -> dict[str, Any]:
    """Metrics are returned as single-element lists; take the element."""
    if isinstance(value, list):
        return base.as_dict(value[0]) if value else {}
    return base.as_dict(value)


def normalize_analytics(payload: Any) -> exposure.BreachAnalytics | None:
    """Map a breach-analytics response onto ``BreachAnalytics``."""
    data = base.as_dict(payload)
    if not data:
        return None

    metrics = base.as_dict(data.get("BreachMetrics"))
    risk = _first(metrics.get("risk"))
    strength = _first(metrics.get("passwords_strength"))

    details = [
        exposure.BreachDetail(
            name=str(item.get("breach") or "Unknown"),
            domain=item.get("domain") or None,
            breach_date=str(item["xposed_date"]) if item.get("xposed_date") else None,
            affected_count=item.get("xposed_records"),
            description=item.get("details") or None,
            data_classes=item.get("xposed_data"),
            password_risk=item.get("password_risk") or None,
        )
        for item in base.as_list(base.as_dict(data.get("ExposedBreaches")).get("breaches_details"))
        if isinstance(item, dict)
    ]

    return exposure.BreachAnalytics(
        risk_score=risk.get("risk_score"),
        risk_label=risk.get("risk_label") or None,
        plaintext_passwords=int(strength.get("PlainText") or 0),
        easy_to_crack_passwords=int(strength.get("EasyToCrack") or 0),
        strong_hash_passwords=int(strength.get("StrongHash") or 0),
        unknown_password_storage=int(strength.get("Unknown") or 0),
        details=details,
    )


class XposedOrNotSource(base.Source[exposure.SecondaryBreachData]):
    """Breach names and analytics for an address from XposedOrNot."""

    name = "xposedornot"
    label = "XposedOrNot"
    adapter = pydantic.TypeAdapter(exposure.SecondaryBreachData)

    async def _fetch(self, email: str) -> exposure.SecondaryBreachData | Partial[exposure.SecondaryBreachData]:
        payload = await self._get_json(_CHECK_EMAIL_URL.format(email=urllib.parse.quote(email, safe="")))
        names = normalize_breach_names(payload)
        if not names:
            log.info("No breaches found")
            return exposure.SecondaryBreachData()

        analytics, analytics_failed = await self._fetch_analytics(email)
        log.info(
            "Breaches found",
            {"count": len(names), "riskScore": analytics.risk_score if analytics else None},
        )
        data = exposure.SecondaryBreachData(breaches=names, analytics=analytics)
        return Partial(data) if analytics_failed else data

    async def _fetch_analytics(self, email: str) -> tuple[exposure.BreachAnalytics | None, bool]:
        """Return ``(analytics, failed)``; a 404 is ``(None, False)``."""
        try:
            payload = await self._get_json(_ANALYTICS_URL, params={"email": email}, label=f"{self.label} analytics")
            return normalize_analytics(payload), False
        except Exception as exc:
            log.debug("Breach analytics unavailable", {"reason": errors.get_error_message(exc)})
            return None, True
