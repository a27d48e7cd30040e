"""
Aggregator: concurrent fan-out to every data source, then merge.

All sources run as independent tasks and the aggregator waits for
every one of them to settle.  Sources never raise, so a slow or
failed source only leaves its own slice of the findings empty.
"""

from __future__ import annotations

import asyncio

from footprint.models import analysis, exposure
from footprint.models.result import Ok, unwrap_or
from footprint.sources import SourceSet
from footprint.utils import logger

log = logger.create_logger("Aggregator")


def merge_breaches(
    primary: list[exposure.BreachRecord],
    secondary: exposure.SecondaryBreachData,
) -> list[exposure.BreachRecord]:
    """Concatenate both breach lists, primary first.

    Secondary names are enriched from the analytics detail row with
    the same name when one exists.  No de-duplication is done across
    sources: each source's count is reported as-is.
    """
    details: dict[str, exposure.BreachDetail] = {}
    if secondary.analytics is not None:
        details = {d.name.lower(): d for d in secondary.analytics.details}

    merged = list(primary)
    for name in secondary.breaches:
        detail = details.get(name.lower())
        if detail is None:
            merged.append(exposure.BreachRecord(name=name, source="SecondaryBreachDB"))
            continue
        merged.append(
            exposure.BreachRecord(
                name=name,
                domain=detail.domain,
                breach_date=detail.breach_date,
                affected_count=detail.affected_count,
                description=detail.description,
                data_classes=detail.data_classes,
                source="SecondaryBreachDB",
            )
        )
    return merged


async def _no_password() -> exposure.PasswordExposure:
    return exposure.PasswordExposure(checked=False)


async def collect_findings(
    email: str,
    sources: SourceSet,
    password: str | None = None,
) -> analysis.Findings:
    """Query every source for *email* concurrently and merge the results.

    Args:
        email: A syntactically valid address.
        sources: The sources to query.
        password: Optional password for the k-anonymity check.

    Returns:
        Merged :class:`Findings` built from whichever sources answered.
    """
    log.start_timer("collect-findings")

    primary, secondary, reputation, discovery, password_exposure = await asyncio.gather(
        sources.primary_breaches.fetch(email),
        sources.secondary_breaches.fetch(email),
        sources.reputation.fetch(email),
        sources.discovery.fetch(email),
        sources.passwords.check(password) if password else _no_password(),
    )

    status: dict[str, analysis.SourceStatus] = {}
    for source, result in (
        (sources.primary_breaches, primary),
        (sources.secondary_breaches, secondary),
        (sources.reputation, reputation),
        (sources.discovery, discovery),
    ):
        status[source.name] = result.status  # type: ignore[assignment]
    if not password:
        status[sources.passwords.name] = "skipped"
    else:
        status[sources.passwords.name] = "ok" if password_exposure.checked else "unavailable"

    secondary_data = unwrap_or(secondary, exposure.SecondaryBreachData())
    findings = analysis.Findings(
        email=email,
        breaches=merge_breaches(unwrap_or(primary, []), secondary_data),
        breach_analytics=secondary_data.analytics,
        discovery=unwrap_or(discovery, exposure.DiscoveryData()),
        reputation=reputation.data if isinstance(reputation, Ok) else None,
        password_exposure=password_exposure,
        source_status=status,
    )

    unavailable = [name for name, state in status.items() if state == "unavailable"]
    log.end_timer("collect-findings", "All sources settled")
    log.info(
        "Findings merged",
        {
            "primaryBreaches": findings.primary_breach_count,
            "secondaryBreaches": findings.secondary_breach_count,
            "platformsFound": findings.platforms_found,
            "reputation": findings.reputation is not None,
            "unavailable": ", ".join(unavailable) if unavailable else None,
        },
    )
    return findings

