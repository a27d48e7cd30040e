"""
Scan pipeline: validation, aggregation, scoring and reporting.

Validates the query before any network call, collects findings from
every source, then derives the score, recommendations and summary
into one :class:`ExposureReport`.
"""

from __future__ import annotations

from footprint.analysis import recommendations as recommendations_mod
from footprint.analysis.scoring import calculator
from footprint.models import analysis, report
from footprint.pipeline import aggregator
from footprint.sources import SourceSet
from footprint.utils import email as email_utils
from footprint.utils import logger

log = logger.create_logger("Scan")


class InvalidQueryError(ValueError):
    """The request cannot be scanned; the message is user-facing."""


def validate_request(body: report.FootprintRequest) -> report.ExposureQuery:
    """Turn a request body into a validated query.

    Raises:
        InvalidQueryError: When the email is missing or malformed.
    """
    if not body.email:
        raise InvalidQueryError("Email is required")
    if not email_utils.is_valid_email(body.email):
        raise InvalidQueryError("Invalid email format")
    return report.ExposureQuery(email=body.email, password=body.password or None)


def build_summary(findings: analysis.Findings, score: int) -> str:
    """Generate the one-paragraph human-readable summary."""
    summary = (
        f"Found {findings.breach_count} data breaches and "
        f"{findings.platforms_found} public email exposures. "
        f"Privacy score: {score}/100."
    )
    if findings.reputation is not None and findings.reputation.reputation_label:
        summary += f" Reputation: {findings.reputation.reputation_label}"
        if findings.password_pwned:
            summary += "."
    if findings.password_pwned:
        summary += f" Password seen in {findings.password_exposure.pwn_count:,} breaches."
    return summary


def build_report(findings: analysis.Findings) -> report.ExposureReport:
    """Score *findings* and compose the final report."""
    breakdown = calculator.calculate_privacy_score(findings)
    return report.ExposureReport(
        email=findings.email,
        score=breakdown.total_score,
        breach_count=findings.breach_count,
        platforms_found=findings.platforms_found,
        breaches=findings.breaches,
        discovery=findings.discovery,
        reputation=findings.reputation,
        password_exposure=findings.password_exposure,
        recommendations=recommendations_mod.generate_recommendations(findings),
        summary=build_summary(findings, breakdown.total_score),
        sources=findings.source_status,
        score_breakdown=breakdown,
    )


class FootprintScanner:
    """Runs complete scans against a fixed set of sources."""

    def __init__(self, sources: SourceSet) -> None:
        self._sources = sources

    async def scan(self, query: report.ExposureQuery) -> report.ExposureReport:
        """Scan one address and return its report."""
        log.section("Footprint Scan")
        log.info("Checking footprint", {"email": query.email, "passwordCheck": query.password is not None})
        log.start_timer("scan")

        findings = await aggregator.collect_findings(query.email, self._sources, query.password)
        result = build_report(findings)

        log.end_timer("scan", "Scan complete")
        log.success(
            "Report ready",
            {"score": result.score, "breaches": result.breach_count, "platforms": result.platforms_found},
        )
        return result
