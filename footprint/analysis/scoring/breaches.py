"""Breach-based deductions.

Counts every breach record from both directories and applies the
secondary directory's risk rating when its analytics are present.
"""

from __future__ import annotations

from footprint.analysis.scoring import weights
from footprint.models import analysis
from footprint.utils import logger

log = logger.create_logger("Score-Breaches")


def calculate(findings: analysis.Findings) -> analysis.CategoryDeduction:
    """Deduct for the number of breaches.

    Args:
        findings: Merged findings for one address.

    Returns:
        CategoryDeduction capped at ``BREACH_POINTS_CAP``.
    """
    count = findings.breach_count
    points = min(count * weights.BREACH_POINTS_EACH, weights.BREACH_POINTS_CAP)
    issues: list[str] = []
    if count:
        issues.append(f"Found in {count} data breach{'es' if count != 1 else ''}")

    log.debug("Breach deduction", {"breaches": count, "points": points})
    return analysis.CategoryDeduction(points=points, max_points=weights.BREACH_POINTS_CAP, issues=issues)


def calculate_risk_rating(findings: analysis.Findings) -> analysis.CategoryDeduction:
    """Deduct for an elevated secondary-directory risk rating."""
    risk_score = findings.risk_score
    points = weights.risk_rating_points(risk_score)
    issues: list[str] = []
    if points:
        issues.append(f"Breach risk rated {risk_score}/10")

    return analysis.CategoryDeduction(
        points=points,
        max_points=weights.RISK_RATING_TIERS[0][1],
        issues=issues,
    )
