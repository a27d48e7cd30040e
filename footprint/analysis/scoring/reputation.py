"""Reputation flag deductions.

Each flag is applied independently.  Missing reputation data
(service unreachable) deducts nothing.
"""

from __future__ import annotations

from footprint.analysis.scoring import weights
from footprint.models import analysis

_MAX_POINTS = (
    weights.SUSPICIOUS_POINTS
    + weights.CREDENTIALS_LEAKED_POINTS
    + weights.MALICIOUS_ACTIVITY_POINTS
    + weights.BLACKLISTED_POINTS
)


def calculate(findings: analysis.Findings) -> analysis.CategoryDeduction:
    """Sum the points for every true reputation flag."""
    reputation = findings.reputation
    if reputation is None:
        return analysis.CategoryDeduction(points=0, max_points=_MAX_POINTS)

    points = 0
    issues: list[str] = []
    for flagged, flag_points, issue in (
        (reputation.suspicious, weights.SUSPICIOUS_POINTS, "Flagged as suspicious"),
        (reputation.credentials_leaked, weights.CREDENTIALS_LEAKED_POINTS, "Credentials leaked"),
        (reputation.malicious_activity, weights.MALICIOUS_ACTIVITY_POINTS, "Linked to malicious activity"),
        (reputation.blacklisted, weights.BLACKLISTED_POINTS, "Blacklisted"),
    ):
        if flagged:
            points += flag_points
            issues.append(issue)

    return analysis.CategoryDeduction(points=points, max_points=_MAX_POINTS, issues=issues)
