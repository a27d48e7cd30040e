"""Public discovery deductions."""

from __future__ import annotations

from footprint.analysis.scoring import weights
from footprint.models import analysis


def calculate_discovered(findings: analysis.Findings) -> analysis.CategoryDeduction:
    """Deduct for contacts found by broad discovery."""
    count = len(findings.discovery.discovered_contacts)
    points = min(count * weights.DISCOVERED_CONTACT_POINTS_EACH, weights.DISCOVERED_CONTACT_POINTS_CAP)
    issues = [f"{count} publicly discoverable contacts"] if count else []
    return analysis.CategoryDeduction(
        points=points,
        max_points=weights.DISCOVERED_CONTACT_POINTS_CAP,
        issues=issues,
    )


def calculate_domain(findings: analysis.Findings) -> analysis.CategoryDeduction:
    """Deduct for contacts found by the domain-specific search."""
    count = len(findings.discovery.domain_contacts)
    points = min(count * weights.DOMAIN_CONTACT_POINTS_EACH, weights.DOMAIN_CONTACT_POINTS_CAP)
    issues = [f"{count} addresses indexed for your domain"] if count else []
    return analysis.CategoryDeduction(
        points=points,
        max_points=weights.DOMAIN_CONTACT_POINTS_CAP,
        issues=issues,
    )
