"""Privacy score calculator: orchestrator.

Calls each category module, sums the capped deductions and
subtracts them from the starting score, clamping at zero.  The
result depends only on the merged findings: no randomness, no
clock.
"""

from __future__ import annotations

from footprint.analysis.scoring import breaches, discovery, password, reputation, weights
from footprint.models import analysis
from footprint.utils import logger

log = logger.create_logger("PrivacyScore")


def calculate_privacy_score(findings: analysis.Findings) -> analysis.ScoreBreakdown:
    """Calculate the complete privacy score breakdown.

    Args:
        findings: Merged findings for one address.

    Returns:
        A :class:`ScoreBreakdown` whose ``total_score`` is in 0-100.
    """
    categories = {
        "breaches": breaches.calculate(findings),
        "riskRating": breaches.calculate_risk_rating(findings),
        "discoveredContacts": discovery.calculate_discovered(findings),
        "domainContacts": discovery.calculate_domain(findings),
        "reputation": reputation.calculate(findings),
        "password": password.calculate(findings),
    }

    deducted = sum(cat.points for cat in categories.values())
    total_score = max(0, weights.STARTING_SCORE - deducted)

    # Largest deductions first; ties keep category order.
    ranked = sorted(categories.values(), key=lambda cat: cat.points, reverse=True)
    factors = [issue for cat in ranked if cat.points for issue in cat.issues]

    log.success(
        "Privacy score calculated",
        {"score": total_score, "deducted": deducted, **{name: cat.points for name, cat in categories.items()}},
    )

    return analysis.ScoreBreakdown(total_score=total_score, categories=categories, factors=factors)
