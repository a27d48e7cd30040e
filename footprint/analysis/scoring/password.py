"""Password exposure deduction.

Applies only when a password was actually checked and found; an
unchecked password never costs points.
"""

from __future__ import annotations

from footprint.analysis.scoring import weights
from footprint.models import analysis


def calculate(findings: analysis.Findings) -> analysis.CategoryDeduction:
    """Deduct one tier of points for a pwned password."""
    max_points = weights.PASSWORD_TIERS[0][1]
    if not findings.password_pwned:
        return analysis.CategoryDeduction(points=0, max_points=max_points)

    count = findings.password_exposure.pwn_count
    return analysis.CategoryDeduction(
        points=weights.password_points(count),
        max_points=max_points,
        issues=[f"Password seen {count:,} times in breaches"],
    )
