"""Scoring weights.

Product-tuning constants for the privacy score.  Their values are
kept stable so scores stay comparable across releases; change them
here rather than in the category modules.
"""

from __future__ import annotations

STARTING_SCORE = 100

# ── Breaches ────────────────────────────────────────────────────
BREACH_POINTS_EACH = 12
BREACH_POINTS_CAP = 70

# Secondary directory risk rating (0-10), highest tier met wins.
RISK_RATING_TIERS: tuple[tuple[int, int], ...] = (
    (8, 15),
    (5, 10),
    (3, 5),
)

# ── Discovery ───────────────────────────────────────────────────
DISCOVERED_CONTACT_POINTS_EACH = 5
DISCOVERED_CONTACT_POINTS_CAP = 25
DOMAIN_CONTACT_POINTS_EACH = 3
DOMAIN_CONTACT_POINTS_CAP = 20

# ── Reputation flags ────────────────────────────────────────────
SUSPICIOUS_POINTS = 20
CREDENTIALS_LEAKED_POINTS = 20
MALICIOUS_ACTIVITY_POINTS = 10
BLACKLISTED_POINTS = 15

# ── Password exposure ───────────────────────────────────────────
# (pwn count strictly above, points); any exposure below the lowest
# threshold costs PASSWORD_BASE_POINTS.
PASSWORD_TIERS: tuple[tuple[int, int], ...] = (
    (100_000, 30),
    (10_000, 25),
    (1_000, 20),
)
PASSWORD_BASE_POINTS = 15


def risk_rating_points(risk_score: int | None) -> int:
    """Points for a secondary-directory risk rating; 0 when absent."""
    if risk_score is None:
        return 0
    for threshold, points in RISK_RATING_TIERS:
        if risk_score >= threshold:
            return points
    return 0


def password_points(pwn_count: int) -> int:
    """Points for a pwned password seen *pwn_count* times."""
    for threshold, points in PASSWORD_TIERS:
        if pwn_count > threshold:
            return points
    return PASSWORD_BASE_POINTS
