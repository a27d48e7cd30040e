"""Recommendation engine.

Builds the ordered advisory list from merged findings.  Blocks are
appended in a fixed order (breaches, discovery, reputation flags,
password exposure, minimal-footprint fallback) and clients rely on
that order.
"""

from __future__ import annotations

from footprint.analysis.scoring import weights
from footprint.models import analysis

HIGH_RISK_RATING = weights.RISK_RATING_TIERS[0][0]

BREACH_ADVICE = (
    "Change passwords for affected accounts immediately",
    "Enable two-factor authentication on all important accounts",
    "Monitor your credit reports regularly",
)
HIGH_RISK_ADVICE = "Your breach exposure is rated high risk - prioritise securing email, banking and cloud accounts"
WEAK_STORAGE_ADVICE = (
    "Some breached services stored passwords in plaintext or weak hashes - treat those passwords as public"
)

DISCOVERY_ADVICE = (
    "Consider using a professional email for business communications only",
    "Review your email privacy settings",
    "Monitor for unauthorized use of your email on public platforms",
)

SUSPICIOUS_ADVICE = "Email appears suspicious on some checks - review public profiles linked to it"
CREDENTIALS_LEAKED_ADVICE = "Your email appears in leaked credentials - reset passwords and enable 2FA"
MALICIOUS_ACTIVITY_ADVICE = "Your email has been linked to malicious activity - check for account takeover"
BLACKLISTED_ADVICE = "Your email is blacklisted by some services - investigate recent activity"

PASSWORD_SEVERITY_ADVICE: tuple[tuple[int, str], ...] = (
    (100_000, "This password is extremely common in breaches and is tried first by attackers - change it everywhere now"),
    (10_000, "This password appears in many breaches - change it on every account that uses it"),
    (1_000, "This password has been exposed in multiple breaches - replace it as soon as possible"),
)
PASSWORD_BASE_ADVICE = "This password has appeared in a data breach - replace it"
PASSWORD_HYGIENE_ADVICE = (
    "Stop using this password on every account",
    "Use a password manager to generate unique passwords",
)

MINIMAL_FOOTPRINT_ADVICE = (
    "Your digital footprint appears minimal - maintain good privacy practices",
    "Use unique passwords for each account",
)


def _password_severity(pwn_count: int) -> str:
    for threshold, advice in PASSWORD_SEVERITY_ADVICE:
        if pwn_count > threshold:
            return advice
    return PASSWORD_BASE_ADVICE


def generate_recommendations(findings: analysis.Findings) -> list[str]:
    """Return the ordered advisory strings for *findings*."""
    recommendations: list[str] = []

    if findings.breach_count:
        recommendations.extend(BREACH_ADVICE)
        analytics = findings.breach_analytics
        if analytics is not None:
            if analytics.risk_score is not None and analytics.risk_score >= HIGH_RISK_RATING:
                recommendations.append(HIGH_RISK_ADVICE)
            if analytics.has_weak_password_storage:
                recommendations.append(WEAK_STORAGE_ADVICE)

    if findings.platforms_found:
        recommendations.extend(DISCOVERY_ADVICE)

    reputation = findings.reputation
    if reputation is not None:
        if reputation.suspicious:
            recommendations.append(SUSPICIOUS_ADVICE)
        if reputation.credentials_leaked:
            recommendations.append(CREDENTIALS_LEAKED_ADVICE)
        if reputation.malicious_activity:
            recommendations.append(MALICIOUS_ACTIVITY_ADVICE)
        if reputation.blacklisted:
            recommendations.append(BLACKLISTED_ADVICE)

    if findings.password_pwned:
        recommendations.append(_password_severity(findings.password_exposure.pwn_count))
        recommendations.extend(PASSWORD_HYGIENE_ADVICE)

    suspicious = reputation is not None and reputation.suspicious
    if not findings.breach_count and not findings.platforms_found and not suspicious and not findings.password_pwned:
        recommendations.extend(MINIMAL_FOOTPRINT_ADVICE)

    return recommendations
