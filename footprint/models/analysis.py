"""Pydantic models for merged findings and score breakdowns."""

from __future__ import annotations

from typing import Literal

import pydantic

from footprint.models import exposure

SourceStatus = Literal["ok", "cached", "partial", "unavailable", "skipped"]


class Findings(pydantic.BaseModel):
    """Everything the data sources reported for one address.

    This is the single input to scoring and recommendations.
    ``breaches`` lists primary-directory records first, then
    secondary-directory records, each tagged with its source.
    """

    email: str
    breaches: list[exposure.BreachRecord] = pydantic.Field(default_factory=list)
    breach_analytics: exposure.BreachAnalytics | None = None
    discovery: exposure.DiscoveryData = pydantic.Field(default_factory=exposure.DiscoveryData)
    reputation: exposure.ReputationData | None = None
    password_exposure: exposure.PasswordExposure = pydantic.Field(
        default_factory=exposure.PasswordExposure
    )
    source_status: dict[str, SourceStatus] = pydantic.Field(default_factory=dict)

    @property
    def breach_count(self) -> int:
        return len(self.breaches)

    @property
    def primary_breach_count(self) -> int:
        return sum(1 for b in self.breaches if b.source == "PrimaryBreachDB")

    @property
    def secondary_breach_count(self) -> int:
        return sum(1 for b in self.breaches if b.source == "SecondaryBreachDB")

    @property
    def platforms_found(self) -> int:
        return self.discovery.emails_found

    @property
    def risk_score(self) -> int | None:
        """Secondary directory risk rating (0-10), when analytics exist."""
        if self.breach_analytics is None:
            return None
        return self.breach_analytics.risk_score

    @property
    def password_pwned(self) -> bool:
        exposure_ = self.password_exposure
        return exposure_.checked and exposure_.is_pwned


class CategoryDeduction(pydantic.BaseModel):
    """Points deducted for one scoring category."""

    points: int = 0
    max_points: int = 0
    issues: list[str] = pydantic.Field(default_factory=list)


class ScoreBreakdown(pydantic.BaseModel):
    """Detailed breakdown of how the score was calculated."""

    total_score: int = 100
    categories: dict[str, CategoryDeduction] = pydantic.Field(default_factory=dict)
    factors: list[str] = pydantic.Field(default_factory=list)

    @property
    def total_deduction(self) -> int:
        return sum(cat.points for cat in self.categories.values())
