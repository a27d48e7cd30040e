"""Tests for footprint.analysis.scoring: weights, categories and calculator."""

from __future__ import annotations

import random

import pytest
from conftest import make_findings

from footprint.analysis.scoring import breaches, calculator, discovery, password, reputation, weights
from footprint.models import exposure


class TestWeights:
    """Tests for risk_rating_points() and password_points()."""

    @pytest.mark.parametrize(
        ("risk_score", "expected"),
        [(None, 0), (0, 0), (2, 0), (3, 5), (4, 5), (5, 10), (7, 10), (8, 15), (10, 15)],
    )
    def test_risk_rating_points(self, risk_score: int | None, expected: int) -> None:
        assert weights.risk_rating_points(risk_score) == expected

    @pytest.mark.parametrize(
        ("pwn_count", "expected"),
        [(1, 15), (1_000, 15), (1_001, 20), (10_000, 20), (10_001, 25), (100_000, 25), (100_001, 30)],
    )
    def test_password_points_strictly_above(self, pwn_count: int, expected: int) -> None:
        assert weights.password_points(pwn_count) == expected


class TestBreaches:
    """Tests for breaches.calculate() and calculate_risk_rating()."""

    def test_none(self) -> None:
        result = breaches.calculate(make_findings())
        assert result.points == 0
        assert result.issues == []

    def test_twelve_each(self) -> None:
        assert breaches.calculate(make_findings(primary=2, secondary=1)).points == 36

    def test_capped(self) -> None:
        assert breaches.calculate(make_findings(primary=10)).points == 70

    def test_issue_text(self) -> None:
        assert breaches.calculate(make_findings(primary=1)).issues == ["Found in 1 data breach"]

    def test_risk_rating_absent(self) -> None:
        assert breaches.calculate_risk_rating(make_findings()).points == 0

    def test_risk_rating_high(self) -> None:
        result = breaches.calculate_risk_rating(make_findings(secondary=1, risk_score=9))
        assert result.points == 15
        assert result.issues == ["Breach risk rated 9/10"]


class TestDiscovery:
    """Tests for the discovery categories."""

    def test_discovered(self) -> None:
        assert discovery.calculate_discovered(make_findings(discovered=2)).points == 10

    def test_discovered_capped(self) -> None:
        assert discovery.calculate_discovered(make_findings(discovered=9)).points == 25

    def test_domain(self) -> None:
        assert discovery.calculate_domain(make_findings(domain_contacts=4)).points == 12

    def test_domain_capped(self) -> None:
        assert discovery.calculate_domain(make_findings(domain_contacts=50)).points == 20


class TestReputation:
    """Tests for reputation.calculate()."""

    def test_missing_reputation(self) -> None:
        assert reputation.calculate(make_findings()).points == 0

    def test_each_flag_independently(self) -> None:
        rep = exposure.ReputationData(suspicious=True, credentials_leaked=True, malicious_activity=True, blacklisted=True)
        result = reputation.calculate(make_findings(reputation=rep))
        assert result.points == 65
        assert len(result.issues) == 4

    def test_single_flag(self) -> None:
        rep = exposure.ReputationData(blacklisted=True)
        assert reputation.calculate(make_findings(reputation=rep)).points == 15


class TestPassword:
    """Tests for password.calculate()."""

    def test_unchecked_costs_nothing(self) -> None:
        unchecked = exposure.PasswordExposure(checked=False, is_pwned=True, pwn_count=999_999)
        assert password.calculate(make_findings(password=unchecked)).points == 0

    def test_not_pwned(self) -> None:
        clean = exposure.PasswordExposure(checked=True, is_pwned=False)
        assert password.calculate(make_findings(password=clean)).points == 0

    def test_pwned_500000(self) -> None:
        pwned = exposure.PasswordExposure(checked=True, is_pwned=True, pwn_count=500_000)
        result = password.calculate(make_findings(password=pwned))
        assert result.points == 30
        assert result.issues == ["Password seen 500,000 times in breaches"]


class TestCalculatePrivacyScore:
    """Tests for calculate_privacy_score()."""

    def test_minimal_footprint(self) -> None:
        result = calculator.calculate_privacy_score(make_findings())
        assert result.total_score == 100
        assert result.factors == []

    def test_five_combined_breaches(self) -> None:
        result = calculator.calculate_privacy_score(make_findings(primary=3, secondary=2))
        assert result.total_score == 100 - min(5 * 12, 70)
        assert result.total_score == 40

    def test_pwned_password_deduction(self) -> None:
        pwned = exposure.PasswordExposure(checked=True, is_pwned=True, pwn_count=500_000)
        result = calculator.calculate_privacy_score(make_findings(password=pwned))
        assert result.categories["password"].points == 30
        assert result.total_score == 70

    def test_clamped_at_zero(self) -> None:
        rep = exposure.ReputationData(suspicious=True, credentials_leaked=True, malicious_activity=True, blacklisted=True)
        pwned = exposure.PasswordExposure(checked=True, is_pwned=True, pwn_count=500_000)
        result = calculator.calculate_privacy_score(
            make_findings(primary=10, risk_score=10, discovered=10, domain_contacts=10, reputation=rep, password=pwned)
        )
        assert result.total_score == 0
        assert result.total_deduction == 70 + 15 + 25 + 20 + 65 + 30

    def test_factors_ranked_by_points(self) -> None:
        result = calculator.calculate_privacy_score(make_findings(primary=1, discovered=5))
        assert result.factors == ["5 publicly discoverable contacts", "Found in 1 data breach"]

    def test_random_findings_stay_in_range_and_are_deterministic(self) -> None:
        rng = random.Random(1234)
        for _ in range(200):
            kwargs = {
                "primary": rng.randint(0, 8),
                "secondary": rng.randint(0, 8),
                "risk_score": rng.choice([None, *range(11)]),
                "discovered": rng.randint(0, 10),
                "domain_contacts": rng.randint(0, 10),
                "reputation": rng.choice(
                    [None, exposure.ReputationData(suspicious=rng.random() < 0.5, blacklisted=rng.random() < 0.5)]
                ),
                "password": exposure.PasswordExposure(
                    checked=True, is_pwned=rng.random() < 0.5, pwn_count=rng.randint(0, 500_000)
                ),
            }
            first = calculator.calculate_privacy_score(make_findings(**kwargs))
            second = calculator.calculate_privacy_score(make_findings(**kwargs))
            assert 0 <= first.total_score <= 100
            assert first.model_dump() == second.model_dump()
