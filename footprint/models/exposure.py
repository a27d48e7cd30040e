"""Pydantic models for normalized data source findings.

Each external API is mapped into one of these shapes with an
explicit default for every optional upstream field, so scoring
never depends on an uncommon-but-legal upstream response.
"""

from __future__ import annotations

from typing import Annotated, Literal

import pydantic

BreachSource = Literal["PrimaryBreachDB", "SecondaryBreachDB"]


def _non_negative_int(value: object) -> int | None:
    """Coerce an upstream count to a non-negative int, else ``None``."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return None
    return number if number >= 0 else None


def _data_classes(value: object) -> list[str]:
    """Accept a list or a ``;``-separated string; missing becomes ``[]``."""
    if not value:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(";") if part.strip()]
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return []


Count = Annotated[int | None, pydantic.BeforeValidator(_non_negative_int)]
DataClasses = Annotated[list[str], pydantic.BeforeValidator(_data_classes)]


# ── Breaches ────────────────────────────────────────────────────


class BreachRecord(pydantic.BaseModel):
    """A single breach an address appeared in, tagged with its source."""

    name: str
    domain: str | None = None
    breach_date: str | None = None
    affected_count: Count = pydantic.Field(default=None, serialization_alias="pwn_count")
    description: str | None = None
    data_classes: DataClasses = pydantic.Field(default_factory=list)
    source: BreachSource


class BreachDetail(pydantic.BaseModel):
    """Per-breach enrichment from the secondary directory's analytics."""

    name: str
    domain: str | None = None
    breach_date: str | None = None
    affected_count: Count = None
    description: str | None = None
    data_classes: DataClasses = pydantic.Field(default_factory=list)
    password_risk: str | None = None


class BreachAnalytics(pydantic.BaseModel):
    """Aggregate risk metrics for an address from the secondary directory."""

    risk_score: int | None = None
    risk_label: str | None = None
    plaintext_passwords: int = 0
    easy_to_crack_passwords: int = 0
    strong_hash_passwords: int = 0
    unknown_password_storage: int = 0
    details: list[BreachDetail] = pydantic.Field(default_factory=list)

    @pydantic.field_validator("risk_score", mode="before")
    @classmethod
    def _clamp_risk(cls, value: object) -> int | None:
        score = _non_negative_int(value)
        return None if score is None else min(score, 10)

    @property
    def has_weak_password_storage(self) -> bool:
        """True when any breach stored passwords in plaintext or weakly hashed."""
        return self.plaintext_passwords > 0 or self.easy_to_crack_passwords > 0


class SecondaryBreachData(pydantic.BaseModel):
    """Breach names from the basic check plus optional analytics."""

    breaches: list[str] = pydantic.Field(default_factory=list)
    analytics: BreachAnalytics | None = None


# ── Discovery ───────────────────────────────────────────────────


class Contact(pydantic.BaseModel):
    """A publicly discoverable address associated with a domain."""

    value: str
    type: str | None = None
    confidence: int | None = None
    first_name: str | None = None
    last_name: str | None = None
    position: str | None = None
    sources_count: int = 0


class DiscoveryData(pydantic.BaseModel):
    """Domain metadata and the contacts found for the address's domain."""

    domain: str | None = None
    confidence: int | None = None
    country: str | None = None
    is_disposable: bool = pydantic.Field(default=False, serialization_alias="disposable")
    is_webmail: bool = pydantic.Field(default=False, serialization_alias="webmail")
    discovered_contacts: list[Contact] = pydantic.Field(
        default_factory=list, serialization_alias="discover_emails"
    )
    domain_contacts: list[Contact] = pydantic.Field(
        default_factory=list, serialization_alias="domain_search_emails"
    )

    @pydantic.field_validator("confidence", mode="before")
    @classmethod
    def _clamp_confidence(cls, value: object) -> int | None:
        score = _non_negative_int(value)
        return None if score is None else min(score, 100)

    @pydantic.computed_field  # type: ignore[prop-decorator]
    @property
    def emails_found(self) -> int:
        return len(self.discovered_contacts) + len(self.domain_contacts)


# ── Reputation ──────────────────────────────────────────────────


class ReputationData(pydantic.BaseModel):
    """Reputation flags consumed by scoring and recommendations."""

    suspicious: bool = False
    credentials_leaked: bool = False
    malicious_activity: bool = False
    blacklisted: bool = False
    reputation_label: str | None = pydantic.Field(default=None, serialization_alias="reputation")


# ── Password ────────────────────────────────────────────────────


class PasswordExposure(pydantic.BaseModel):
    """Outcome of the k-anonymity password lookup.

    ``checked`` is False when no password was supplied or the lookup
    failed; ``is_pwned`` is only meaningful when ``checked`` is True.
    """

    checked: bool = False
    is_pwned: bool = False
    pwn_count: int = 0
