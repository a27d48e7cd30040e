"""Pydantic models for the public API request and report.

Internal field names follow the data model; serialization aliases
produce the wire names clients already consume (``breach_count``,
``hunter_data``, ``emailrep``, ``password_check`` ...).  Dump with
``by_alias=True``.
"""

from __future__ import annotations

import pydantic

from footprint.models import analysis, exposure


class FootprintRequest(pydantic.BaseModel):
    """Body of a footprint check request.

    Every field is optional at the schema level so that a missing
    email produces the API's own 400 payload rather than a schema
    error.
    """

    email: str | None = None
    password: str | None = pydantic.Field(default=None, repr=False)
    user_id: str | None = None

    @pydantic.field_validator("email")
    @classmethod
    def _strip_email(cls, value: str | None) -> str | None:
        return value.strip() if value is not None else None


class ExposureQuery(pydantic.BaseModel):
    """A validated scan request."""

    email: str
    password: str | None = pydantic.Field(default=None, repr=False)


class ExposureReport(pydantic.BaseModel):
    """The merged and scored report returned to the client."""

    email: str
    score: int = pydantic.Field(ge=0, le=100)
    breach_count: int
    platforms_found: int
    breaches: list[exposure.BreachRecord] = pydantic.Field(default_factory=list)
    discovery: exposure.DiscoveryData = pydantic.Field(serialization_alias="hunter_data")
    reputation: exposure.ReputationData | None = pydantic.Field(serialization_alias="emailrep")
    password_exposure: exposure.PasswordExposure = pydantic.Field(serialization_alias="password_check")
    recommendations: list[str] = pydantic.Field(default_factory=list)
    summary: str
    sources: dict[str, analysis.SourceStatus] = pydantic.Field(default_factory=dict)
    score_breakdown: analysis.ScoreBreakdown = pydantic.Field(default_factory=analysis.ScoreBreakdown)

    def to_response(self) -> dict[str, object]:
        """Serialize with the public wire field names."""
        return self.model_dump(mode="json", by_alias=True)
