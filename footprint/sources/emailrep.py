"""Reputation service: EmailRep.io.

Any non-2xx response means "no opinion", which is reported as
unavailable rather than clean.
"""

from __future__ import annotations

import urllib.parse
from typing import Any

import pydantic

from footprint.models import exposure
from footprint.sources import base
from footprint.utils import logger

log = logger.create_logger("EmailRep")

_EMAILREP_URL = "https://emailrep.io/{email}"


def normalize_reputation(payload: Any) -> exposure.ReputationData:
    """Map an EmailRep response onto ``ReputationData``.

    Only a literal ``true`` sets a flag.
    """
    data = base.as_dict(payload)
    details = base.as_dict(data.get("details"))
    label = data.get("reputation")
    return exposure.ReputationData(
        suspicious=data.get("suspicious") is True,
        credentials_leaked=details.get("credentials_leaked") is True,
        malicious_activity=details.get("malicious_activity") is True,
        blacklisted=details.get("blacklisted") is True,
        reputation_label=str(label) if label else None,
    )


class EmailRepSource(base.Source[exposure.ReputationData]):
    """Reputation flags for an address."""

    name = "emailrep"
    label = "EmailRep"
    adapter = pydantic.TypeAdapter(exposure.ReputationData)

    async def _fetch(self, email: str) -> exposure.ReputationData:
        headers = {"Key": self._settings.emailrep_api_key} if self._settings.emailrep_api_key else None
        url = _EMAILREP_URL.format(email=urllib.parse.quote(email, safe="@"))
        payload = await self._get_json(url, headers=headers)
        if payload is None:
            self._raise_for_status(self.label, 404)

        reputation = normalize_reputation(payload)
        log.info(
            "Reputation retrieved",
            {"reputation": reputation.reputation_label, "suspicious": reputation.suspicious},
        )
        return reputation
