"""Password exposure check: Pwned Passwords range API (k-anonymity).

Only the first five hex characters of the password's SHA-1 are ever
sent.  The service answers with every known suffix sharing that
prefix; the match against the remaining 35 characters happens here.
Neither the password nor its full hash is transmitted, cached or
logged.  The cache stores the suffix table under the prefix.
"""

from __future__ import annotations

import hashlib

import pydantic

from footprint.models import exposure
from footprint.models.result import Ok
from footprint.sources import base
from footprint.utils import logger

log = logger.create_logger("PwnedPasswords")

_RANGE_URL = "https://api.pwnedpasswords.com/range/{prefix}"

PREFIX_LENGTH = 5


def split_hash(password: str) -> tuple[str, str]:
    """Return the ``(prefix, suffix)`` of the password's uppercase SHA-1."""
    digest = hashlib.sha1(password.encode("utf-8")).hexdigest().upper()  # noqa: S324
    return digest[:PREFIX_LENGTH], digest[PREFIX_LENGTH:]


def parse_range(body: str) -> dict[str, int]:
    """Parse ``SUFFIX:COUNT`` lines into a mapping.

    Padding rows (count 0) and malformed lines are dropped.
    """
    table: dict[str, int] = {}
    for line in body.splitlines():
        suffix, sep, count = line.strip().partition(":")
        if not sep:
            continue
        try:
            value = int(count)
        except ValueError:
            continue
        if value > 0:
            table[suffix.upper()] = value
    return table


class PwnedPasswordsSource(base.Source[dict[str, int]]):
    """Exposure count for a password, looked up by hash prefix."""

    name = "pwnedpasswords"
    label = "PwnedPasswords"
    adapter = pydantic.TypeAdapter(dict[str, int])

    async def check(self, password: str) -> exposure.PasswordExposure:
        """Look up *password*; any failure yields ``checked=False``."""
        try:
            prefix, suffix = split_hash(password)
        except UnicodeError:
            log.warn("Password could not be hashed; check skipped")
            return exposure.PasswordExposure(checked=False)

        result = await self._lookup(f"{self.name}_{prefix}", lambda: self._fetch(prefix))
        if not isinstance(result, Ok):
            return exposure.PasswordExposure(checked=False)

        count = result.data.get(suffix, 0)
        log.info("Password check complete", {"pwned": count > 0})
        return exposure.PasswordExposure(checked=True, is_pwned=count > 0, pwn_count=count)

    async def _fetch(self, prefix: str) -> dict[str, int]:  # type: ignore[override]
        body = await self._get_text(_RANGE_URL.format(prefix=prefix), headers={"Add-Padding": "true"})
        return parse_range(body)
