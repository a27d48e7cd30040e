"""Email address helpers."""

from __future__ import annotations

import re

# Basic ``local@domain.tld`` shape; deliverability is not checked.
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(email: str) -> bool:
    """Return True when *email* has the ``local@domain.tld`` shape.

    Strings that cannot be encoded as UTF-8 (lone surrogates) are
    rejected.
    """
    try:
        email.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return bool(_EMAIL_RE.match(email))


def extract_domain(email: str) -> str:
    """Return the lower-cased domain part of *email*.

    Args:
        email: An address that passed :func:`is_valid_email`.

    Returns:
        Everything after the last ``@``, e.g. ``"example.com"``.
    """
    return email.rsplit("@", 1)[-1].lower()
