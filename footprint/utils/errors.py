"""
Exception types raised inside the scan pipeline, plus a helper for
consistent error message extraction.
"""

from __future__ import annotations


class FootprintError(Exception):
    """Base class for all scan pipeline errors."""


class UpstreamStatusError(FootprintError):
    """An external data source answered with an unexpected HTTP status."""

    def __init__(self, source: str, status: int) -> None:
        super().__init__(f"{source} API error: {status}")
        self.source = source
        self.status = status


class RateLimitedError(UpstreamStatusError):
    """An external data source answered with HTTP 429."""

    def __init__(self, source: str) -> None:
        super().__init__(source, 429)


class SourceNotConfiguredError(FootprintError):
    """A data source needs a credential that has not been provided."""

    def __init__(self, source: str) -> None:
        super().__init__(f"{source} is not configured")
        self.source = source


class SourceUnavailableError(FootprintError):
    """A data source could not produce any answer for this request."""


def get_error_message(error: BaseException | object) -> str:
    """
    Safely extract an error message from an unknown error type.
    Falls back to the exception class name for empty messages.
    """
    if isinstance(error, BaseException):
        return str(error) or type(error).__name__
    return "Unknown error"
