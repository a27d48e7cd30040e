"""
Service configuration.

Centralises all environment variable names and default values for
the data source credentials, cache, retry policy, persistence and
server binding.

Uses ``pydantic_settings.BaseSettings`` for automatic environment
variable binding, type coercion, and validation.
"""

from __future__ import annotations

import functools

import pydantic
import pydantic_settings

from footprint.utils import logger

log = logger.create_logger("Config")


class Settings(pydantic_settings.BaseSettings):
    """Runtime configuration loaded from the environment.

    Attributes:
        hibp_api_key: HaveIBeenPwned v3 API key (primary breach source).
        hunter_api_key: Hunter.io API key (discovery source).
        emailrep_api_key: Optional EmailRep key; the service also
            answers unauthenticated requests at a lower rate.
        cache_ttl_seconds: Lifetime of a cached source response.
        rate_limit_delay_seconds: Fixed wait before retrying a 429.
        db_path: SQLite file holding persisted scan summaries.
        host: Bind address for the HTTP server.
        port: Bind port for the HTTP server.
        environment: ``development`` or ``production``.
    """

    model_config = pydantic_settings.SettingsConfigDict(populate_by_name=True)

    hibp_api_key: str = pydantic.Field(default="", validation_alias="HIBP_API_KEY")
    hunter_api_key: str = pydantic.Field(default="", validation_alias="HUNTER_API_KEY")
    emailrep_api_key: str = pydantic.Field(default="", validation_alias="EMAILREP_API_KEY")

    cache_ttl_seconds: float = pydantic.Field(
        default=600.0, gt=0, validation_alias="FOOTPRINT_CACHE_TTL_SECONDS"
    )
    rate_limit_delay_seconds: float = pydantic.Field(
        default=2.0, ge=0, validation_alias="FOOTPRINT_RATE_LIMIT_DELAY_SECONDS"
    )
    db_path: str = pydantic.Field(
        default=".data/footprint.db", validation_alias="FOOTPRINT_DB_PATH"
    )

    host: str = pydantic.Field(default="0.0.0.0", validation_alias="UVICORN_HOST")
    port: int = pydantic.Field(default=3001, validation_alias="UVICORN_PORT")
    environment: str = pydantic.Field(default="development", validation_alias="ENVIRONMENT")

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def configured_sources(self) -> dict[str, bool]:
        """Report which keyed data sources have credentials.

        Returns:
            Mapping of source name to whether it can be queried.
        """
        return {
            "hibp": bool(self.hibp_api_key),
            "xposedornot": True,
            "emailrep": True,
            "hunter": bool(self.hunter_api_key),
            "pwnedpasswords": True,
        }


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loaded once."""
    settings = Settings()
    missing = [name for name, ok in settings.configured_sources().items() if not ok]
    if missing:
        log.warn("Some data sources have no API key and will be skipped", {"sources": ", ".join(missing)})
    return settings
