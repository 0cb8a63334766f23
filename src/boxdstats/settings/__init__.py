"""boxdstats configuration, read from the environment and an optional .env.

No setting is mandatory: without TMDB_API_KEY the report is built from the
archive alone and every enrichment-derived section stays empty.

Usage:
    from boxdstats.settings import settings

    settings.tmdb.is_configured
    settings.enrichment.detail_batch_size
"""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from boxdstats.settings.base import EnrichmentSettings, LoggingSettings, get_env_file
from boxdstats.settings.sources import LetterboxdSettings, TMDBSettings

__all__ = [
    "EnrichmentSettings",
    "LetterboxdSettings",
    "LoggingSettings",
    "Settings",
    "TMDBSettings",
    "get_masked_settings",
    "settings",
]

ENVIRONMENTS = frozenset({"development", "production", "test"})

MASK = "***MASKED***"

# (section, field) pairs never printed in clear
_SECRET_FIELDS = (("tmdb", "api_key"),)


# =============================================================================
# GLOBAL SETTINGS
# =============================================================================


class Settings(BaseSettings):
    """Every configuration section of a report run.

    Access via the singleton: `from boxdstats.settings import settings`
    """

    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    enrichment: EnrichmentSettings = Field(default_factory=EnrichmentSettings)
    tmdb: TMDBSettings = Field(default_factory=TMDBSettings)
    letterboxd: LetterboxdSettings = Field(default_factory=LetterboxdSettings)

    model_config = SettingsConfigDict(
        env_file=get_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Accept development, production or test (any case)."""
        value = v.strip().lower()
        if value not in ENVIRONMENTS:
            raise ValueError(f"Invalid ENVIRONMENT '{v}'. Valid: {sorted(ENVIRONMENTS)}")
        return value


settings = Settings()


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_masked_settings() -> dict[str, Any]:
    """Dump the current settings with credentials masked.

    Empty credentials are left as-is so an unconfigured key stays visible.

    Returns:
        Plain dictionary, safe to log or print.
    """
    config = settings.model_dump()
    for section, field in _SECRET_FIELDS:
        if config.get(section, {}).get(field):
            config[section][field] = MASK
    return config
