"""Base configuration settings.

Contains foundational settings for logging and enrichment pacing.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# =============================================================================
# PROJECT ROOT DETECTION
# =============================================================================

_PROJECT_ROOT = Path(__file__).parent.parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


def get_project_root() -> Path:
    """Get project root directory."""
    return _PROJECT_ROOT


def get_env_file() -> Path:
    """Get .env file path."""
    return _ENV_FILE


# =============================================================================
# LOGGING SETTINGS
# =============================================================================


class LoggingSettings(BaseSettings):
    """Logging configuration.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_dir: Log files directory.
    """

    level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_dir: str = Field(default="logs", alias="LOG_DIR")

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid LOG_LEVEL. Valid: {valid_levels}")
        return v_upper

    @property
    def log_path(self) -> Path:
        """Absolute log directory (relative values resolve from project root)."""
        path = Path(self.log_dir)
        return path if path.is_absolute() else _PROJECT_ROOT / path


# =============================================================================
# ENRICHMENT SETTINGS
# =============================================================================


class EnrichmentSettings(BaseSettings):
    """Metadata enrichment batching configuration.

    Attributes:
        detail_batch_size: Concurrent full-detail lookups per batch.
        poster_batch_size: Concurrent poster-only lookups per batch.
        batch_interval: Pause between two batches (seconds).
    """

    detail_batch_size: int = Field(default=25, ge=1, alias="ENRICH_DETAIL_BATCH_SIZE")
    poster_batch_size: int = Field(default=5, ge=1, alias="ENRICH_POSTER_BATCH_SIZE")
    batch_interval: float = Field(default=0.2, ge=0.0, alias="ENRICH_BATCH_INTERVAL")

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )
