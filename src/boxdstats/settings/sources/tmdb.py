"""TMDB API configuration settings.

REST API used to enrich watched titles with movie metadata.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from boxdstats.settings.base import get_env_file


class TMDBSettings(BaseSettings):
    """TMDB API configuration.

    Attributes:
        api_key: TMDB v3 API key or v4 read access token (optional).
        base_url: TMDB API base URL.
        image_base_url: TMDB image CDN base URL used for poster URLs.
        language: Language for API responses.
        timeout: Per-request timeout in seconds.
    """

    api_key: str = Field(default="", alias="TMDB_API_KEY")
    base_url: str = Field(
        default="https://api.themoviedb.org/3",
        alias="TMDB_BASE_URL",
    )
    image_base_url: str = Field(
        default="https://image.tmdb.org/t/p/w200",
        alias="TMDB_IMAGE_BASE_URL",
    )
    language: str = Field(default="en-US", alias="TMDB_LANGUAGE")
    timeout: float = Field(default=10.0, gt=0.0, alias="TMDB_TIMEOUT")

    model_config = SettingsConfigDict(
        env_file=get_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_configured(self) -> bool:
        """Check if a TMDB credential is configured."""
        return bool(self.api_key and self.api_key != "your_api_key_here")
