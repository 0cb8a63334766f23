"""Letterboxd configuration settings.

Short-link resolution and profile scraping for the social ranking.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from boxdstats.settings.base import get_env_file


class LetterboxdSettings(BaseSettings):
    """Letterboxd scraping configuration.

    Attributes:
        base_url: Letterboxd site root (profile pages live below it).
        short_link_marker: Substring identifying a short link in comments.
        timeout: Per-request timeout in seconds.
        avatar_top_n: Number of top users whose avatar is fetched.
        poster_top_n: Number of top users whose referenced posters are fetched.
        batch_size: Concurrent link/avatar requests per batch.
        user_agent: HTTP User-Agent for scraping.
    """

    base_url: str = Field(default="https://letterboxd.com", alias="LETTERBOXD_BASE_URL")
    short_link_marker: str = Field(default="boxd.it", alias="LETTERBOXD_SHORT_LINK_MARKER")
    timeout: float = Field(default=10.0, gt=0.0, alias="LETTERBOXD_TIMEOUT")
    avatar_top_n: int = Field(default=15, ge=0, alias="LETTERBOXD_AVATAR_TOP_N")
    poster_top_n: int = Field(default=10, ge=0, alias="LETTERBOXD_POSTER_TOP_N")
    batch_size: int = Field(default=5, ge=1, alias="LETTERBOXD_BATCH_SIZE")
    user_agent: str = Field(
        default="boxdstats/1.0",
        alias="USER_AGENT",
    )

    model_config = SettingsConfigDict(
        env_file=get_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )
