"""Normalized movie metadata.

Provider-independent view of an enriched title, produced by the
TMDB normalizer and consumed by the aggregators.
"""

from pydantic import BaseModel, ConfigDict, Field


class Person(BaseModel):
    """Cast or crew member.

    Attributes:
        name: Display name.
        profile_path: TMDB profile image path.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(min_length=1)
    profile_path: str | None = None


class MovieMetadata(BaseModel):
    """Enriched metadata for one unique title.

    Attributes:
        tmdb_id: TMDB identifier.
        title: Provider title.
        genres: Genre names.
        cast: Billed cast, in billing order (at most 10).
        directors: Crew members whose job is exactly "Director".
        runtime: Duration in minutes.
        original_language: ISO 639-1 code.
        origin_country: First ISO 3166-1 origin country code.
        poster_path: TMDB poster image path.
    """

    model_config = ConfigDict(frozen=True)

    tmdb_id: int | None = None
    title: str | None = None
    genres: tuple[str, ...] = ()
    cast: tuple[Person, ...] = ()
    directors: tuple[Person, ...] = ()
    runtime: int | None = Field(default=None, ge=0)
    original_language: str | None = None
    origin_country: str | None = None
    poster_path: str | None = None
