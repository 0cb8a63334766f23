"""TMDB data normalizer.

Transforms raw TMDB movie details (with appended credits) into the
provider-independent MovieMetadata model.
"""

import logging
from typing import Any

from pydantic import ValidationError

from boxdstats.etl.types import (
    MovieMetadata,
    Person,
    TMDBCastData,
    TMDBCrewData,
    TMDBGenreData,
    TMDBMovieDetails,
)

logger = logging.getLogger(__name__)


class TMDBNormalizer:
    """Normalizes TMDB API details into MovieMetadata.

    Malformed members (missing names, wrong types) are dropped rather
    than failing the whole title.
    """

    # Crew jobs counted as directors
    DIRECTOR_JOBS = {"Director"}

    # Maximum actors to keep per film
    MAX_ACTORS = 10

    # -------------------------------------------------------------------------
    # Film Normalization
    # -------------------------------------------------------------------------

    def normalize_details(self, raw: TMDBMovieDetails) -> MovieMetadata | None:
        """Normalize movie details.

        Args:
            raw: Raw TMDB details payload.

        Returns:
            Normalized metadata, or None if the payload is unusable.
        """
        credits: Any = raw.get("credits") or {}
        if not isinstance(credits, dict):
            credits = {}

        try:
            return MovieMetadata(
                tmdb_id=raw.get("id"),
                title=self._clean_string(raw.get("title")),
                genres=tuple(self._extract_genres(raw.get("genres") or [])),
                cast=tuple(self._extract_actors(credits.get("cast") or [])),
                directors=tuple(self._extract_directors(credits.get("crew") or [])),
                runtime=self._validate_runtime(raw.get("runtime")),
                original_language=self._clean_string(raw.get("original_language")),
                origin_country=self._first_country(raw.get("origin_country")),
                poster_path=self._clean_string(raw.get("poster_path")),
            )
        except (ValidationError, TypeError) as e:
            logger.warning(f"Failed to normalize film {raw.get('id')}: {e}")
            return None

    # -------------------------------------------------------------------------
    # Credits Normalization
    # -------------------------------------------------------------------------

    def _extract_actors(self, cast: list[TMDBCastData]) -> list[Person]:
        """Extract top billed actors.

        Args:
            cast: Raw cast data.

        Returns:
            Up to MAX_ACTORS persons in billing order.
        """
        members = [m for m in cast if isinstance(m, dict)]

        def billing(pair: tuple[int, TMDBCastData]) -> tuple[int, int]:
            index, member = pair
            order = member.get("order")
            return (order if isinstance(order, int) else index, index)

        ordered = sorted(enumerate(members), key=billing)
        actors = []
        for _, member in ordered:
            person = self._to_person(member)
            if person:
                actors.append(person)
            if len(actors) >= self.MAX_ACTORS:
                break
        return actors

    def _extract_directors(self, crew: list[TMDBCrewData]) -> list[Person]:
        """Extract crew members whose job is exactly Director.

        Args:
            crew: Raw crew data.

        Returns:
            Directors in credit order.
        """
        directors = []
        for member in crew:
            if not isinstance(member, dict) or member.get("job") not in self.DIRECTOR_JOBS:
                continue
            person = self._to_person(member)
            if person:
                directors.append(person)
        return directors

    def _to_person(self, member: TMDBCastData | TMDBCrewData) -> Person | None:
        """Build a Person, skipping members without a usable name."""
        name = self._clean_string(member.get("name"))
        if not name:
            return None
        return Person(name=name, profile_path=self._clean_string(member.get("profile_path")))

    def _extract_genres(self, genres: list[TMDBGenreData]) -> list[str]:
        """Extract genre names.

        Args:
            genres: Raw genre objects.

        Returns:
            Non-empty genre names.
        """
        names = []
        for genre in genres:
            if not isinstance(genre, dict):
                continue
            name = self._clean_string(genre.get("name"))
            if name:
                names.append(name)
        return names

    # -------------------------------------------------------------------------
    # Utility Methods
    # -------------------------------------------------------------------------

    @staticmethod
    def _clean_string(value: Any) -> str | None:
        """Clean and normalize a string value.

        Args:
            value: Value to clean.

        Returns:
            Cleaned string or None.
        """
        if not isinstance(value, str):
            return None
        cleaned = value.strip()
        return cleaned if cleaned else None

    @classmethod
    def _first_country(cls, value: Any) -> str | None:
        """Get the first origin country code.

        Args:
            value: Raw origin_country list.

        Returns:
            First non-empty code or None.
        """
        if not isinstance(value, list) or not value:
            return None
        return cls._clean_string(value[0])

    @staticmethod
    def _validate_runtime(runtime: Any) -> int | None:
        """Validate runtime value.

        Args:
            runtime: Runtime in minutes.

        Returns:
            Valid runtime or None.
        """
        if isinstance(runtime, bool) or not isinstance(runtime, int | float):
            return None
        if runtime <= 0:
            return None
        return int(runtime)
