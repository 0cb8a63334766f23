"""Engine data types package.

Exports TypedDict definitions for raw provider payloads and the
normalized models shared by the enrichment and aggregation layers.

Usage:
    from boxdstats.etl.types import MovieMetadata, Row
"""

from boxdstats.etl.types.letterboxd import ResolvedLink, Row
from boxdstats.etl.types.metadata import MovieMetadata, Person
from boxdstats.etl.types.tmdb import (
    TMDBCastData,
    TMDBCreditsData,
    TMDBCrewData,
    TMDBGenreData,
    TMDBMovieDetails,
    TMDBSearchResponse,
    TMDBSearchResult,
)

__all__ = [
    # Letterboxd
    "Row",
    "ResolvedLink",
    # Normalized
    "MovieMetadata",
    "Person",
    # TMDB
    "TMDBCastData",
    "TMDBCreditsData",
    "TMDBCrewData",
    "TMDBGenreData",
    "TMDBMovieDetails",
    "TMDBSearchResponse",
    "TMDBSearchResult",
]
