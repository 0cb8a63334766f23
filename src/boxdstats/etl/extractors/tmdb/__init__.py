"""TMDB extractor package.

Provides movie lookups against The Movie Database API.

Classes:
    TMDBClient: Async HTTP client (search, details with credits).
    TMDBNormalizer: Details to MovieMetadata transformation.

Exceptions:
    TMDBClientError: Base client error.
    TMDBRateLimitError: Rate limit exceeded.
    TMDBNotFoundError: Resource not found.

Usage:
    from boxdstats.etl.extractors.tmdb import TMDBClient

    async with TMDBClient() as client:
        match = await client.search_movie("Alien", 1979)
"""

from boxdstats.etl.extractors.tmdb.client import (
    TMDBClient,
    TMDBClientError,
    TMDBNotFoundError,
    TMDBRateLimitError,
)
from boxdstats.etl.extractors.tmdb.normalizer import TMDBNormalizer

__all__ = [
    "TMDBClient",
    "TMDBNormalizer",
    "TMDBClientError",
    "TMDBRateLimitError",
    "TMDBNotFoundError",
]
