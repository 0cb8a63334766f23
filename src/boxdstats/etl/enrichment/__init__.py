"""Metadata enrichment package.

Classes:
    MetadataCache: Full-detail lookups (genres, credits, runtime...).
    PosterCache: Poster-only lookups.
    MetadataResolver: Protocol implemented by MetadataCache and test fakes.

Functions:
    title_key: Cache key of a (title, year) pair.
"""

from boxdstats.etl.enrichment.cache import (
    MetadataCache,
    MetadataResolver,
    PosterCache,
    TitleYear,
)
from boxdstats.etl.enrichment.keys import normalize_year, title_key

__all__ = [
    "MetadataCache",
    "MetadataResolver",
    "PosterCache",
    "TitleYear",
    "normalize_year",
    "title_key",
]
