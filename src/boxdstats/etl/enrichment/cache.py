"""Run-scoped metadata and poster caches.

Each unique Title Key is looked up at most once per run. A failed or
empty lookup stores None, which is never retried. Concurrent requests
for the same key share one lookup through a per-key lock.
"""

import asyncio
import logging
from collections.abc import Iterable, Sequence
from typing import Generic, Protocol, TypeVar

from boxdstats.etl.enrichment.keys import YearLike, normalize_year, title_key
from boxdstats.etl.extractors.tmdb import TMDBClient, TMDBClientError, TMDBNormalizer
from boxdstats.etl.types import MovieMetadata
from boxdstats.etl.utils import BatchRateLimiter
from boxdstats.settings import settings

logger = logging.getLogger(__name__)

V = TypeVar("V")

TitleYear = tuple[str, YearLike]


# =============================================================================
# RESOLVER PROTOCOL
# =============================================================================


class MetadataResolver(Protocol):
    """Resolves (title, year) pairs to enriched metadata."""

    def get(self, title: str, year: YearLike = None) -> MovieMetadata | None:
        """Return cached metadata without any network call."""
        ...

    async def get_or_fetch(self, title: str, year: YearLike = None) -> MovieMetadata | None:
        """Return cached metadata, looking it up on a miss."""
        ...

    async def resolve_many(self, pairs: Iterable[TitleYear]) -> list[MovieMetadata | None]:
        """Resolve pairs in paced batches; one result per input pair."""
        ...


# =============================================================================
# BASE CACHE
# =============================================================================


class _LookupCache(Generic[V]):
    """Keyed single-flight cache over an async lookup.

    Attributes:
        hits: Requests answered from the cache.
        misses: Lookups actually performed.
    """

    def __init__(self, limiter: BatchRateLimiter) -> None:
        self._limiter = limiter
        self._entries: dict[str, V | None] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    @property
    def resolved(self) -> int:
        """Number of cached keys holding a value."""
        return sum(1 for value in self._entries.values() if value is not None)

    async def _lookup(self, title: str, year: int | None) -> V | None:
        raise NotImplementedError

    async def _get_or_fetch_key(self, key: str, title: str, year: YearLike) -> V | None:
        if key in self._entries:
            self.hits += 1
            return self._entries[key]

        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            if key in self._entries:
                self.hits += 1
                return self._entries[key]

            self.misses += 1
            value = await self._lookup(title.strip(), normalize_year(year))
            self._entries[key] = value
            return value

    async def _resolve_pairs(self, pairs: Iterable[TitleYear]) -> list[V | None]:
        """Resolve pairs through unique keys; only cache misses are paced."""
        pair_list = list(pairs)
        keys = [title_key(title, year) for title, year in pair_list]

        resolved: dict[str, V | None] = {}
        pending: dict[str, TitleYear] = {}
        for key, pair in zip(keys, pair_list, strict=True):
            if key in resolved or key in pending:
                continue
            if key in self._entries:
                self.hits += 1
                resolved[key] = self._entries[key]
            else:
                pending[key] = pair

        items: Sequence[tuple[str, TitleYear]] = list(pending.items())
        values = await self._limiter.map(
            items,
            lambda item: self._get_or_fetch_key(item[0], item[1][0], item[1][1]),
        )
        resolved.update((key, value) for (key, _), value in zip(items, values, strict=True))
        return [resolved[key] for key in keys]


# =============================================================================
# METADATA CACHE
# =============================================================================


class MetadataCache(_LookupCache[MovieMetadata]):
    """Full-detail enrichment cache (search, then details with credits).

    Without a configured client every lookup resolves None and no
    request is issued.
    """

    def __init__(
        self,
        client: TMDBClient | None,
        limiter: BatchRateLimiter | None = None,
        normalizer: TMDBNormalizer | None = None,
    ) -> None:
        """Initialize cache.

        Args:
            client: Open TMDB client, or None to disable enrichment.
            limiter: Batch pacing (default: detail batch size from settings).
            normalizer: Details normalizer.
        """
        super().__init__(
            limiter
            or BatchRateLimiter(
                settings.enrichment.detail_batch_size,
                settings.enrichment.batch_interval,
            )
        )
        self._client = client
        self._normalizer = normalizer or TMDBNormalizer()

    @property
    def enabled(self) -> bool:
        """Check whether lookups can reach the provider."""
        return self._client is not None and self._client.is_enabled

    def get(self, title: str, year: YearLike = None) -> MovieMetadata | None:
        """Return cached metadata without any network call.

        Args:
            title: Movie title.
            year: Release year.

        Returns:
            Cached metadata or None (absent or negative entry).
        """
        return self._entries.get(title_key(title, year))

    async def get_or_fetch(self, title: str, year: YearLike = None) -> MovieMetadata | None:
        """Return cached metadata, looking it up on a miss.

        Args:
            title: Movie title.
            year: Release year.

        Returns:
            Metadata or None when unavailable.
        """
        return await self._get_or_fetch_key(title_key(title, year), title, year)

    async def resolve_many(self, pairs: Iterable[TitleYear]) -> list[MovieMetadata | None]:
        """Resolve pairs in paced batches.

        Args:
            pairs: (title, year) pairs, duplicates allowed.

        Returns:
            One result per input pair, in input order.
        """
        return await self._resolve_pairs(pairs)

    async def _lookup(self, title: str, year: int | None) -> MovieMetadata | None:
        if not title or self._client is None or not self._client.is_enabled:
            return None

        try:
            match = await self._client.search_movie(title, year)
            if not match or not match.get("id"):
                logger.debug(f"No TMDB match for {title} ({year or 'N/A'})")
                return None
            details = await self._client.get_movie_details(match["id"])
        except TMDBClientError as e:
            logger.warning(f"Metadata lookup failed for {title} ({year or 'N/A'}): {e}")
            return None

        return self._normalizer.normalize_details(details)


# =============================================================================
# POSTER CACHE
# =============================================================================


class PosterCache(_LookupCache[str]):
    """Poster-only enrichment cache (search step only)."""

    def __init__(
        self,
        client: TMDBClient | None,
        limiter: BatchRateLimiter | None = None,
    ) -> None:
        """Initialize cache.

        Args:
            client: Open TMDB client, or None to disable enrichment.
            limiter: Batch pacing (default: poster batch size from settings).
        """
        super().__init__(
            limiter
            or BatchRateLimiter(
                settings.enrichment.poster_batch_size,
                settings.enrichment.batch_interval,
            )
        )
        self._client = client

    async def resolve_poster(self, title: str, year: YearLike = None) -> str | None:
        """Resolve the poster path of one title.

        Args:
            title: Movie title.
            year: Release year (None searches by title only).

        Returns:
            TMDB poster path or None.
        """
        return await self._get_or_fetch_key(title_key(title, year), title, year)

    async def resolve_posters(self, pairs: Iterable[TitleYear]) -> list[str | None]:
        """Resolve poster paths in paced batches.

        Args:
            pairs: (title, year) pairs.

        Returns:
            One poster path (or None) per input pair, in input order.
        """
        return await self._resolve_pairs(pairs)

    async def _lookup(self, title: str, year: int | None) -> str | None:
        if not title or self._client is None or not self._client.is_enabled:
            return None

        try:
            match = await self._client.search_movie(title, year)
        except TMDBClientError as e:
            logger.warning(f"Poster lookup failed for {title} ({year or 'N/A'}): {e}")
            return None

        poster_path = match.get("poster_path") if match else None
        return poster_path or None
