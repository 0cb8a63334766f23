"""Diary statistics: tags, rewatches and total watch time."""

import logging
from collections import Counter
from collections.abc import Sequence

from boxdstats.etl.aggregation.ranking import CounterRanking, round_half_up
from boxdstats.etl.aggregation.schemas import RewatchedMovie, TagCount
from boxdstats.etl.enrichment import MetadataResolver, PosterCache
from boxdstats.etl.extractors.csv import parse_year, resolve_field, split_tags
from boxdstats.etl.types import Row

logger = logging.getLogger(__name__)

TOP_TAGS_LIMIT = 5
REWATCHED_LIMIT = 8


def top_tags(diary_rows: Sequence[Row], limit: int = TOP_TAGS_LIMIT) -> list[TagCount]:
    """Most used diary tags.

    Args:
        diary_rows: diary.csv rows.
        limit: Number of tags kept.

    Returns:
        Ranked tag counts.
    """
    ranking = CounterRanking(
        tag for row in diary_rows for tag in split_tags(resolve_field(row, "tags"))
    )
    return [TagCount(tag=tag, count=count) for tag, count in ranking.ranked(limit)]


async def most_rewatched(
    diary_rows: Sequence[Row],
    posters: PosterCache,
    limit: int = REWATCHED_LIMIT,
) -> list[RewatchedMovie]:
    """Titles logged more than once.

    Titles match exactly (after trimming). Posters are looked up by
    title only.

    Args:
        diary_rows: diary.csv rows.
        posters: Poster-only enrichment cache.
        limit: Number of titles kept.

    Returns:
        Titles ordered by count desc, then title asc.
    """
    counts = Counter(
        title for row in diary_rows if (title := resolve_field(row, "title")) is not None
    )
    ranked = sorted(
        ((title, count) for title, count in counts.items() if count > 1),
        key=lambda item: (-item[1], item[0]),
    )[:limit]

    poster_paths = await posters.resolve_posters([(title, None) for title, _ in ranked])
    return [
        RewatchedMovie(title=title, count=count, poster_path=poster_path)
        for (title, count), poster_path in zip(ranked, poster_paths, strict=True)
    ]


async def total_hours_watched(diary_rows: Sequence[Row], resolver: MetadataResolver) -> int:
    """Sum of runtimes over every diary entry, in whole hours.

    Each entry counts (rewatches included); lookups share the metadata
    cache, so a title already enriched by the rollup costs nothing.

    Args:
        diary_rows: diary.csv rows.
        resolver: Metadata resolver.

    Returns:
        Total minutes / 60, rounded half-up.
    """
    pairs = [
        (title, parse_year(resolve_field(row, "year")))
        for row in diary_rows
        if (title := resolve_field(row, "title")) is not None
    ]
    metadata_list = await resolver.resolve_many(pairs)

    total_minutes = sum(
        metadata.runtime for metadata in metadata_list if metadata and metadata.runtime
    )
    return int(round_half_up(total_minutes / 60, 0))
