"""Report pipeline orchestration.

Wires a single run: archive -> tables -> enrichment caches ->
aggregators -> assembled StatsReport. Only fatal input errors
(ReportInputError) propagate; remote failures degrade to empty values.
"""

import asyncio
import logging
from contextlib import AsyncExitStack
from datetime import datetime

from boxdstats.etl.aggregation import (
    SocialInteractionRanker,
    StatsReport,
    assemble_report,
    average_rating,
    average_rating_by_release_year,
    build_activity_stats,
    build_metadata_rollup,
    build_profile,
    deleted_list_names,
    liked_titles,
    longest_streak,
    most_rewatched,
    movies_by_release_year,
    rating_distribution,
    top_decades,
    top_liked_years,
    top_tags,
    top_years,
    total_hours_watched,
    watched_year_stats,
)
from boxdstats.etl.aggregation.metadata import MetadataRollup, unique_watched_titles
from boxdstats.etl.enrichment import MetadataCache, PosterCache
from boxdstats.etl.extractors.archive import ExportArchive, TableNotFoundError, TableParseError
from boxdstats.etl.extractors.csv import parse_rows
from boxdstats.etl.extractors.letterboxd import LetterboxdClient
from boxdstats.etl.extractors.tmdb import TMDBClient
from boxdstats.etl.pipeline.stats import ReportStats
from boxdstats.etl.types import Row
from boxdstats.etl.utils import BatchRateLimiter
from boxdstats.etl.utils.rate_limiter import Sleeper
from boxdstats.settings import settings

logger = logging.getLogger(__name__)


# =============================================================================
# TABLES
# =============================================================================

REQUIRED_TABLES = ("watched.csv", "ratings.csv", "diary.csv")
"""Tables whose absence or corruption aborts the run."""

OPTIONAL_TABLES = (
    "profile.csv",
    "watchlist.csv",
    "reviews.csv",
    "comments.csv",
    "deleted/diary.csv",
    "deleted/reviews.csv",
    "deleted/comments.csv",
    "likes/films.csv",
    "likes/lists.csv",
    "likes/reviews.csv",
)
"""Tables read as empty when missing or unparseable."""

Tables = dict[str, list[Row]]


async def load_tables(archive: ExportArchive, stats: ReportStats | None = None) -> Tables:
    """Read and parse every known table.

    Raw bytes are read sequentially; parsing runs concurrently in worker
    threads.

    Args:
        archive: Open export archive.
        stats: Optional run statistics to fill.

    Returns:
        Rows per table name (optional tables may be empty).

    Raises:
        TableNotFoundError: If a required table is missing.
        TableParseError: If a required table cannot be parsed.
    """
    raw: dict[str, bytes | None] = {name: archive.read(name) for name in REQUIRED_TABLES}
    missing: list[str] = []

    for name in OPTIONAL_TABLES:
        try:
            raw[name] = archive.read(name)
        except TableNotFoundError:
            logger.debug("Optional table %s not found", name)
            raw[name] = None
            missing.append(name)

    async def parse(name: str, data: bytes | None) -> list[Row]:
        if data is None:
            return []
        try:
            return await asyncio.to_thread(parse_rows, data)
        except TableParseError:
            if name in REQUIRED_TABLES:
                raise
            logger.warning("Optional table %s could not be parsed, ignoring it", name)
            missing.append(name)
            return []

    parsed = await asyncio.gather(*(parse(name, data) for name, data in raw.items()))
    tables = dict(zip(raw, parsed, strict=True))

    if stats is not None:
        stats.table_rows = {name: len(rows) for name, rows in tables.items() if raw[name] is not None}
        stats.missing_tables = missing

    return tables


# =============================================================================
# SECTIONS
# =============================================================================


def _count_sections(tables: Tables, deleted_lists: list[str]) -> dict[str, object]:
    """Sections that only count rows or entries."""
    return {
        "total_movies": len(tables["watched.csv"]),
        "total_logged_movies": len(tables["diary.csv"]),
        "total_watchlist": len(tables["watchlist.csv"]),
        "total_reviews": len(tables["reviews.csv"]),
        "total_comments": len(tables["comments.csv"]),
        "deleted_diary_count": len(tables["deleted/diary.csv"]),
        "deleted_reviews_count": len(tables["deleted/reviews.csv"]),
        "deleted_comments_count": len(tables["deleted/comments.csv"]),
        "deleted_lists_count": len(deleted_lists),
        "deleted_lists_names": deleted_lists,
        "total_liked_films": len(tables["likes/films.csv"]),
        "total_liked_lists": len(tables["likes/lists.csv"]),
        "total_liked_reviews": len(tables["likes/reviews.csv"]),
    }


def _local_sections(tables: Tables) -> dict[str, object]:
    """Sections computed from rows alone, without remote lookups."""
    watched = tables["watched.csv"]
    ratings = tables["ratings.csv"]
    diary = tables["diary.csv"]

    return {
        "profile": build_profile(tables["profile.csv"]),
        "average_rating": average_rating(ratings),
        "rating_distribution": rating_distribution(ratings),
        "top_years": top_years(watched),
        "movies_by_release_year": movies_by_release_year(watched),
        "average_rating_by_release_year": average_rating_by_release_year(ratings),
        "top_tags": top_tags(diary),
        "top_liked_years": top_liked_years(tables["likes/films.csv"]),
        "longest_streak": longest_streak(diary),
        "activity_stats": build_activity_stats(diary),
        "watched_year_stats": watched_year_stats(diary),
    }


# =============================================================================
# MAIN PIPELINE EXECUTION
# =============================================================================


async def build_report(
    archive_bytes: bytes,
    *,
    enrich: bool = True,
    tmdb_client: TMDBClient | None = None,
    letterboxd_client: LetterboxdClient | None = None,
    sleep: Sleeper = asyncio.sleep,
    stats: ReportStats | None = None,
) -> StatsReport:
    """Build the statistics report of an export archive.

    Args:
        archive_bytes: ZIP export content.
        enrich: Enable remote lookups (TMDB and Letterboxd).
        tmdb_client: TMDB client to use (created from settings if None).
        letterboxd_client: Letterboxd client to use (created if None).
        sleep: Sleeper used between paced batches.
        stats: Optional run statistics to fill.

    Returns:
        Complete report.

    Raises:
        ReportInputError: If the archive or a required table is unusable.
    """
    stats = stats if stats is not None else ReportStats()
    stats.start_time = datetime.now()

    with ExportArchive(archive_bytes) as archive:
        tables = await load_tables(archive, stats)
        deleted_lists = deleted_list_names(archive)

    logger.info(
        "Tables loaded: %d watched, %d ratings, %d diary",
        len(tables["watched.csv"]),
        len(tables["ratings.csv"]),
        len(tables["diary.csv"]),
    )

    sections: dict[str, object] = {
        **_count_sections(tables, deleted_lists),
        **_local_sections(tables),
    }

    async with AsyncExitStack() as stack:
        tmdb: TMDBClient | None = None
        letterboxd: LetterboxdClient | None = None
        if enrich:
            tmdb = await stack.enter_async_context(tmdb_client or TMDBClient())
            letterboxd = await stack.enter_async_context(letterboxd_client or LetterboxdClient())

        sections.update(await _remote_sections(tables, tmdb, letterboxd, sleep, stats))

    report = assemble_report(**sections)

    stats.end_time = datetime.now()
    stats.log_summary()
    return report


async def _remote_sections(
    tables: Tables,
    tmdb: TMDBClient | None,
    letterboxd: LetterboxdClient | None,
    sleep: Sleeper,
    stats: ReportStats,
) -> dict[str, object]:
    """Sections that need enrichment or social lookups."""
    interval = settings.enrichment.batch_interval
    metadata = MetadataCache(
        tmdb,
        BatchRateLimiter(settings.enrichment.detail_batch_size, interval, sleep),
    )
    # one limiter per provider step bounds in-flight requests across aggregators
    poster_limiter = BatchRateLimiter(settings.enrichment.poster_batch_size, interval, sleep)
    posters = PosterCache(tmdb, poster_limiter)
    ranker = SocialInteractionRanker(
        letterboxd,
        PosterCache(tmdb, poster_limiter),
        BatchRateLimiter(settings.letterboxd.batch_size, interval, sleep),
    )

    stats.enrichment_enabled = metadata.enabled
    if not metadata.enabled:
        logger.warning("TMDB enrichment disabled: no credential or --no-enrichment")

    watched = tables["watched.csv"]
    diary = tables["diary.csv"]
    profile = build_profile(tables["profile.csv"])

    async def rollup_then_hours() -> tuple[MetadataRollup, int]:
        rollup = await build_metadata_rollup(
            watched, diary, liked_titles(tables["likes/films.csv"]), metadata
        )
        return rollup, await total_hours_watched(diary, metadata)

    (rollup, hours), decades, rewatched, interacted = await asyncio.gather(
        rollup_then_hours(),
        top_decades(tables["ratings.csv"], posters),
        most_rewatched(diary, posters),
        ranker.rank(tables["comments.csv"], profile.username),
    )

    stats.unique_titles = len(unique_watched_titles(watched))
    stats.enriched_titles = metadata.resolved
    stats.metadata_hits = metadata.hits
    stats.metadata_misses = metadata.misses
    stats.poster_lookups = posters.misses
    stats.skipped_links = ranker.skipped_links

    return {
        **rollup.to_sections(),
        "total_hours_watched": hours,
        "top_decades": decades,
        "most_rewatched_movies": rewatched,
        "top_interacted_users": interacted,
    }
