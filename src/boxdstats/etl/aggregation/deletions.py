"""Profile, likes and deletion statistics."""

from collections.abc import Sequence
from pathlib import PurePosixPath

from boxdstats.etl.aggregation.ranking import CounterRanking
from boxdstats.etl.aggregation.schemas import Profile, YearCount
from boxdstats.etl.extractors.archive import ExportArchive
from boxdstats.etl.extractors.csv import resolve_field
from boxdstats.etl.types import Row

DELETED_LISTS_PREFIX = "deleted/lists/"
TOP_LIKED_YEARS_LIMIT = 3


def build_profile(profile_rows: Sequence[Row]) -> Profile:
    """Owner profile from the first profile.csv row."""
    if not profile_rows:
        return Profile()
    row = profile_rows[0]
    return Profile(
        username=resolve_field(row, "username") or "",
        location=resolve_field(row, "location") or "",
        bio=resolve_field(row, "bio") or "",
    )


def deleted_list_names(archive: ExportArchive) -> list[str]:
    """Display names of deleted lists.

    Args:
        archive: Open export archive.

    Returns:
        File names without extension, hyphens replaced by spaces,
        in archive order.
    """
    entries = archive.list_entries(DELETED_LISTS_PREFIX, ".csv")
    return [
        PurePosixPath(entry).name[: -len(".csv")].replace("-", " ").strip() for entry in entries
    ]


def liked_titles(liked_rows: Sequence[Row]) -> set[str]:
    """Exact trimmed titles of liked films."""
    return {title for row in liked_rows if (title := resolve_field(row, "title")) is not None}


def top_liked_years(
    liked_rows: Sequence[Row],
    limit: int = TOP_LIKED_YEARS_LIMIT,
) -> list[YearCount]:
    """Most frequent release years among liked films."""
    ranking = CounterRanking(
        year for row in liked_rows if (year := resolve_field(row, "year")) is not None
    )
    return [YearCount(year=year, count=count) for year, count in ranking.ranked(limit)]
