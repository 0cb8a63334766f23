"""Per-title metadata rollup and the frequency views built on it.

Watched rows are deduplicated by Title Key and enriched through the
resolver. Titles without metadata stay in the rollup with empty
enriched fields and contribute nothing to the frequency views.
"""

import logging
from collections import defaultdict
from collections.abc import Collection, Sequence
from dataclasses import dataclass, field, fields

from boxdstats.etl.aggregation.activity import describe_watched_date
from boxdstats.etl.aggregation.codes import country_name, language_name
from boxdstats.etl.aggregation.ranking import CounterRanking, PersonRanking
from boxdstats.etl.aggregation.schemas import DiaryLog, MovieSummary, NameCount, PersonCount
from boxdstats.etl.enrichment import MetadataResolver, title_key
from boxdstats.etl.extractors.csv import (
    parse_rating,
    parse_year,
    resolve_field,
    split_tags,
)
from boxdstats.etl.types import MovieMetadata, Person, Row

logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

TOP_METADATA_LIMIT = 10
"""Entries kept in genre/country/language/people rankings."""

COUNTED_CAST_LIMIT = 5
"""Billed cast members counted per title in the people rankings."""


# =============================================================================
# RESULT
# =============================================================================


@dataclass
class MetadataRollup:
    """Rollup of every unique watched title and its frequency views."""

    top_genres: list[NameCount] = field(default_factory=list)
    top_countries: list[NameCount] = field(default_factory=list)
    top_languages: list[NameCount] = field(default_factory=list)
    all_countries: list[NameCount] = field(default_factory=list)
    top_actors_all_time: list[PersonCount] = field(default_factory=list)
    top_actors_logged: list[PersonCount] = field(default_factory=list)
    top_directors_all_time: list[PersonCount] = field(default_factory=list)
    top_directors_logged: list[PersonCount] = field(default_factory=list)
    all_movies: list[MovieSummary] = field(default_factory=list)

    def to_sections(self) -> dict[str, object]:
        """Report sections keyed by StatsReport field name."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


# =============================================================================
# HELPERS
# =============================================================================


def unique_watched_titles(watched_rows: Sequence[Row]) -> list[tuple[str, int | None]]:
    """Deduplicate watched rows by Title Key, keeping first-seen order.

    Args:
        watched_rows: watched.csv rows.

    Returns:
        Unique (trimmed title, year) pairs.
    """
    unique: dict[str, tuple[str, int | None]] = {}
    for row in watched_rows:
        title = resolve_field(row, "title")
        if title is None:
            logger.debug("Skipping watched row without title: %r", row)
            continue
        year = parse_year(resolve_field(row, "year"))
        unique.setdefault(title_key(title, year), (title, year))
    return list(unique.values())


def group_diary_by_title(diary_rows: Sequence[Row]) -> dict[str, list[Row]]:
    """Group diary rows by exact trimmed title."""
    grouped: dict[str, list[Row]] = defaultdict(list)
    for row in diary_rows:
        title = resolve_field(row, "title")
        if title is not None:
            grouped[title].append(row)
    return dict(grouped)


def to_diary_log(row: Row) -> DiaryLog:
    """Convert a diary row to a DiaryLog."""
    raw_date = resolve_field(row, "date")
    watched = describe_watched_date(raw_date)
    return DiaryLog(
        rating=parse_rating(resolve_field(row, "rating")),
        watched_date=raw_date,
        watched_year=watched.year if watched else None,
        watched_day=watched.day if watched else None,
        watched_week=watched.week if watched else None,
        watched_month=watched.month if watched else None,
        tags=split_tags(resolve_field(row, "tags")),
    )


def _unique_people(people: Sequence[Person], limit: int | None = None) -> list[Person]:
    seen: dict[str, Person] = {}
    for person in people[:limit] if limit is not None else people:
        seen.setdefault(person.name, person)
    return list(seen.values())


def _count_people(
    actors: PersonRanking,
    directors: PersonRanking,
    metadata: MovieMetadata,
) -> None:
    for person in _unique_people(metadata.cast, COUNTED_CAST_LIMIT):
        actors.add_person(person.name, person.profile_path)
    for person in _unique_people(metadata.directors):
        directors.add_person(person.name, person.profile_path)


def _people_top(ranking: PersonRanking, limit: int = TOP_METADATA_LIMIT) -> list[PersonCount]:
    return [
        PersonCount(name=name, count=count, profile_path=ranking.profile_path(name))
        for name, count in ranking.ranked(limit)
    ]


def _names_top(ranking: CounterRanking, limit: int | None = TOP_METADATA_LIMIT) -> list[NameCount]:
    return [NameCount(name=name, count=count) for name, count in ranking.ranked(limit)]


def _summarize(
    title: str,
    year: int | None,
    metadata: MovieMetadata | None,
    diary_rows: Sequence[Row],
    liked: bool,
) -> MovieSummary:
    summary = MovieSummary(
        title=title,
        release_year=year,
        decade=f"{(year // 10) * 10}s" if year is not None else None,
        liked=liked,
        diary_logs=[to_diary_log(row) for row in diary_rows],
        rewatch_count=len(diary_rows),
    )
    if metadata is None:
        return summary

    return summary.model_copy(
        update={
            "poster_path": metadata.poster_path,
            "genres": list(metadata.genres),
            "country": country_name(metadata.origin_country),
            "language": language_name(metadata.original_language),
            "directors": [person.name for person in _unique_people(metadata.directors)],
            "cast": [person.name for person in metadata.cast],
        }
    )


# =============================================================================
# ROLLUP
# =============================================================================


async def build_metadata_rollup(
    watched_rows: Sequence[Row],
    diary_rows: Sequence[Row],
    liked_titles: Collection[str],
    resolver: MetadataResolver,
) -> MetadataRollup:
    """Enrich every unique watched title and count its metadata.

    People are counted twice: over every title ("all time") and over
    titles with at least one diary entry ("logged").

    Args:
        watched_rows: watched.csv rows.
        diary_rows: diary.csv rows.
        liked_titles: Exact trimmed titles of liked films.
        resolver: Metadata resolver (batched lookups).

    Returns:
        Rollup with every frequency view.
    """
    movies = unique_watched_titles(watched_rows)
    metadata_list = await resolver.resolve_many(movies)
    diary_by_title = group_diary_by_title(diary_rows)

    genres = CounterRanking()
    countries = CounterRanking()
    languages = CounterRanking()
    actors_all_time = PersonRanking()
    directors_all_time = PersonRanking()
    actors_logged = PersonRanking()
    directors_logged = PersonRanking()

    all_movies: list[MovieSummary] = []
    for (title, year), metadata in zip(movies, metadata_list, strict=True):
        logs = diary_by_title.get(title, [])
        summary = _summarize(title, year, metadata, logs, title in liked_titles)
        all_movies.append(summary)

        if metadata is None:
            continue

        for genre in metadata.genres:
            genres.add(genre)
        if summary.country:
            countries.add(summary.country)
        if summary.language:
            languages.add(summary.language)

        _count_people(actors_all_time, directors_all_time, metadata)
        if logs:
            _count_people(actors_logged, directors_logged, metadata)

    enriched = sum(1 for metadata in metadata_list if metadata is not None)
    logger.info("Metadata rollup: %d unique titles, %d enriched", len(movies), enriched)

    return MetadataRollup(
        top_genres=_names_top(genres),
        top_countries=_names_top(countries),
        top_languages=_names_top(languages),
        all_countries=_names_top(countries, None),
        top_actors_all_time=_people_top(actors_all_time),
        top_actors_logged=_people_top(actors_logged),
        top_directors_all_time=_people_top(directors_all_time),
        top_directors_logged=_people_top(directors_logged),
        all_movies=all_movies,
    )
