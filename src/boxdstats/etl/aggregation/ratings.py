"""Rating, release-year and decade statistics."""

import logging
from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass
from functools import cmp_to_key

from boxdstats.etl.aggregation.ranking import CounterRanking, mean, rating_key, round_half_up
from boxdstats.etl.aggregation.schemas import (
    DecadeMovie,
    DecadeRanking,
    YearAverage,
    YearCount,
)
from boxdstats.etl.enrichment import PosterCache
from boxdstats.etl.extractors.csv import parse_rating, parse_year, resolve_field
from boxdstats.etl.types import Row

logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

TOP_YEARS_LIMIT = 5
TOP_DECADES_LIMIT = 3
DECADE_MOVIES_LIMIT = 8


# =============================================================================
# RATING STATISTICS
# =============================================================================


def _numeric_ratings(rows: Sequence[Row]) -> list[float]:
    ratings = []
    for row in rows:
        rating = parse_rating(resolve_field(row, "rating"))
        if rating is not None:
            ratings.append(rating)
    return ratings


def average_rating(rows: Sequence[Row]) -> float:
    """Mean of the numeric ratings (0.0 when none).

    Args:
        rows: ratings.csv rows.

    Returns:
        Average rounded to 2 decimals.
    """
    return mean(_numeric_ratings(rows))


def rating_distribution(rows: Sequence[Row]) -> dict[str, int]:
    """Count ratings keyed by their shortest text form.

    Args:
        rows: ratings.csv rows.

    Returns:
        Mapping like {"4": 12, "3.5": 7}, in first-seen order.
    """
    distribution: dict[str, int] = {}
    for rating in _numeric_ratings(rows):
        key = rating_key(rating)
        distribution[key] = distribution.get(key, 0) + 1
    return distribution


# =============================================================================
# RELEASE YEARS
# =============================================================================


def top_years(rows: Sequence[Row], limit: int = TOP_YEARS_LIMIT) -> list[YearCount]:
    """Most frequent release years among watched titles.

    Args:
        rows: watched.csv rows.
        limit: Number of years kept.

    Returns:
        Ranked year counts.
    """
    ranking = CounterRanking(
        value for row in rows if (value := resolve_field(row, "year")) is not None
    )
    return [YearCount(year=year, count=count) for year, count in ranking.ranked(limit)]


def _dense_years(years: Sequence[int]) -> range:
    if not years:
        return range(0)
    return range(min(years), max(years) + 1)


def movies_by_release_year(rows: Sequence[Row]) -> list[YearCount]:
    """Watched count per release year, dense from first to last year.

    Args:
        rows: watched.csv rows.

    Returns:
        One entry per year (0 for gaps); empty when no year parses.
    """
    counts: dict[int, int] = defaultdict(int)
    for row in rows:
        year = parse_year(resolve_field(row, "year"))
        if year is not None:
            counts[year] += 1

    return [
        YearCount(year=str(year), count=counts.get(year, 0))
        for year in _dense_years(list(counts))
    ]


def average_rating_by_release_year(rows: Sequence[Row]) -> list[YearAverage]:
    """Mean rating per release year, dense from first to last year.

    Args:
        rows: ratings.csv rows.

    Returns:
        One entry per year (0.0 for gaps); empty when no year parses.
    """
    ratings_by_year: dict[int, list[float]] = defaultdict(list)
    for row in rows:
        year = parse_year(resolve_field(row, "year"))
        rating = parse_rating(resolve_field(row, "rating"))
        if year is not None and rating is not None:
            ratings_by_year[year].append(rating)

    return [
        YearAverage(year=str(year), average=mean(ratings_by_year.get(year, [])))
        for year in _dense_years(list(ratings_by_year))
    ]


# =============================================================================
# DECADES
# =============================================================================


@dataclass
class _RatedMovie:
    title: str
    year: int
    rating: float
    rated_date: str | None


def _compare_rated(a: _RatedMovie, b: _RatedMovie) -> int:
    """Rating desc, then rated date desc (when both differ), then title asc."""
    if a.rating != b.rating:
        return -1 if a.rating > b.rating else 1
    if a.rated_date and b.rated_date and a.rated_date != b.rated_date:
        return -1 if a.rated_date > b.rated_date else 1
    if a.title != b.title:
        return -1 if a.title < b.title else 1
    return 0


def _group_by_decade(rows: Sequence[Row]) -> dict[int, list[_RatedMovie]]:
    decades: dict[int, list[_RatedMovie]] = defaultdict(list)
    for row in rows:
        title = resolve_field(row, "title")
        year = parse_year(resolve_field(row, "year"))
        rating = parse_rating(resolve_field(row, "rating"))
        if title is None or year is None or rating is None:
            logger.debug("Skipping rating row without title/year/rating: %r", row)
            continue
        decades[(year // 10) * 10].append(
            _RatedMovie(
                title=title,
                year=year,
                rating=rating,
                rated_date=resolve_field(row, "rated_date"),
            )
        )
    return decades


async def top_decades(
    rows: Sequence[Row],
    posters: PosterCache,
    limit: int = TOP_DECADES_LIMIT,
    movies_limit: int = DECADE_MOVIES_LIMIT,
) -> list[DecadeRanking]:
    """Best rated decades with their top movies.

    Decades are ranked by mean rating (ties: older decade first). Each
    keeps its best movies, each with a poster path.

    Args:
        rows: ratings.csv rows.
        posters: Poster-only enrichment cache.
        limit: Number of decades kept.
        movies_limit: Movies kept per decade.

    Returns:
        Ranked decades.
    """
    averages = [
        (decade, round_half_up(sum(m.rating for m in movies) / len(movies)), movies)
        for decade, movies in _group_by_decade(rows).items()
    ]
    averages.sort(key=lambda entry: (-entry[1], entry[0]))

    selected = [
        (decade, average, sorted(movies, key=cmp_to_key(_compare_rated))[:movies_limit])
        for decade, average, movies in averages[:limit]
    ]

    pairs = [(movie.title, movie.year) for _, _, movies in selected for movie in movies]
    poster_paths = iter(await posters.resolve_posters(pairs))

    return [
        DecadeRanking(
            decade=f"{decade}s",
            average=average,
            top_movies=[
                DecadeMovie(
                    title=movie.title,
                    year=str(movie.year),
                    user_rating=movie.rating,
                    rated_date=movie.rated_date,
                    poster_path=next(poster_paths),
                )
                for movie in movies
            ],
        )
        for decade, average, movies in selected
    ]
