"""Unit tests for rating, release-year and decade statistics."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from boxdstats.etl.aggregation import round_half_up
from boxdstats.etl.aggregation.ranking import CounterRanking, PersonRanking, mean, rating_key
from boxdstats.etl.aggregation.ratings import (
    average_rating,
    average_rating_by_release_year,
    movies_by_release_year,
    rating_distribution,
    top_decades,
    top_years,
)
from boxdstats.etl.enrichment import PosterCache


def _rating(name: str, year: str, rating: str, date: str = "2023-01-01") -> dict[str, str]:
    return {"Date": date, "Name": name, "Year": year, "Rating": rating}


def _posters(paths: dict[str, str] | None = None) -> MagicMock:
    """PosterCache double resolving titles from a dict."""
    paths = paths or {}
    posters = MagicMock(spec=PosterCache)

    async def resolve(pairs):
        return [paths.get(title) for title, _ in pairs]

    posters.resolve_posters = AsyncMock(side_effect=resolve)
    return posters


# -------------------------------------------------------------------------
# Ranking Helpers
# -------------------------------------------------------------------------


@pytest.mark.unit
class TestRankingHelpers:
    @staticmethod
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(2.345, 2.35), (2.344, 2.34), (4.125, 4.13), (3.0, 3.0)],
    )
    def test_round_half_up(value: float, expected: float) -> None:
        assert round_half_up(value) == expected

    @staticmethod
    def test_round_half_up_to_integer() -> None:
        assert round_half_up(2.5, 0) == 3.0
        assert round_half_up(3.5, 0) == 4.0

    @staticmethod
    def test_mean_empty() -> None:
        assert mean([]) == 0.0

    @staticmethod
    def test_rating_key() -> None:
        assert rating_key(4.0) == "4"
        assert rating_key(3.5) == "3.5"

    @staticmethod
    def test_counter_ranking_ties_by_name() -> None:
        ranking = CounterRanking(["b", "a", "c", "c", " ", ""])
        assert ranking.ranked() == [("c", 2), ("a", 1), ("b", 1)]
        assert ranking.ranked(1) == [("c", 2)]

    @staticmethod
    def test_person_ranking_keeps_first_profile() -> None:
        ranking = PersonRanking()
        ranking.add_person("Kurt Russell", None)
        ranking.add_person("Kurt Russell", "/kr.jpg")
        ranking.add_person("Kurt Russell", "/other.jpg")
        assert ranking["Kurt Russell"] == 3
        assert ranking.profile_path("Kurt Russell") == "/kr.jpg"


# -------------------------------------------------------------------------
# Ratings
# -------------------------------------------------------------------------


@pytest.mark.unit
class TestRatings:
    @staticmethod
    def test_average_rating() -> None:
        rows = [_rating("A", "1982", "5"), _rating("B", "1979", "4.5"), _rating("C", "1978", "4")]
        assert average_rating(rows) == 4.5

    @staticmethod
    def test_average_ignores_non_numeric() -> None:
        rows = [_rating("A", "1982", "4"), _rating("B", "1979", ""), _rating("C", "1978", "x")]
        assert average_rating(rows) == 4.0

    @staticmethod
    def test_average_without_ratings() -> None:
        assert average_rating([]) == 0.0

    @staticmethod
    def test_average_rounded_half_up() -> None:
        rows = [_rating("A", "1982", "4.5"), _rating("B", "1982", "4"), _rating("C", "1982", "4")]
        assert average_rating(rows) == 4.17

    @staticmethod
    def test_distribution_shortest_keys() -> None:
        rows = [_rating("A", "1982", "4"), _rating("B", "1982", "4.0"), _rating("C", "1982", "3.5")]
        assert rating_distribution(rows) == {"4": 2, "3.5": 1}


# -------------------------------------------------------------------------
# Release Years
# -------------------------------------------------------------------------


@pytest.mark.unit
class TestReleaseYears:
    @staticmethod
    def test_top_years_ranked() -> None:
        rows = [{"Name": n, "Year": y} for n, y in [("A", "1982"), ("B", "1979"), ("C", "1982")]]
        result = top_years(rows)
        assert [(entry.year, entry.count) for entry in result] == [("1982", 2), ("1979", 1)]

    @staticmethod
    def test_top_years_limit() -> None:
        rows = [{"Name": str(i), "Year": str(1970 + i)} for i in range(8)]
        assert len(top_years(rows)) == 5

    @staticmethod
    def test_movies_by_release_year_dense() -> None:
        rows = [{"Name": "A", "Year": "1978"}, {"Name": "B", "Year": "1981"}, {"Name": "C", "Year": ""}]
        result = movies_by_release_year(rows)
        assert [(entry.year, entry.count) for entry in result] == [
            ("1978", 1),
            ("1979", 0),
            ("1980", 0),
            ("1981", 1),
        ]

    @staticmethod
    def test_movies_by_release_year_empty() -> None:
        assert movies_by_release_year([{"Name": "A", "Year": ""}]) == []

    @staticmethod
    def test_average_by_release_year_dense() -> None:
        rows = [
            _rating("A", "1980", "4"),
            _rating("B", "1980", "3"),
            _rating("C", "1982", "5"),
        ]
        result = average_rating_by_release_year(rows)
        assert [(entry.year, entry.average) for entry in result] == [
            ("1980", 3.5),
            ("1981", 0.0),
            ("1982", 5.0),
        ]


# -------------------------------------------------------------------------
# Decades
# -------------------------------------------------------------------------


@pytest.mark.unit
class TestTopDecades:
    @staticmethod
    @pytest.mark.asyncio
    async def test_ranked_by_average() -> None:
        rows = [
            _rating("The Thing", "1982", "5"),
            _rating("Alien", "1979", "4.5"),
            _rating("Halloween", "1978", "4"),
            _rating("Scream", "1996", "3"),
        ]
        result = await top_decades(rows, _posters({"The Thing": "/thing.jpg"}))

        assert [(d.decade, d.average) for d in result] == [
            ("1980s", 5.0),
            ("1970s", 4.25),
            ("1990s", 3.0),
        ]
        assert result[0].top_movies[0].poster_path == "/thing.jpg"
        assert result[1].top_movies[0].poster_path is None

    @staticmethod
    @pytest.mark.asyncio
    async def test_tie_keeps_older_decade_first() -> None:
        rows = [_rating("Scream", "1996", "4"), _rating("Alien", "1979", "4")]
        result = await top_decades(rows, _posters())
        assert [d.decade for d in result] == ["1970s", "1990s"]

    @staticmethod
    @pytest.mark.asyncio
    async def test_limited_to_three() -> None:
        rows = [_rating(f"Film {i}", str(1950 + 10 * i), "3") for i in range(5)]
        assert len(await top_decades(rows, _posters())) == 3

    @staticmethod
    @pytest.mark.asyncio
    async def test_movie_order() -> None:
        rows = [
            _rating("B Film", "1980", "4", date="2023-01-01"),
            _rating("A Film", "1981", "4", date="2023-01-01"),
            _rating("Newer", "1982", "4", date="2023-06-01"),
            _rating("Best", "1983", "5", date="2020-01-01"),
        ]
        result = await top_decades(rows, _posters())
        assert [m.title for m in result[0].top_movies] == ["Best", "Newer", "A Film", "B Film"]

    @staticmethod
    @pytest.mark.asyncio
    async def test_movies_limited_to_eight() -> None:
        rows = [_rating(f"Film {i}", "1985", "4") for i in range(12)]
        result = await top_decades(rows, _posters())
        assert len(result[0].top_movies) == 8

    @staticmethod
    @pytest.mark.asyncio
    async def test_posters_resolved_in_one_call() -> None:
        rows = [_rating("The Thing", "1982", "5"), _rating("Alien", "1979", "4.5")]
        posters = _posters()
        await top_decades(rows, posters)
        posters.resolve_posters.assert_awaited_once()
        assert posters.resolve_posters.await_args.args[0] == [("The Thing", 1982), ("Alien", 1979)]

    @staticmethod
    @pytest.mark.asyncio
    async def test_incomplete_rows_skipped() -> None:
        rows = [_rating("No Year", "", "5"), _rating("No Rating", "1982", ""), {"Year": "1982", "Rating": "4"}]
        assert await top_decades(rows, _posters()) == []

    @staticmethod
    @pytest.mark.asyncio
    async def test_movie_fields() -> None:
        result = await top_decades([_rating("Alien", "1979", "4.5", date="2023-02-01")], _posters())
        movie = result[0].top_movies[0]
        assert movie.year == "1979"
        assert movie.user_rating == 4.5
        assert movie.rated_date == "2023-02-01"
