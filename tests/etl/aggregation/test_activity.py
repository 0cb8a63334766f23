"""Unit tests for the activity calendar, streaks and watched-year stats."""

import pytest

from boxdstats.etl.aggregation.activity import (
    ActivityBucket,
    build_activity_stats,
    describe_watched_date,
    longest_streak,
    watched_year_stats,
)
from boxdstats.etl.aggregation.schemas import DEFAULT_WEEKS, TOTAL_BUCKET


def _entry(watched: str, rating: str = "", name: str = "Film") -> dict[str, str]:
    return {"Date": "2024-12-31", "Name": name, "Rating": rating, "Watched Date": watched}


# -------------------------------------------------------------------------
# Watched Date Description
# -------------------------------------------------------------------------


@pytest.mark.unit
class TestDescribeWatchedDate:
    @staticmethod
    def test_monday_first_iso_week() -> None:
        watched = describe_watched_date("2023-01-02")
        assert watched.year == "2023"
        assert watched.day == "Monday"
        assert watched.day_index == 0
        assert watched.week == 1
        assert watched.month == "January"

    @staticmethod
    def test_sunday_belongs_to_previous_iso_week() -> None:
        watched = describe_watched_date("2023-01-01")
        assert watched.day == "Sunday"
        assert watched.week == 52

    @staticmethod
    def test_week_53() -> None:
        assert describe_watched_date("2020-12-31").week == 53

    @staticmethod
    @pytest.mark.parametrize("value", ["2023-02-30", "2023/01/02", "", None])
    def test_invalid(value: str | None) -> None:
        assert describe_watched_date(value) is None


# -------------------------------------------------------------------------
# Activity Calendar
# -------------------------------------------------------------------------


@pytest.mark.unit
class TestActivityBucket:
    @staticmethod
    def test_defaults() -> None:
        bucket = ActivityBucket()
        assert len(bucket.days) == 7
        assert len(bucket.weeks) == DEFAULT_WEEKS
        assert len(bucket.months) == 12

    @staticmethod
    def test_week_53_grows_list() -> None:
        bucket = ActivityBucket()
        bucket.record(describe_watched_date("2020-12-31"))
        assert len(bucket.weeks) == 53
        assert bucket.weeks[52] == 1


@pytest.mark.unit
class TestBuildActivityStats:
    @staticmethod
    def test_empty_diary_has_total_bucket() -> None:
        stats = build_activity_stats([])
        assert stats.available_years == [TOTAL_BUCKET]
        total = stats.by_year[TOTAL_BUCKET]
        assert [d.count for d in total.days] == [0] * 7
        assert len(total.weeks) == DEFAULT_WEEKS

    @staticmethod
    def test_years_descending_after_total() -> None:
        rows = [_entry("2021-05-01"), _entry("2023-01-02"), _entry("2022-07-14")]
        stats = build_activity_stats(rows)
        assert stats.available_years == ["Total", "2023", "2022", "2021"]

    @staticmethod
    def test_counts_in_year_and_total() -> None:
        rows = [_entry("2023-01-02"), _entry("2023-01-09"), _entry("2022-01-03")]
        stats = build_activity_stats(rows)

        year = stats.by_year["2023"]
        assert year.days[0].day == "Monday"
        assert year.days[0].count == 2
        assert year.weeks[0].count == 1
        assert year.weeks[1].count == 1
        assert year.months[0].count == 2

        total = stats.by_year[TOTAL_BUCKET]
        assert total.days[0].count == 3
        assert total.months[0].count == 3

    @staticmethod
    def test_invalid_dates_skipped() -> None:
        rows = [_entry("2023-01-02"), _entry("2023-13-45"), _entry("yesterday")]
        stats = build_activity_stats(rows)
        assert stats.available_years == ["Total", "2023"]
        assert sum(d.count for d in stats.by_year[TOTAL_BUCKET].days) == 1


# -------------------------------------------------------------------------
# Streaks
# -------------------------------------------------------------------------


@pytest.mark.unit
class TestLongestStreak:
    @staticmethod
    def test_consecutive_days() -> None:
        rows = [_entry("2023-01-02"), _entry("2023-01-03"), _entry("2023-01-04")]
        assert longest_streak(rows) == 3

    @staticmethod
    def test_run_before_isolated_day() -> None:
        dates = ["2023-01-01", "2023-01-02", "2023-01-03", "2023-01-10"]
        assert longest_streak([_entry(d) for d in dates]) == 3

    @staticmethod
    def test_duplicates_counted_once() -> None:
        rows = [_entry("2023-01-02"), _entry("2023-01-02"), _entry("2023-01-03")]
        assert longest_streak(rows) == 2

    @staticmethod
    def test_gap_breaks_streak() -> None:
        rows = [
            _entry("2023-01-01"),
            _entry("2023-01-03"),
            _entry("2023-01-04"),
            _entry("2023-01-05"),
            _entry("2023-02-01"),
        ]
        assert longest_streak(rows) == 3

    @staticmethod
    def test_across_month_and_year() -> None:
        rows = [_entry("2022-12-31"), _entry("2023-01-01")]
        assert longest_streak(rows) == 2

    @staticmethod
    def test_unordered_input() -> None:
        rows = [_entry("2023-01-04"), _entry("2023-01-02"), _entry("2023-01-03")]
        assert longest_streak(rows) == 3

    @staticmethod
    def test_no_dates() -> None:
        assert longest_streak([]) == 0
        assert longest_streak([_entry("not a date")]) == 0


# -------------------------------------------------------------------------
# Watched Years
# -------------------------------------------------------------------------


@pytest.mark.unit
class TestWatchedYearStats:
    @staticmethod
    def test_count_and_average_per_year() -> None:
        rows = [
            _entry("2023-01-02", "5"),
            _entry("2023-01-03", "4"),
            _entry("2022-06-01", ""),
        ]
        result = watched_year_stats(rows)
        assert [(s.year, s.count, s.average_rating) for s in result] == [
            ("2022", 1, 0.0),
            ("2023", 2, 4.5),
        ]

    @staticmethod
    def test_year_prefix_only() -> None:
        result = watched_year_stats([_entry("2023-99-99", "3"), _entry("2023/01/05", "4")])
        assert [(s.year, s.count) for s in result] == [("2023", 2)]

    @staticmethod
    def test_rows_without_date_ignored() -> None:
        assert watched_year_stats([{"Name": "Film", "Rating": "4"}]) == []
