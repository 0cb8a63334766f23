"""Diary activity: calendar counters, streaks and per-year summaries.

Only watched dates in strict YYYY-MM-DD form that name a real calendar
day are counted. Weeks are ISO 8601 weeks, days start on Monday.
"""

import logging
import re
from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, timedelta

from boxdstats.etl.aggregation.ranking import mean
from boxdstats.etl.aggregation.schemas import (
    DAYS_OF_WEEK,
    DEFAULT_WEEKS,
    MONTHS_OF_YEAR,
    TOTAL_BUCKET,
    ActivityStats,
    DayCount,
    MonthCount,
    WatchedYearStat,
    WeekCount,
    YearActivity,
)
from boxdstats.etl.extractors.csv import parse_iso_date, parse_rating, resolve_field
from boxdstats.etl.types import Row

logger = logging.getLogger(__name__)

_YEAR_PREFIX = re.compile(r"^(\d{4})")


# =============================================================================
# WATCHED DATE DESCRIPTION
# =============================================================================


@dataclass(frozen=True)
class WatchedDate:
    """Calendar position of a diary entry.

    Attributes:
        value: The parsed date.
        year: Year bucket name ("2023").
        day: Weekday name (Monday first).
        week: ISO 8601 week number (1-53).
        month: Month name.
    """

    value: date

    @property
    def year(self) -> str:
        return f"{self.value.year:04d}"

    @property
    def day_index(self) -> int:
        return self.value.weekday()

    @property
    def day(self) -> str:
        return DAYS_OF_WEEK[self.day_index]

    @property
    def week(self) -> int:
        return self.value.isocalendar()[1]

    @property
    def month_index(self) -> int:
        return self.value.month - 1

    @property
    def month(self) -> str:
        return MONTHS_OF_YEAR[self.month_index]


def describe_watched_date(value: str | None) -> WatchedDate | None:
    """Parse a watched date.

    Args:
        value: Raw date text.

    Returns:
        WatchedDate, or None when not a strict real YYYY-MM-DD date.
    """
    parsed = parse_iso_date(value)
    return WatchedDate(parsed) if parsed else None


# =============================================================================
# ACTIVITY CALENDAR
# =============================================================================


@dataclass
class ActivityBucket:
    """Counters of one year (or of the Total bucket)."""

    days: list[int] = field(default_factory=lambda: [0] * len(DAYS_OF_WEEK))
    weeks: list[int] = field(default_factory=lambda: [0] * DEFAULT_WEEKS)
    months: list[int] = field(default_factory=lambda: [0] * len(MONTHS_OF_YEAR))

    def ensure_weeks(self, count: int) -> None:
        """Grow the week counter list to at least count weeks."""
        if count > len(self.weeks):
            self.weeks.extend([0] * (count - len(self.weeks)))

    def record(self, watched: WatchedDate) -> None:
        """Increment the weekday, ISO week and month counters."""
        self.days[watched.day_index] += 1
        self.ensure_weeks(watched.week)
        self.weeks[watched.week - 1] += 1
        self.months[watched.month_index] += 1

    def to_model(self) -> YearActivity:
        return YearActivity(
            days=[DayCount(day=name, count=c) for name, c in zip(DAYS_OF_WEEK, self.days, strict=True)],
            weeks=[WeekCount(week=index + 1, count=c) for index, c in enumerate(self.weeks)],
            months=[
                MonthCount(month=name, count=c)
                for name, c in zip(MONTHS_OF_YEAR, self.months, strict=True)
            ],
        )


class ActivityCalendar:
    """Per-year activity buckets plus the synthetic Total bucket."""

    def __init__(self) -> None:
        self._buckets: dict[str, ActivityBucket] = {TOTAL_BUCKET: ActivityBucket()}

    def bucket(self, name: str) -> ActivityBucket:
        """Get (or create) a bucket by name."""
        if name not in self._buckets:
            self._buckets[name] = ActivityBucket()
        return self._buckets[name]

    def record(self, watched: WatchedDate) -> None:
        """Count a diary entry in its year bucket and in Total."""
        self.bucket(watched.year).record(watched)
        self._buckets[TOTAL_BUCKET].record(watched)

    @property
    def available_years(self) -> list[str]:
        """Total first, then years with data, most recent first."""
        years = sorted((name for name in self._buckets if name != TOTAL_BUCKET), reverse=True)
        return [TOTAL_BUCKET, *years]

    def to_stats(self) -> ActivityStats:
        return ActivityStats(
            available_years=self.available_years,
            by_year={name: self._buckets[name].to_model() for name in self.available_years},
        )


def build_activity_stats(diary_rows: Sequence[Row]) -> ActivityStats:
    """Build the activity calendar from diary rows.

    Args:
        diary_rows: diary.csv rows.

    Returns:
        Activity stats (Total bucket always present).
    """
    calendar = ActivityCalendar()
    skipped = 0
    for row in diary_rows:
        watched = describe_watched_date(resolve_field(row, "date"))
        if watched is None:
            skipped += 1
            continue
        calendar.record(watched)

    if skipped:
        logger.debug("Activity calendar skipped %d rows without a valid watched date", skipped)
    return calendar.to_stats()


# =============================================================================
# STREAKS
# =============================================================================


def longest_streak(diary_rows: Sequence[Row]) -> int:
    """Longest run of consecutive watched days.

    Args:
        diary_rows: diary.csv rows.

    Returns:
        Length of the longest streak (0 without dates).
    """
    dates = sorted(
        {parsed for row in diary_rows if (parsed := parse_iso_date(resolve_field(row, "date")))}
    )
    if not dates:
        return 0

    longest = current = 1
    for previous, current_date in zip(dates, dates[1:]):
        if current_date - previous == timedelta(days=1):
            current += 1
            longest = max(longest, current)
        else:
            current = 1
    return longest


# =============================================================================
# WATCHED YEARS
# =============================================================================


def watched_year_stats(diary_rows: Sequence[Row]) -> list[WatchedYearStat]:
    """Diary entry count and mean rating per watched year.

    The year is the 4-digit prefix of the watched date.

    Args:
        diary_rows: diary.csv rows.

    Returns:
        One entry per year, ascending.
    """
    counts: dict[str, int] = defaultdict(int)
    ratings: dict[str, list[float]] = defaultdict(list)

    for row in diary_rows:
        watched = resolve_field(row, "date")
        match = _YEAR_PREFIX.match(watched) if watched else None
        if not match:
            continue
        year = match.group(1)
        counts[year] += 1
        rating = parse_rating(resolve_field(row, "rating"))
        if rating is not None:
            ratings[year].append(rating)

    return [
        WatchedYearStat(year=year, count=counts[year], average_rating=mean(ratings.get(year, [])))
        for year in sorted(counts)
    ]
