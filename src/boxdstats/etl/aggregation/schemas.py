"""Pydantic schemas for the statistics report.

Every model serializes with camelCase aliases and accepts snake_case
field names on input. Every report field has a default, so a missing
upstream section yields zero/empty values rather than missing keys.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# =============================================================================
# CONSTANTS
# =============================================================================

TOTAL_BUCKET = "Total"
"""Synthetic activity bucket aggregating every year."""

DAYS_OF_WEEK = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
"""Weekday display names, Monday first."""

MONTHS_OF_YEAR = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
"""Month display names."""

DEFAULT_WEEKS = 52
"""Initial length of every week counter list."""


class ReportModel(BaseModel):
    """Base model with camelCase serialization."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


# =============================================================================
# RANKING ENTRIES
# =============================================================================


class Profile(ReportModel):
    """Report owner profile."""

    username: str = ""
    location: str = ""
    bio: str = ""


class YearCount(ReportModel):
    """Count for a release year (year kept as text)."""

    year: str
    count: int = Field(ge=0)


class YearAverage(ReportModel):
    """Average rating for a release year."""

    year: str
    average: float


class TagCount(ReportModel):
    """Diary tag frequency."""

    tag: str
    count: int = Field(ge=0)


class NameCount(ReportModel):
    """Genre, country or language frequency."""

    name: str
    count: int = Field(ge=0)


class PersonCount(ReportModel):
    """Cast or crew member frequency."""

    name: str
    count: int = Field(ge=0)
    profile_path: str | None = None


class RewatchedMovie(ReportModel):
    """Title logged more than once in the diary."""

    title: str
    count: int = Field(ge=2)
    poster_path: str | None = None


class DecadeMovie(ReportModel):
    """Rated movie kept in a decade ranking."""

    title: str
    year: str
    user_rating: float
    rated_date: str | None = None
    poster_path: str | None = None


class DecadeRanking(ReportModel):
    """Decade ordered by mean user rating."""

    decade: str
    average: float
    top_movies: list[DecadeMovie] = Field(default_factory=list)


# =============================================================================
# ACTIVITY
# =============================================================================


class DayCount(ReportModel):
    day: str
    count: int = 0


class WeekCount(ReportModel):
    week: int = Field(ge=1)
    count: int = 0


class MonthCount(ReportModel):
    month: str
    count: int = 0


def _empty_days() -> list[DayCount]:
    return [DayCount(day=day) for day in DAYS_OF_WEEK]


def _empty_weeks() -> list[WeekCount]:
    return [WeekCount(week=index + 1) for index in range(DEFAULT_WEEKS)]


def _empty_months() -> list[MonthCount]:
    return [MonthCount(month=month) for month in MONTHS_OF_YEAR]


class YearActivity(ReportModel):
    """Weekday, ISO week and month counters of one bucket."""

    days: list[DayCount] = Field(default_factory=_empty_days)
    weeks: list[WeekCount] = Field(default_factory=_empty_weeks)
    months: list[MonthCount] = Field(default_factory=_empty_months)


class ActivityStats(ReportModel):
    """Activity calendar, "Total" first then years descending."""

    available_years: list[str] = Field(default_factory=lambda: [TOTAL_BUCKET])
    by_year: dict[str, YearActivity] = Field(default_factory=lambda: {TOTAL_BUCKET: YearActivity()})


class WatchedYearStat(ReportModel):
    """Diary entries and mean rating per watched year."""

    year: str
    count: int = Field(ge=0)
    average_rating: float = 0.0


# =============================================================================
# PER-TITLE ROLLUP
# =============================================================================


class DiaryLog(ReportModel):
    """One diary entry attached to a rolled-up title."""

    rating: float | None = None
    watched_date: str | None = None
    watched_year: str | None = None
    watched_day: str | None = None
    watched_week: int | None = None
    watched_month: str | None = None
    tags: list[str] = Field(default_factory=list)


class MovieSummary(ReportModel):
    """Unique watched title with its enrichment and diary history."""

    title: str
    release_year: int | None = None
    decade: str | None = None
    poster_path: str | None = None
    liked: bool = False
    genres: list[str] = Field(default_factory=list)
    country: str | None = None
    language: str | None = None
    directors: list[str] = Field(default_factory=list)
    cast: list[str] = Field(default_factory=list)
    diary_logs: list[DiaryLog] = Field(default_factory=list)
    rewatch_count: int = 0


# =============================================================================
# SOCIAL
# =============================================================================


class InteractionComment(ReportModel):
    """Comment left on another user's activity."""

    date: str | None = None
    text: str = ""
    movie: str = ""
    final_url: str = ""
    poster_url: str | None = None


class InteractedUser(ReportModel):
    """User ranked by number of comment interactions."""

    username: str
    interaction_count: int = Field(ge=0)
    comments: list[InteractionComment] = Field(default_factory=list)
    avatar_url: str | None = None


# =============================================================================
# REPORT
# =============================================================================


class StatsReport(ReportModel):
    """Consolidated statistics report."""

    profile: Profile = Field(default_factory=Profile)

    # Counts
    total_movies: int = 0
    total_logged_movies: int = 0
    total_watchlist: int = 0
    total_reviews: int = 0
    total_comments: int = 0
    deleted_diary_count: int = 0
    deleted_reviews_count: int = 0
    deleted_comments_count: int = 0
    deleted_lists_count: int = 0
    deleted_lists_names: list[str] = Field(default_factory=list)
    total_liked_films: int = 0
    total_liked_lists: int = 0
    total_liked_reviews: int = 0

    # Ratings
    average_rating: float = 0.0
    rating_distribution: dict[str, int] = Field(default_factory=dict)
    average_rating_by_release_year: list[YearAverage] = Field(default_factory=list)
    top_decades: list[DecadeRanking] = Field(default_factory=list)

    # Release years and tags
    top_years: list[YearCount] = Field(default_factory=list)
    movies_by_release_year: list[YearCount] = Field(default_factory=list)
    top_tags: list[TagCount] = Field(default_factory=list)
    top_liked_years: list[YearCount] = Field(default_factory=list)

    # Diary
    most_rewatched_movies: list[RewatchedMovie] = Field(default_factory=list)
    longest_streak: int = 0
    total_hours_watched: int = 0
    activity_stats: ActivityStats = Field(default_factory=ActivityStats)
    watched_year_stats: list[WatchedYearStat] = Field(default_factory=list)

    # Enrichment
    top_genres: list[NameCount] = Field(default_factory=list)
    top_countries: list[NameCount] = Field(default_factory=list)
    top_languages: list[NameCount] = Field(default_factory=list)
    all_countries: list[NameCount] = Field(default_factory=list)
    top_actors_all_time: list[PersonCount] = Field(default_factory=list)
    top_actors_logged: list[PersonCount] = Field(default_factory=list)
    top_directors_all_time: list[PersonCount] = Field(default_factory=list)
    top_directors_logged: list[PersonCount] = Field(default_factory=list)
    all_movies: list[MovieSummary] = Field(default_factory=list)

    # Social
    top_interacted_users: list[InteractedUser] = Field(default_factory=list)

    def to_json_dict(self) -> dict[str, Any]:
        """Dump the report with camelCase keys, JSON-compatible values."""
        return self.model_dump(mode="json", by_alias=True)
