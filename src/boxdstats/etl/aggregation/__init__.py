"""Aggregation package.

Independent statistical views over the export tables, and the
assembler merging them into a StatsReport.
"""

from boxdstats.etl.aggregation.activity import (
    ActivityBucket,
    ActivityCalendar,
    build_activity_stats,
    describe_watched_date,
    longest_streak,
    watched_year_stats,
)
from boxdstats.etl.aggregation.assembler import assemble_report
from boxdstats.etl.aggregation.deletions import (
    build_profile,
    deleted_list_names,
    liked_titles,
    top_liked_years,
)
from boxdstats.etl.aggregation.diary import most_rewatched, top_tags, total_hours_watched
from boxdstats.etl.aggregation.metadata import MetadataRollup, build_metadata_rollup
from boxdstats.etl.aggregation.ranking import CounterRanking, PersonRanking, round_half_up
from boxdstats.etl.aggregation.ratings import (
    average_rating,
    average_rating_by_release_year,
    movies_by_release_year,
    rating_distribution,
    top_decades,
    top_years,
)
from boxdstats.etl.aggregation.schemas import StatsReport
from boxdstats.etl.aggregation.social import SocialInteractionRanker

__all__ = [
    # Activity
    "ActivityBucket",
    "ActivityCalendar",
    "build_activity_stats",
    "describe_watched_date",
    "longest_streak",
    "watched_year_stats",
    # Ratings
    "average_rating",
    "average_rating_by_release_year",
    "movies_by_release_year",
    "rating_distribution",
    "top_decades",
    "top_years",
    # Diary
    "most_rewatched",
    "top_tags",
    "total_hours_watched",
    # Metadata
    "MetadataRollup",
    "build_metadata_rollup",
    # Profile, likes, deletions
    "build_profile",
    "deleted_list_names",
    "liked_titles",
    "top_liked_years",
    # Social
    "SocialInteractionRanker",
    # Ranking
    "CounterRanking",
    "PersonRanking",
    "round_half_up",
    # Report
    "StatsReport",
    "assemble_report",
]
