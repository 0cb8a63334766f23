"""Report run statistics."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class ReportStats:
    """Statistics of one report run.

    Attributes:
        start_time: Run start timestamp.
        end_time: Run end timestamp.
        table_rows: Parsed row count per table name.
        missing_tables: Optional tables absent or unparseable.
        unique_titles: Unique watched titles sent to enrichment.
        enriched_titles: Titles that received metadata.
        enrichment_enabled: Whether TMDB lookups were possible.
        metadata_hits: Metadata cache hits.
        metadata_misses: Metadata lookups performed.
        poster_lookups: Poster lookups performed.
        skipped_links: Short links that could not be resolved.
    """

    start_time: datetime | None = None
    end_time: datetime | None = None
    table_rows: dict[str, int] = field(default_factory=dict)
    missing_tables: list[str] = field(default_factory=list)
    unique_titles: int = 0
    enriched_titles: int = 0
    enrichment_enabled: bool = False
    metadata_hits: int = 0
    metadata_misses: int = 0
    poster_lookups: int = 0
    skipped_links: int = 0

    @property
    def duration_seconds(self) -> float:
        """Calculate run duration in seconds."""
        if not self.start_time or not self.end_time:
            return 0.0
        delta = self.end_time - self.start_time
        return round(delta.total_seconds(), 2)

    def to_dict(self) -> dict[str, Any]:
        """Convert stats to dictionary for JSON export."""
        return {
            "duration_seconds": self.duration_seconds,
            "tables": {
                "rows": dict(self.table_rows),
                "missing": list(self.missing_tables),
            },
            "enrichment": {
                "enabled": self.enrichment_enabled,
                "unique_titles": self.unique_titles,
                "enriched_titles": self.enriched_titles,
                "metadata_hits": self.metadata_hits,
                "metadata_misses": self.metadata_misses,
                "poster_lookups": self.poster_lookups,
            },
            "social": {
                "skipped_links": self.skipped_links,
            },
        }

    def log_summary(self) -> None:
        """Log complete run summary."""
        logger.info(
            "Report built in %.2fs: %d tables, %d unique titles (%d enriched)",
            self.duration_seconds,
            len(self.table_rows),
            self.unique_titles,
            self.enriched_titles,
        )
        logger.info(
            "Metadata cache: %d hits, %d misses, %d poster lookups",
            self.metadata_hits,
            self.metadata_misses,
            self.poster_lookups,
        )
        if self.missing_tables:
            logger.info("Optional tables missing: %s", ", ".join(self.missing_tables))
        if not self.enrichment_enabled:
            logger.info("Enrichment disabled: metadata-derived sections are empty")
