"""Letterboxd export statistics engine: extraction, enrichment and aggregation."""

from boxdstats.etl.pipeline import ReportStats, build_report, main

__all__ = [
    "build_report",
    "ReportStats",
    "main",
]
