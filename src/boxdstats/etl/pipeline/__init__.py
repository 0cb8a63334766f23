"""Report pipeline package.

Public API:
    - build_report: Build a StatsReport from export ZIP bytes
    - load_tables: Read and parse the export tables
    - ReportStats: Run statistics
    - main: CLI entry point
"""

from boxdstats.etl.pipeline.cli import main
from boxdstats.etl.pipeline.orchestrator import (
    OPTIONAL_TABLES,
    REQUIRED_TABLES,
    build_report,
    load_tables,
)
from boxdstats.etl.pipeline.stats import ReportStats

__all__ = [
    "build_report",
    "load_tables",
    "REQUIRED_TABLES",
    "OPTIONAL_TABLES",
    "ReportStats",
    "main",
]
