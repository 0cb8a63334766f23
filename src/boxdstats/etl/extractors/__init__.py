"""Extractors package.

Archive access, CSV parsing and remote providers (TMDB, Letterboxd).
"""

from boxdstats.etl.extractors.archive import (
    ExportArchive,
    InvalidArchiveError,
    ReportInputError,
    TableNotFoundError,
    TableParseError,
)

__all__ = [
    "ExportArchive",
    "ReportInputError",
    "InvalidArchiveError",
    "TableNotFoundError",
    "TableParseError",
]
