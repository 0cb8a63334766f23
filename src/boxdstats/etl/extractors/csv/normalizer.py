"""Letterboxd CSV row normalizer.

Parses raw table bytes into ordered rows of text and resolves logical
fields through a single ordered table of column synonyms, since export
versions disagree on header names ("Name" vs "Title", "Year" vs
"Year Released", ...).
"""

import io
import logging
import math
import re
from datetime import date
from types import MappingProxyType

import polars as pl

from boxdstats.etl.extractors.archive import TableParseError
from boxdstats.etl.types import Row

logger = logging.getLogger(__name__)


# =============================================================================
# FIELD SYNONYMS
# =============================================================================

FIELD_SYNONYMS: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "title": ("Name", "name", "Title"),
        "year": ("Year", "year", "Year Released", "Release Year"),
        "rating": ("Rating", "rating"),
        "date": ("Watched Date", "WatchedDate", "watchedDate", "Date"),
        "rated_date": ("Date", "date"),
        "tags": ("Tags", "tags"),
        "username": ("Username", "username"),
        "location": ("Location", "location"),
        "bio": ("Bio", "bio"),
        "content": ("Content", "content"),
        "comment": ("Comment", "comment"),
    }
)
"""Column names tried, in priority order, for each logical field."""

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
"""Accepted watched-date format (YYYY-MM-DD, nothing else)."""


# =============================================================================
# PARSING
# =============================================================================


def parse_rows(data: bytes) -> list[Row]:
    """Parse CSV bytes into rows.

    The first line holds column names. Every column is read as text,
    blank lines are ignored and ragged lines are truncated.

    Args:
        data: Raw table content.

    Returns:
        One row per record, in file order.

    Raises:
        TableParseError: If the content is not parseable CSV.
    """
    text = data.decode("utf-8-sig", errors="replace")
    if not text.strip():
        return []

    try:
        df = pl.read_csv(
            io.BytesIO(text.encode("utf-8")),
            infer_schema_length=0,
            truncate_ragged_lines=True,
        )
    except pl.exceptions.PolarsError as e:
        raise TableParseError(f"Invalid CSV content: {e}") from e

    rows: list[Row] = []
    for record in df.iter_rows(named=True):
        row = {column: "" if value is None else str(value) for column, value in record.items()}
        if any(value.strip() for value in row.values()):
            rows.append(row)

    logger.debug("Parsed %d rows (%d columns)", len(rows), df.width)
    return rows


# =============================================================================
# FIELD RESOLUTION
# =============================================================================


def resolve_field(row: Row, field: str) -> str | None:
    """Resolve a logical field through its synonym list.

    Args:
        row: Parsed CSV row.
        field: Logical field name (key of FIELD_SYNONYMS).

    Returns:
        First present non-blank value, trimmed, or None.

    Raises:
        KeyError: If field is not a known logical field.
    """
    for column in FIELD_SYNONYMS[field]:
        value = row.get(column)
        if value is None:
            continue
        cleaned = str(value).strip()
        if cleaned:
            return cleaned
    return None


# =============================================================================
# TYPED HELPERS
# =============================================================================


def parse_year(value: str | None) -> int | None:
    """Parse a release year.

    Args:
        value: Raw year text.

    Returns:
        Positive integer year or None.
    """
    if value is None:
        return None
    try:
        number = float(value.strip())
    except ValueError:
        return None
    if not math.isfinite(number) or not number.is_integer() or number <= 0:
        return None
    return int(number)


def parse_rating(value: str | None) -> float | None:
    """Parse a numeric rating.

    Args:
        value: Raw rating text.

    Returns:
        Finite float or None.
    """
    if value is None:
        return None
    try:
        rating = float(value.strip())
    except ValueError:
        return None
    return rating if math.isfinite(rating) else None


def parse_iso_date(value: str | None) -> date | None:
    """Parse a strict YYYY-MM-DD date.

    Args:
        value: Raw date text.

    Returns:
        Calendar date, or None when malformed or not a real date.
    """
    if value is None:
        return None
    cleaned = value.strip()
    if not ISO_DATE_PATTERN.match(cleaned):
        return None
    try:
        return date.fromisoformat(cleaned)
    except ValueError:
        return None


def split_tags(value: str | None) -> list[str]:
    """Split a comma-separated tag list.

    Args:
        value: Raw tags text.

    Returns:
        Non-empty trimmed tags.
    """
    if not value:
        return []
    return [tag.strip() for tag in value.split(",") if tag.strip()]
