"""CSV table parsing and field resolution."""

from boxdstats.etl.extractors.csv.normalizer import (
    FIELD_SYNONYMS,
    parse_iso_date,
    parse_rating,
    parse_rows,
    parse_year,
    resolve_field,
    split_tags,
)

__all__ = [
    "FIELD_SYNONYMS",
    "parse_rows",
    "resolve_field",
    "parse_year",
    "parse_rating",
    "parse_iso_date",
    "split_tags",
]
