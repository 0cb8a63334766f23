"""Title key normalization shared by every cache access."""

from boxdstats.etl.extractors.csv import parse_year

YearLike = int | str | None


def normalize_year(year: YearLike) -> int | None:
    """Normalize a year value.

    Args:
        year: Integer year, raw text, or None.

    Returns:
        Integer year or None when absent/unparseable.
    """
    if year is None:
        return None
    if isinstance(year, int):
        return year if year > 0 else None
    return parse_year(year)


def title_key(title: str, year: YearLike = None) -> str:
    """Build the cache key of a (title, year) pair.

    Args:
        title: Movie title.
        year: Release year (int, raw text or None).

    Returns:
        'lowercase trimmed title::year' (year part empty when absent).

    Example:
        >>> title_key(" The Thing ", "1982")
        'the thing::1982'
    """
    normalized_year = normalize_year(year)
    year_part = str(normalized_year) if normalized_year is not None else ""
    return f"{title.strip().lower()}::{year_part}"
