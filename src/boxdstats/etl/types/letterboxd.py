"""Letterboxd export data types.

Rows parsed from the export CSV tables and results of short-link
resolution.
"""

from typing import TypedDict

Row = dict[str, str]
"""One CSV record: column name to raw text, header order preserved."""


class ResolvedLink(TypedDict):
    """Short link resolved to its target page.

    Attributes:
        username: Owner of the target activity.
        item_name: Title derived from the item slug ("" when absent).
        final_url: URL after following redirects.
    """

    username: str
    item_name: str
    final_url: str
