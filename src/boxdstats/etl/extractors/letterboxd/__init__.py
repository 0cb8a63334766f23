"""Letterboxd social extractor package.

Classes:
    LetterboxdClient: Short-link resolution and avatar fetching.
    LetterboxdScraper: URL and profile page parsing.
"""

from boxdstats.etl.extractors.letterboxd.client import LetterboxdClient
from boxdstats.etl.extractors.letterboxd.scraper import LetterboxdScraper

__all__ = [
    "LetterboxdClient",
    "LetterboxdScraper",
]
