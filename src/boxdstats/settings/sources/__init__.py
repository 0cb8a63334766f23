"""External source settings.

Exports configuration classes for the two remote sources:
- TMDB API (REST)
- Letterboxd (short links and profile scraping)
"""

from boxdstats.settings.sources.letterboxd import LetterboxdSettings
from boxdstats.settings.sources.tmdb import TMDBSettings

__all__ = [
    "TMDBSettings",
    "LetterboxdSettings",
]
