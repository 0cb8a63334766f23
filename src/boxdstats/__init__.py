"""boxdstats: statistics reports from Letterboxd data exports."""

__version__ = "1.0.0"
