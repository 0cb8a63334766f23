"""TMDB API data types.

TypedDict definitions for data structures returned by
The Movie Database (TMDB) API endpoints.
"""

from typing import NotRequired, TypedDict


class TMDBGenreData(TypedDict):
    """Genre data from TMDB API."""

    id: int
    name: str


class TMDBCastData(TypedDict):
    """Cast member data from TMDB credits."""

    id: int
    name: str
    character: NotRequired[str]
    order: NotRequired[int]
    profile_path: NotRequired[str | None]


class TMDBCrewData(TypedDict):
    """Crew member data from TMDB credits."""

    id: int
    name: str
    department: NotRequired[str]
    job: str
    profile_path: NotRequired[str | None]


class TMDBCreditsData(TypedDict):
    """Combined credits data from TMDB API."""

    cast: list[TMDBCastData]
    crew: list[TMDBCrewData]


class TMDBSearchResult(TypedDict):
    """Single result of the search/movie endpoint."""

    id: int
    title: str
    release_date: NotRequired[str | None]
    poster_path: NotRequired[str | None]
    original_language: NotRequired[str | None]


class TMDBSearchResponse(TypedDict):
    """Response from TMDB search/movie endpoint."""

    page: int
    total_pages: int
    total_results: int
    results: list[TMDBSearchResult]


class TMDBMovieDetails(TypedDict):
    """Movie details with appended credits (movie/{id}?append_to_response=credits)."""

    id: int
    title: str
    runtime: NotRequired[int | None]
    original_language: NotRequired[str | None]
    origin_country: NotRequired[list[str]]
    poster_path: NotRequired[str | None]
    genres: NotRequired[list[TMDBGenreData]]
    credits: NotRequired[TMDBCreditsData]
