"""Shared pytest fixtures for the report engine tests."""

import io
import zipfile
from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

from boxdstats.etl.enrichment import TitleYear, title_key
from boxdstats.etl.types import MovieMetadata, Person
from boxdstats.settings import settings

# =============================================================================
# ENVIRONMENT
# =============================================================================


@pytest.fixture(autouse=True, scope="function")
def mock_env_for_tests(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Mock env variables for reproducible tests (no credential, no delays)."""
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("DEBUG", "false")
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.setenv("TMDB_API_KEY", "")

    # The singleton is built at import time, patch it directly
    monkeypatch.setattr(settings.tmdb, "api_key", "")
    monkeypatch.setattr(settings.logging, "level", "INFO")
    monkeypatch.setattr(settings.logging, "log_dir", str(tmp_path / "logs"))
    monkeypatch.setattr(settings.enrichment, "batch_interval", 0.0)


# =============================================================================
# ARCHIVES
# =============================================================================


WATCHED_CSV = """Date,Name,Year,Letterboxd URI
2023-01-01,The Thing,1982,https://boxd.it/1
2023-01-02,Alien,1979,https://boxd.it/2
2023-01-03,Halloween,1978,https://boxd.it/3
"""

RATINGS_CSV = """Date,Name,Year,Letterboxd URI,Rating
2023-01-01,The Thing,1982,https://boxd.it/1,5
2023-01-02,Alien,1979,https://boxd.it/2,4.5
2023-01-03,Halloween,1978,https://boxd.it/3,4
"""

DIARY_CSV = """Date,Name,Year,Letterboxd URI,Rating,Rewatch,Tags,Watched Date
2023-01-02,The Thing,1982,https://boxd.it/a,5,,"horror, classic",2023-01-02
2023-01-03,The Thing,1982,https://boxd.it/b,5,Yes,horror,2023-01-03
2023-01-04,Alien,1979,https://boxd.it/c,4.5,,,2023-01-04
"""

PROFILE_CSV = """Date Joined,Username,Given Name,Family Name,Email Address,Location,Website,Bio,Pronoun,Favorite Films
2020-01-01,cinephile,,,someone@example.com,Paris,,Loves horror,,
"""

COMMENTS_CSV = """Date,Content,Comment
2023-02-01,https://boxd.it/abc12,Great review!
2023-02-02,Plain comment without a link,Nice
"""

LIKED_FILMS_CSV = """Date,Name,Year,Letterboxd URI
2023-01-05,The Thing,1982,https://boxd.it/1
"""


@pytest.fixture
def make_zip() -> Callable[[dict[str, str | bytes]], bytes]:
    """Factory building ZIP bytes from {entry path: content}."""

    def _make(files: dict[str, str | bytes]) -> bytes:
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as archive:
            for name, content in files.items():
                archive.writestr(name, content)
        return buffer.getvalue()

    return _make


@pytest.fixture
def export_files() -> dict[str, str | bytes]:
    """Small but complete export."""
    return {
        "watched.csv": WATCHED_CSV,
        "ratings.csv": RATINGS_CSV,
        "diary.csv": DIARY_CSV,
        "profile.csv": PROFILE_CSV,
        "comments.csv": COMMENTS_CSV,
        "likes/films.csv": LIKED_FILMS_CSV,
        "deleted/lists/my-favorites.csv": "Date,Name\n",
        "deleted/lists/to-watch.csv": "Date,Name\n",
    }


@pytest.fixture
def export_zip(make_zip, export_files) -> bytes:
    return make_zip(export_files)


# =============================================================================
# ENRICHMENT FAKES
# =============================================================================


def make_metadata(
    title: str = "The Thing",
    genres: Iterable[str] = ("Horror",),
    cast: Iterable[str] = ("Kurt Russell",),
    directors: Iterable[str] = ("John Carpenter",),
    runtime: int | None = 109,
    language: str | None = "en",
    country: str | None = "US",
    poster_path: str | None = "/thing.jpg",
) -> MovieMetadata:
    """Build MovieMetadata from plain names."""
    return MovieMetadata(
        title=title,
        genres=tuple(genres),
        cast=tuple(Person(name=name, profile_path=f"/{name[:1].lower()}.jpg") for name in cast),
        directors=tuple(Person(name=name) for name in directors),
        runtime=runtime,
        original_language=language,
        origin_country=country,
        poster_path=poster_path,
    )


class FakeResolver:
    """In-memory MetadataResolver recording every requested key."""

    def __init__(self, catalog: dict[str, MovieMetadata] | None = None) -> None:
        self.catalog = catalog or {}
        self.requested: list[str] = []

    def get(self, title: str, year=None) -> MovieMetadata | None:
        return self.catalog.get(title_key(title, year))

    async def get_or_fetch(self, title: str, year=None) -> MovieMetadata | None:
        self.requested.append(title_key(title, year))
        return self.get(title, year)

    async def resolve_many(self, pairs: Iterable[TitleYear]) -> list[MovieMetadata | None]:
        return [await self.get_or_fetch(title, year) for title, year in pairs]


@pytest.fixture
def metadata_factory() -> Callable[..., MovieMetadata]:
    return make_metadata


@pytest.fixture
def fake_resolver() -> type[FakeResolver]:
    return FakeResolver


class RecordingSleeper:
    """Async sleeper recording requested delays without waiting."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def sleeper() -> RecordingSleeper:
    return RecordingSleeper()
