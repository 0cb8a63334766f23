"""Unit tests for the export archive reader."""

import pytest

from boxdstats.etl.extractors.archive import (
    ExportArchive,
    InvalidArchiveError,
    ReportInputError,
    TableNotFoundError,
)


@pytest.mark.unit
class TestOpenArchive:
    @staticmethod
    def test_invalid_bytes_raise() -> None:
        with pytest.raises(InvalidArchiveError):
            ExportArchive(b"definitely not a zip")

    @staticmethod
    def test_invalid_archive_is_input_error() -> None:
        with pytest.raises(ReportInputError):
            ExportArchive(b"")

    @staticmethod
    def test_names_exclude_directories(make_zip) -> None:
        data = make_zip({"export/": "", "export/watched.csv": "Name\n"})
        with ExportArchive(data) as archive:
            assert archive.names == ["export/watched.csv"]


@pytest.mark.unit
class TestFind:
    @staticmethod
    def test_exact_name(make_zip) -> None:
        with ExportArchive(make_zip({"watched.csv": "Name\n"})) as archive:
            assert archive.find("watched.csv") == "watched.csv"

    @staticmethod
    def test_case_insensitive(make_zip) -> None:
        with ExportArchive(make_zip({"Watched.CSV": "Name\n"})) as archive:
            assert archive.find("watched.csv") == "Watched.CSV"

    @staticmethod
    def test_nested_top_folder(make_zip) -> None:
        data = make_zip({"letterboxd-user-2024/watched.csv": "Name\n"})
        with ExportArchive(data) as archive:
            assert archive.find("watched.csv") == "letterboxd-user-2024/watched.csv"

    @staticmethod
    def test_missing_returns_none(make_zip) -> None:
        with ExportArchive(make_zip({"watched.csv": "Name\n"})) as archive:
            assert archive.find("diary.csv") is None

    @staticmethod
    def test_bare_name_ignores_export_subfolders(make_zip) -> None:
        data = make_zip(
            {
                "deleted/reviews.csv": "Name\n",
                "likes/reviews.csv": "Name\n",
            }
        )
        with ExportArchive(data) as archive:
            assert archive.find("reviews.csv") is None

    @staticmethod
    def test_bare_name_prefers_top_level(make_zip) -> None:
        data = make_zip({"deleted/diary.csv": "Name\n", "diary.csv": "Name\n"})
        with ExportArchive(data) as archive:
            assert archive.find("diary.csv") == "diary.csv"

    @staticmethod
    def test_folder_qualified_name(make_zip) -> None:
        data = make_zip({"diary.csv": "Name\n", "export/deleted/diary.csv": "Name\n"})
        with ExportArchive(data) as archive:
            assert archive.find("deleted/diary.csv") == "export/deleted/diary.csv"

    @staticmethod
    def test_segment_boundary_preferred(make_zip) -> None:
        data = make_zip({"old-watched.csv": "Name\n", "export/watched.csv": "Name\n"})
        with ExportArchive(data) as archive:
            assert archive.find("watched.csv") == "export/watched.csv"


@pytest.mark.unit
class TestRead:
    @staticmethod
    def test_read_content(make_zip) -> None:
        with ExportArchive(make_zip({"watched.csv": "Name\nAlien\n"})) as archive:
            assert archive.read("watched.csv") == b"Name\nAlien\n"

    @staticmethod
    def test_read_missing_raises(make_zip) -> None:
        with ExportArchive(make_zip({"watched.csv": "Name\n"})) as archive:
            with pytest.raises(TableNotFoundError, match="ratings.csv"):
                archive.read("ratings.csv")


@pytest.mark.unit
class TestListEntries:
    @staticmethod
    def test_filters_prefix_and_suffix(make_zip) -> None:
        data = make_zip(
            {
                "deleted/lists/b-list.csv": "",
                "deleted/lists/notes.txt": "",
                "lists/a-list.csv": "",
                "Deleted/Lists/c-list.CSV": "",
            }
        )
        with ExportArchive(data) as archive:
            assert archive.list_entries("deleted/lists/", ".csv") == [
                "deleted/lists/b-list.csv",
                "Deleted/Lists/c-list.CSV",
            ]
