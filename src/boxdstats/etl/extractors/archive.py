"""Export archive reader.

Locates the CSV tables of a Letterboxd export inside a ZIP archive.
Table names are matched as case-insensitive path suffixes because
exports are sometimes re-zipped inside an extra top-level folder.
"""

import io
import logging
import zipfile

logger = logging.getLogger(__name__)

EXPORT_SUBFOLDERS = frozenset({"deleted", "likes", "lists", "orphaned"})
"""Export folders whose tables shadow top-level table names."""


# =============================================================================
# EXCEPTIONS
# =============================================================================


class ReportInputError(Exception):
    """Base exception for input problems the user can correct."""

    pass


class InvalidArchiveError(ReportInputError):
    """Raised when the uploaded bytes are not a readable ZIP archive."""

    pass


class TableNotFoundError(ReportInputError):
    """Raised when a named table is absent from the archive."""

    pass


class TableParseError(ReportInputError):
    """Raised when a table exists but cannot be parsed as CSV."""

    pass


# =============================================================================
# ARCHIVE
# =============================================================================


class ExportArchive:
    """Read-only view over an export ZIP archive.

    Attributes:
        names: File entry paths in archive order (directories excluded).
    """

    def __init__(self, data: bytes) -> None:
        """Open archive from raw bytes.

        Args:
            data: ZIP file content.

        Raises:
            InvalidArchiveError: If data is not a valid ZIP archive.
        """
        try:
            self._zip = zipfile.ZipFile(io.BytesIO(data))
        except (zipfile.BadZipFile, ValueError) as e:
            raise InvalidArchiveError("The uploaded file is not a valid ZIP archive.") from e

        self.names: list[str] = [info.filename for info in self._zip.infolist() if not info.is_dir()]
        logger.debug("Archive opened with %d entries", len(self.names))

    def __enter__(self) -> "ExportArchive":
        """Enter context."""
        return self

    def __exit__(self, *_exc: object) -> None:
        """Exit context and close the underlying ZIP file."""
        self.close()

    def close(self) -> None:
        """Close the underlying ZIP file."""
        self._zip.close()

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def find(self, name: str) -> str | None:
        """Find the entry path matching a table name.

        Candidates are entries whose lowercased path ends with the
        lowercased name. Preference: exact path, then a match on a
        path-segment boundary, then the shortest path.

        Args:
            name: Table file name, e.g. 'diary.csv' or 'deleted/diary.csv'.

        Returns:
            Matching entry path or None.
        """
        target = name.lower()
        candidates = [
            entry
            for entry in self.names
            if entry.lower().endswith(target) and not self._in_subfolder(entry, target)
        ]
        if not candidates:
            return None

        def rank(entry: str) -> tuple[int, int, int]:
            lowered = entry.lower()
            exact = lowered == target
            on_boundary = exact or lowered.endswith("/" + target)
            return (0 if exact else 1, 0 if on_boundary else 1, len(entry))

        return min(candidates, key=rank)

    @staticmethod
    def _in_subfolder(entry: str, target: str) -> bool:
        """Check whether a bare table name matched inside an export subfolder.

        'reviews.csv' must not resolve to 'deleted/reviews.csv' or
        'likes/reviews.csv' when the top-level table is absent.
        """
        if "/" in target:
            return False
        parts = entry.lower().split("/")
        return len(parts) > 1 and parts[-2] in EXPORT_SUBFOLDERS

    def read(self, name: str) -> bytes:
        """Read raw bytes of a named table.

        Args:
            name: Table file name.

        Returns:
            Entry content.

        Raises:
            TableNotFoundError: If no entry matches name.
        """
        entry = self.find(name)
        if entry is None:
            raise TableNotFoundError(f"File {name} not found in the archive.")
        return self._zip.read(entry)

    def list_entries(self, path_prefix: str, suffix: str) -> list[str]:
        """List entries under a folder with a given extension.

        Args:
            path_prefix: Case-insensitive path prefix (e.g. 'deleted/lists/').
            suffix: Case-insensitive path suffix (e.g. '.csv').

        Returns:
            Matching entry paths in archive order.
        """
        prefix = path_prefix.lower()
        ending = suffix.lower()
        return [
            entry
            for entry in self.names
            if entry.lower().startswith(prefix) and entry.lower().endswith(ending)
        ]
