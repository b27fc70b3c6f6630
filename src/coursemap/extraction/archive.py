"""
Archive Module - Open uploaded course packages as zip archives.
===============================================================

Wraps ``zipfile`` around an in-memory byte buffer. Opening validates the
archive index only. Member data is decompressed and CRC-checked when an entry
is read, so damage in an entry that is never read does not fail a parse.
"""

import io
import zipfile
import zlib
from typing import Optional

from coursemap.shared.errors import ArchiveError
from coursemap.shared.logging import get_logger

logger = get_logger(__name__)

# Failures zipfile can raise while indexing or decompressing a damaged archive
_ZIP_FAILURES = (
    zipfile.BadZipFile,
    zipfile.LargeZipFile,
    zlib.error,
    EOFError,
    OSError,
    ValueError,
    RuntimeError,  # encrypted members
    NotImplementedError,  # unsupported compression method
)


class CourseArchive:
    """
    Read-only view over a course package archive.

    Example:
        >>> with CourseArchive.open(data) as archive:
        ...     for path in archive.list_entries():
        ...         print(path)
    """

    def __init__(self, zip_file: zipfile.ZipFile):
        self._zip = zip_file
        self._closed = False

    @classmethod
    def open(cls, data: bytes) -> "CourseArchive":
        """
        Open raw bytes as an archive.

        Args:
            data: Bytes of a zip-compatible archive

        Returns:
            An open archive handle

        Raises:
            ArchiveError: If the bytes are not a readable archive
        """
        try:
            zip_file = zipfile.ZipFile(io.BytesIO(data))
        except _ZIP_FAILURES as e:
            logger.warning(f"Cannot open archive ({len(data)} bytes): {e}")
            raise ArchiveError(detail=str(e)) from e

        logger.debug(f"Opened archive with {len(zip_file.infolist())} members")
        return cls(zip_file)

    @property
    def closed(self) -> bool:
        return self._closed

    def list_entries(self) -> list[str]:
        """Entry paths in archive order, directories excluded."""
        return [info.filename for info in self._zip.infolist() if not info.is_dir()]

    def has_entry(self, path: str) -> bool:
        try:
            self._zip.getinfo(path)
        except KeyError:
            return False
        return True

    def read_text(self, path: str) -> Optional[str]:
        """
        Read an entry as UTF-8 text.

        Undecodable bytes are replaced rather than rejected.

        Args:
            path: Entry path inside the archive

        Returns:
            Decoded text, or None if the entry does not exist

        Raises:
            ArchiveError: If the entry data is damaged (bad CRC or stream)
        """
        try:
            info = self._zip.getinfo(path)
        except KeyError:
            return None

        try:
            raw = self._zip.read(info)
        except _ZIP_FAILURES as e:
            logger.warning(f"Cannot read archive entry {path}: {e}")
            raise ArchiveError(detail=f"{path}: {e}") from e

        return raw.decode("utf-8-sig", errors="replace")

    def close(self) -> None:
        if not self._closed:
            self._zip.close()
            self._closed = True

    def __enter__(self) -> "CourseArchive":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore[no-untyped-def]
        self.close()
