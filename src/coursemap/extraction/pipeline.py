"""
Pipeline Module - Parse a course package end to end.
====================================================

Pipeline flow:
    bytes → CourseArchive → manifest title → module discovery → course code → CourseData

The only failure is an archive that cannot be opened (``ArchiveError``).
Everything missing inside an archive resolves to a default, so a successful
parse always returns a CourseData with at least one module.
"""

import random
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from coursemap.extraction.archive import CourseArchive
from coursemap.extraction.course_code import generate_course_code
from coursemap.extraction.discovery import (
    DEFAULT_STRATEGIES,
    DiscoveryContext,
    DiscoveryStrategy,
    run_discovery,
)
from coursemap.extraction.manifest import read_manifest
from coursemap.shared.config import Settings, get_settings
from coursemap.shared.errors import ArchiveError, UploadValidationError
from coursemap.shared.logging import get_logger
from coursemap.shared.schemas import CourseData

logger = get_logger(__name__)


@dataclass(frozen=True)
class ParseResult:
    """A parsed course together with how it was obtained."""

    course: CourseData
    strategy: str
    manifest_found: bool


class CoursePackageParser:
    """
    Parser for course export packages.

    Holds the settings and random source for a series of parses. Each parse
    is independent; nothing is cached between calls.

    Example:
        >>> parser = CoursePackageParser()
        >>> course = parser.parse_file(Path("biology.imscc"))
        >>> print(course.code, len(course.modules))
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
        strategies: Sequence[DiscoveryStrategy] = DEFAULT_STRATEGIES,
    ):
        """
        Initialize the parser.

        Args:
            settings: Settings to use (global settings if None)
            rng: Random source for scores and course codes. When None, a
                seeded one is created if a seed is configured, otherwise the
                module defaults are used.
            strategies: Module discovery strategies, in order
        """
        self.settings = settings or get_settings()
        if rng is None:
            seed = self.settings.get_effective_seed()
            if seed is not None:
                rng = random.Random(seed)
        self.rng = rng
        self.strategies = tuple(strategies)

    # ─────────────────────────────────────────────────────────────────────────
    # Bytes
    # ─────────────────────────────────────────────────────────────────────────

    def parse_bytes_detailed(self, data: bytes, filename: str) -> ParseResult:
        """
        Parse archive bytes and report the discovery strategy used.

        Args:
            data: Archive bytes
            filename: Uploaded file name (fallback title source)

        Returns:
            ParseResult

        Raises:
            ArchiveError: If the bytes are not a readable archive
        """
        archive_config = self.settings.archive

        with CourseArchive.open(data) as archive:
            manifest = read_manifest(archive, filename, archive_config.manifest_name)
            context = DiscoveryContext(
                archive=archive,
                manifest=manifest,
                config=archive_config,
                rng=self.rng,
            )
            discovery = run_discovery(context, self.strategies)

        course = CourseData(
            title=manifest.title,
            code=generate_course_code(manifest.title, rng=self.rng),
            modules=tuple(discovery.modules),
        )
        logger.info(
            f"Parsed '{course.title}' ({course.code}): "
            f"{len(course.modules)} module(s), overall score {course.overall_score()}"
        )
        return ParseResult(
            course=course,
            strategy=discovery.strategy,
            manifest_found=manifest.found,
        )

    def parse_bytes(self, data: bytes, filename: str) -> CourseData:
        """Parse archive bytes into a CourseData."""
        return self.parse_bytes_detailed(data, filename).course

    # ─────────────────────────────────────────────────────────────────────────
    # Files
    # ─────────────────────────────────────────────────────────────────────────

    def validate_upload(self, path: Path) -> None:
        """
        Check an upload's type and size before reading it.

        Raises:
            UploadValidationError: If the file is missing, has an unaccepted
                extension, or exceeds the size limit
        """
        archive_config = self.settings.archive
        path = Path(path)

        if not path.is_file():
            raise UploadValidationError(f"File not found: {path}")

        if path.suffix.lower() not in archive_config.accepted_extensions:
            accepted = ", ".join(archive_config.accepted_extensions)
            raise UploadValidationError(f"Invalid file type. Accepted types: {accepted}")

        if path.stat().st_size > archive_config.max_file_size_bytes:
            raise UploadValidationError(
                f"File is too large. Maximum size: {archive_config.max_file_size_mb}MB"
            )

    def parse_file_detailed(self, path: Path) -> ParseResult:
        """Validate and parse a package file."""
        path = Path(path)
        self.validate_upload(path)

        try:
            data = path.read_bytes()
        except OSError as e:
            raise ArchiveError(detail=str(e)) from e

        logger.debug(f"Read {len(data)} bytes from {path}")
        return self.parse_bytes_detailed(data, path.name)

    def parse_file(self, path: Path) -> CourseData:
        """Validate and parse a package file into a CourseData."""
        return self.parse_file_detailed(path).course


# ─────────────────────────────────────────────────────────────────────────────
# Convenience Functions
# ─────────────────────────────────────────────────────────────────────────────


def parse_course_package(
    data: bytes,
    filename: str,
    settings: Optional[Settings] = None,
    rng: Optional[random.Random] = None,
) -> CourseData:
    """
    Parse course package bytes.

    Args:
        data: Archive bytes
        filename: Uploaded file name
        settings: Optional settings override
        rng: Optional random source

    Returns:
        CourseData

    Raises:
        ArchiveError: If the bytes are not a readable archive
    """
    return CoursePackageParser(settings=settings, rng=rng).parse_bytes(data, filename)


def parse_course_file(
    path: Path,
    settings: Optional[Settings] = None,
    rng: Optional[random.Random] = None,
) -> CourseData:
    """Validate and parse a course package file."""
    return CoursePackageParser(settings=settings, rng=rng).parse_file(path)
