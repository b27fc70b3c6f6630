"""
Errors Module - Exception types raised by the extraction engine.
================================================================

Only failures that leave the engine with nothing to work on are errors.
Missing manifests, module files or titles are extraction gaps and are
resolved with default values instead of being raised.
"""

ARCHIVE_ERROR_MESSAGE = (
    "Failed to parse the course file. "
    "The file may be corrupted or in an unsupported format."
)


class CourseMapError(Exception):
    """Base class for all CourseMap errors."""


class ArchiveError(CourseMapError):
    """The uploaded bytes cannot be opened as a zip-compatible archive."""

    def __init__(self, message: str = ARCHIVE_ERROR_MESSAGE, detail: str = ""):
        super().__init__(message)
        self.detail = detail


class UploadValidationError(CourseMapError):
    """The uploaded file was rejected before parsing (type or size)."""
