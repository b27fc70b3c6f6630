"""
Manifest Module - Course title from the package manifest.
=========================================================

Reads the root ``imsmanifest.xml`` entry and pulls the course title out of
the first ``<title>`` element by pattern matching. When there is no manifest,
or it has no usable title, the title falls back to the uploaded file name.
"""

import re
from dataclasses import dataclass
from pathlib import PurePath
from typing import Optional

from coursemap.extraction.archive import CourseArchive
from coursemap.shared.logging import get_logger

logger = get_logger(__name__)

# First <title>…</title> span; the inner text cannot cross another tag
TITLE_PATTERN = re.compile(r"<title>([^<]+)</title>")

DEFAULT_MANIFEST_NAME = "imsmanifest.xml"
UNTITLED_COURSE = "Untitled Course"


@dataclass(frozen=True)
class ManifestInfo:
    """What was learned from the manifest entry."""

    title: str
    text: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.text is not None


def extract_title(text: str) -> Optional[str]:
    """
    Extract the first ``<title>`` text from XML-like content.

    Args:
        text: Manifest or module descriptor text

    Returns:
        Trimmed title, or None if no non-blank title is present

    Example:
        >>> extract_title("<item><title> Week 1 </title></item>")
        'Week 1'
    """
    match = TITLE_PATTERN.search(text)
    if not match:
        return None
    title = match.group(1).strip()
    return title or None


def title_from_filename(filename: str) -> str:
    """
    Derive a course title from an uploaded file name.

    Everything from the first dot on is dropped, so
    ``"biology.fall.imscc"`` becomes ``"biology"``.
    """
    base = PurePath(filename.replace("\\", "/")).name
    title = base.split(".")[0].strip()
    return title or UNTITLED_COURSE


def read_manifest(
    archive: CourseArchive,
    filename: str,
    manifest_name: str = DEFAULT_MANIFEST_NAME,
) -> ManifestInfo:
    """
    Read the manifest entry and resolve the course title.

    Args:
        archive: Open course archive
        filename: Name of the uploaded file, used for the fallback title
        manifest_name: Root entry name of the manifest

    Returns:
        ManifestInfo with the resolved title and raw manifest text
    """
    text = archive.read_text(manifest_name)
    if text is None:
        logger.info(f"No {manifest_name} in package, using file name for title")
        return ManifestInfo(title=title_from_filename(filename))

    title = extract_title(text)
    if title is None:
        logger.info("Manifest has no <title>, using file name for title")
        title = title_from_filename(filename)

    return ManifestInfo(title=title, text=text)
