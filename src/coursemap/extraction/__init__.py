"""
Extraction Module - Course package parsing and compliance scoring.
==================================================================

- archive: Open the uploaded bytes as a zip archive
- manifest: Course title from imsmanifest.xml
- counter: Tag-pattern element counts
- module_parser: One module descriptor → Module
- scoring: Compliance status and score
- discovery: Ordered module discovery strategies
- course_code: Course code from the title
- pipeline: End-to-end parse

Pipeline flow:
    bytes → Archive → Manifest (title) → Discovery (modules) → Course code → CourseData
"""

from coursemap.extraction.archive import CourseArchive
from coursemap.extraction.counter import count_elements, count_module_elements
from coursemap.extraction.course_code import generate_course_code
from coursemap.extraction.discovery import (
    DEFAULT_STRATEGIES,
    DiscoveryContext,
    DiscoveryStrategy,
    discover_modules,
    run_discovery,
)
from coursemap.extraction.manifest import extract_title, read_manifest
from coursemap.extraction.module_parser import parse_module_xml
from coursemap.extraction.pipeline import (
    CoursePackageParser,
    ParseResult,
    parse_course_file,
    parse_course_package,
)
from coursemap.extraction.scoring import score_compliance

__all__ = [
    # Archive
    "CourseArchive",
    # Manifest
    "extract_title",
    "read_manifest",
    # Counting and scoring
    "count_elements",
    "count_module_elements",
    "score_compliance",
    # Modules
    "parse_module_xml",
    "DEFAULT_STRATEGIES",
    "DiscoveryContext",
    "DiscoveryStrategy",
    "discover_modules",
    "run_discovery",
    # Course
    "generate_course_code",
    "CoursePackageParser",
    "ParseResult",
    "parse_course_file",
    "parse_course_package",
]
