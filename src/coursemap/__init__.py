"""
CourseMap - Course package extraction and QM-style compliance scoring
=====================================================================

Converts an uploaded course-export archive (an IMS Common Cartridge ``.imscc``
zip with an ``imsmanifest.xml`` and per-module descriptor files) into a
normalized course model:

- Course title and short course code
- Ordered modules with objective / activity / assessment counts
- A heuristic Quality Matters compliance status and score per module

Extraction is tolerant: missing manifests, absent module files and missing
titles resolve to documented defaults. Only an archive that cannot be opened
at all is an error.
"""

__version__ = "0.1.0"
__author__ = "CourseMap Team"
__license__ = "MIT"

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",
    # Main modules (imported on demand)
    "shared",
    "extraction",
    "cli",
]
