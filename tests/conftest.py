"""
Pytest Configuration and Fixtures.
===================================

Shared fixtures for all test modules:
- In-memory course package builders
- Sample module descriptors and manifests
- Temporary directories
- Configuration overrides
"""

import io
import os
import tempfile
import zipfile
from pathlib import Path
from typing import Callable, Generator, Optional

import pytest

# Keep environment overrides from leaking into tests
os.environ.pop("COURSEMAP_SEED", None)
os.environ.pop("LOG_LEVEL", None)


# ─────────────────────────────────────────────────────────────────────────────
# Path Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


# ─────────────────────────────────────────────────────────────────────────────
# Package Builders
# ─────────────────────────────────────────────────────────────────────────────


def build_package(entries: dict[str, str]) -> bytes:
    """Zip ``entries`` (path -> text) in insertion order."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for path, text in entries.items():
            zf.writestr(path, text)
    return buffer.getvalue()


def build_module_xml(
    title: Optional[str] = None,
    outcomes: int = 0,
    assignments: int = 0,
    discussions: int = 0,
    quizzes: int = 0,
    assessments: int = 0,
) -> str:
    """Flat module descriptor with the given element counts."""
    parts = ["<?xml version='1.0' encoding='UTF-8'?>", "<module>"]
    if title is not None:
        parts.append(f"  <title>{title}</title>")
    parts += [f"  <learning_outcome id='lo{i}'>Outcome {i}</learning_outcome>" for i in range(outcomes)]
    parts += [f"  <assignment id='a{i}'>Task {i}</assignment>" for i in range(assignments)]
    parts += [f"  <discussion_topic id='d{i}'>Topic {i}</discussion_topic>" for i in range(discussions)]
    parts += [f"  <quiz id='q{i}'/>" for i in range(quizzes)]
    parts += [f"  <assessment id='e{i}'></assessment>" for i in range(assessments)]
    parts.append("</module>")
    return "\n".join(parts)


def build_manifest(title: Optional[str] = "Intro to Biology", organizations: str = "") -> str:
    """Manifest with an optional title and raw organizations body."""
    parts = ["<?xml version='1.0' encoding='UTF-8'?>", "<manifest identifier='m1'>"]
    if title is not None:
        parts.append(f"  <metadata><title>{title}</title></metadata>")
    if organizations:
        parts.append(f"  <organizations>{organizations}</organizations>")
    parts.append("  <resources/>")
    parts.append("</manifest>")
    return "\n".join(parts)


@pytest.fixture
def make_package() -> Callable[[dict[str, str]], bytes]:
    """Factory building zip bytes from a path -> text mapping."""
    return build_package


@pytest.fixture
def module_xml() -> Callable[..., str]:
    """Factory building module descriptor text."""
    return build_module_xml


@pytest.fixture
def manifest_xml() -> Callable[..., str]:
    """Factory building manifest text."""
    return build_manifest


@pytest.fixture
def three_item_organizations() -> str:
    """Organizations body with three top-level items of 2, 7 and 0 sub-items."""
    week_1 = "".join(f"<item identifier='w1i{i}'><title>Page {i}</title></item>" for i in range(2))
    week_2 = "".join(f"<item identifier='w2i{i}'><title>Page {i}</title></item>" for i in range(7))
    return (
        "<organization identifier='org1'>"
        f"<item identifier='w1'><title>Getting Started</title>{week_1}</item>"
        f"<item identifier='w2'><title>Cell Biology</title>{week_2}</item>"
        "<item identifier='w3'><title>Module 3 Review</title></item>"
        "</organization>"
    )


@pytest.fixture
def rooted_organizations() -> str:
    """Canvas-style rooted hierarchy: one untitled root item wrapping three weeks."""
    weeks = "".join(
        f"<item identifier='w{n}'><title>Week {n}</title>"
        f"<item identifier='w{n}p' identifierref='r{n}'><title>Reading {n}</title></item>"
        "</item>"
        for n in range(1, 4)
    )
    return (
        "<organization identifier='org_1' structure='rooted-hierarchy'>"
        f"<item identifier='LearningModules'>{weeks}</item>"
        "</organization>"
    )


@pytest.fixture
def two_module_package(make_package, module_xml, manifest_xml) -> bytes:
    """Package with a manifest and two module descriptors."""
    return make_package({
        "imsmanifest.xml": manifest_xml("Intro to Biology"),
        "course/module_1.xml": module_xml("Cells", outcomes=2, assignments=1, quizzes=1),
        "course/module_2.xml": module_xml("Genetics", outcomes=1, discussions=2),
        "course/resources/page.html": "<html><title>Not a module</title></html>",
    })


@pytest.fixture
def package_file(temp_dir: Path, two_module_package: bytes) -> Path:
    """The two-module package written to disk as an .imscc file."""
    path = temp_dir / "biology.imscc"
    path.write_bytes(two_module_package)
    return path


# ─────────────────────────────────────────────────────────────────────────────
# Settings Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def settings():
    """Default settings, independent of config/settings.yaml."""
    from coursemap.shared.config import Settings

    return Settings()


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Reset the cached settings singleton between tests."""
    from coursemap.shared.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
