"""
Utilities Module - Common helper functions.
==========================================

Provides utility functions for:
- JSON file I/O
- Saving and loading parsed course documents
- Directory management
"""

import json
from pathlib import Path
from typing import Any

from coursemap.shared.logging import get_logger
from coursemap.shared.schemas import CourseData

logger = get_logger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Directory Management
# ─────────────────────────────────────────────────────────────────────────────


def ensure_parent_directory(file_path: Path) -> Path:
    """
    Ensure the parent directory of a file exists.

    Args:
        file_path: File path

    Returns:
        The file path (for chaining)
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    return file_path


# ─────────────────────────────────────────────────────────────────────────────
# JSON File I/O
# ─────────────────────────────────────────────────────────────────────────────


def load_json(file_path: Path) -> Any:
    """
    Load data from a JSON file.

    Args:
        file_path: Path to JSON file

    Returns:
        Parsed JSON data

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If file is not valid JSON
    """
    file_path = Path(file_path)

    with open(file_path, "r", encoding="utf-8") as f:
        return json.load(f)


def save_json(file_path: Path, data: Any, indent: int = 2) -> None:
    """
    Save data to a JSON file.

    Args:
        file_path: Path to JSON file
        data: Data to save (must be JSON serializable)
        indent: Indentation level (default: 2)
    """
    file_path = Path(file_path)
    ensure_parent_directory(file_path)

    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent, ensure_ascii=False)

    logger.debug(f"Saved JSON to {file_path}")


# ─────────────────────────────────────────────────────────────────────────────
# Course Documents
# ─────────────────────────────────────────────────────────────────────────────


def save_course_data(file_path: Path, course: CourseData) -> None:
    """Write a course to disk in its document form."""
    save_json(file_path, course.to_document())


def load_course_data(file_path: Path) -> CourseData:
    """
    Load a course previously written by ``save_course_data``.

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If file is not valid JSON
        pydantic.ValidationError: If the document does not describe a course
    """
    return CourseData.from_document(load_json(file_path))
