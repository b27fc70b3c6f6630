"""
Shared Module - Common utilities, configuration, schemas, and logging.
======================================================================

This module provides foundational components used across all other modules:

- config: Configuration loading and management
- logging: Structured logging setup
- schemas: Pydantic data models
- errors: Exception types
- utils: JSON and course document I/O
"""

from coursemap.shared.config import get_settings, Settings
from coursemap.shared.errors import ArchiveError, CourseMapError, UploadValidationError
from coursemap.shared.logging import get_logger, setup_logging
from coursemap.shared.schemas import (
    ComplianceStatus,
    CourseData,
    ItemType,
    Module,
    ModuleItem,
    QMCompliance,
)
from coursemap.shared.utils import (
    load_course_data,
    load_json,
    save_course_data,
    save_json,
)

__all__ = [
    # Config
    "get_settings",
    "Settings",
    # Errors
    "ArchiveError",
    "CourseMapError",
    "UploadValidationError",
    # Logging
    "get_logger",
    "setup_logging",
    # Schemas
    "ComplianceStatus",
    "CourseData",
    "ItemType",
    "Module",
    "ModuleItem",
    "QMCompliance",
    # Utils
    "load_course_data",
    "load_json",
    "save_course_data",
    "save_json",
]
