"""
Logging Module - Structured logging setup with Rich console support.
====================================================================

Provides centralized logging configuration for the engine and the CLI.
Supports Rich console output for terminal logs and optional file logging.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

# Global state for logging configuration
_logging_configured = False
_console = Console(stderr=True)

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(
    level: str = "INFO",
    use_rich: bool = True,
    log_file: Optional[str] = None,
    log_format: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        use_rich: Whether to use Rich console handler for pretty output
        log_file: Optional path to log file
        log_format: Optional custom log format string
        force: Reconfigure even if logging was already set up

    Note:
        Calls after the first one are ignored unless ``force`` is set, so
        importing modules that call ``get_logger`` never duplicates handlers.
    """
    global _logging_configured

    if _logging_configured and not force:
        return

    numeric_level = getattr(logging, level.upper(), logging.INFO)

    if log_format is None:
        log_format = DEFAULT_FORMAT

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Drop handlers installed by a previous setup, keep foreign ones (pytest caplog)
    for handler in list(root_logger.handlers):
        if getattr(handler, "_coursemap_handler", False):
            root_logger.removeHandler(handler)

    if use_rich:
        handler: logging.Handler = RichHandler(
            console=_console,
            show_time=True,
            show_level=True,
            show_path=False,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(log_format))

    handler.setLevel(numeric_level)
    handler._coursemap_handler = True  # type: ignore[attr-defined]
    root_logger.addHandler(handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter(log_format))
        file_handler._coursemap_handler = True  # type: ignore[attr-defined]
        root_logger.addHandler(file_handler)

    _logging_configured = True

    logger = get_logger(__name__)
    logger.debug(f"Logging configured: level={level}, rich={use_rich}, file={log_file}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger instance.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Configured logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Parsing started")
    """
    if not _logging_configured:
        setup_logging()

    return logging.getLogger(name)
