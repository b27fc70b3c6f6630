"""
CLI Module - Command-line interface for CourseMap.
==================================================

Usage:
    coursemap --help
    coursemap parse biology.imscc
    coursemap parse biology.imscc --output biology.json
    coursemap show biology.json
    coursemap info

Components:
- main: Typer CLI application
"""

from coursemap.cli.main import app, cli

__all__ = ["app", "cli"]
