"""
Configuration Module - Load and validate application settings.
==============================================================

Loads configuration from:
1. config/settings.yaml (defaults)
2. Environment variables from .env file
3. Environment variables from system

Environment variables override YAML defaults.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file early
load_dotenv()


def _find_project_root() -> Path:
    """Find the project root directory by looking for pyproject.toml."""
    current = Path(__file__).resolve()
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            return parent
    # Fallback to current working directory
    return Path.cwd()


PROJECT_ROOT = _find_project_root()
CONFIG_DIR = PROJECT_ROOT / "config"
DEFAULT_CONFIG_FILE = CONFIG_DIR / "settings.yaml"


# ─────────────────────────────────────────────────────────────────────────────
# Nested Configuration Models
# ─────────────────────────────────────────────────────────────────────────────


class ArchiveConfig(BaseModel):
    """Archive layout conventions and upload limits."""

    manifest_name: str = "imsmanifest.xml"
    module_marker: str = "module_"
    descriptor_extensions: list[str] = Field(default_factory=lambda: [".xml"])
    accepted_extensions: list[str] = Field(default_factory=lambda: [".imscc", ".zip"])
    max_file_size_mb: int = Field(default=100, gt=0)
    read_workers: int = Field(default=4, ge=1)

    @field_validator("accepted_extensions", mode="after")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        """Lowercase accepted extensions and make sure they start with a dot."""
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in v]

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024


class ScoringConfig(BaseModel):
    """Compliance scoring settings."""

    # None keeps the in-band score draw non-deterministic
    seed: Optional[int] = None


class LoggingConfig(BaseModel):
    """Logging settings."""

    level: str = "INFO"
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    rich_console: bool = True
    file: str = ""


# ─────────────────────────────────────────────────────────────────────────────
# Main Settings Class
# ─────────────────────────────────────────────────────────────────────────────


class Settings(BaseSettings):
    """
    Main application settings.

    Loads from:
    1. config/settings.yaml (defaults)
    2. Environment variables

    Environment variables override YAML settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # Top-level environment overrides
    log_level: Optional[str] = Field(default=None, validation_alias="LOG_LEVEL")
    seed: Optional[int] = Field(default=None, validation_alias="COURSEMAP_SEED")

    # Nested configurations (from YAML)
    archive: ArchiveConfig = Field(default_factory=ArchiveConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def get_effective_log_level(self) -> str:
        """Get the effective log level (env override or config)."""
        if self.log_level:
            return self.log_level.upper()
        return self.logging.level.upper()

    def get_effective_seed(self) -> Optional[int]:
        """Get the effective scoring seed (env override or config)."""
        if self.seed is not None:
            return self.seed
        return self.scoring.seed


def _load_yaml_config(config_path: Path) -> dict[str, Any]:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
        return data if data else {}


def _create_settings(config_path: Optional[Path] = None) -> Settings:
    """Create settings instance by merging YAML defaults with environment."""
    if config_path is None:
        config_path = DEFAULT_CONFIG_FILE

    yaml_config = _load_yaml_config(config_path)

    return Settings(**yaml_config)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the singleton settings instance.

    Returns:
        Settings instance with merged configuration

    Example:
        >>> settings = get_settings()
        >>> print(settings.archive.manifest_name)
        imsmanifest.xml
    """
    return _create_settings()


def reload_settings() -> Settings:
    """
    Force reload of settings (clears cache).

    Returns:
        Fresh Settings instance
    """
    get_settings.cache_clear()
    return get_settings()


def load_settings(config_path: Path) -> Settings:
    """Load settings from an explicit YAML file, bypassing the cache."""
    return _create_settings(config_path)
