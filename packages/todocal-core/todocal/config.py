"""
Todocal Configuration

Loads settings from ~/.todocal/config.yaml with environment variable overrides.
Controls where calendar files are stored and how verbosely Todocal logs.
"""

from __future__ import annotations
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional
import os
import logging

import yaml

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".todocal"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class StorageConfig:
    """Calendar storage settings."""

    calendars_dir: Optional[str] = None  # explicit directory, skips the search
    search_from: Optional[str] = None  # where the upward search starts (default: cwd)
    create_missing: bool = True


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "INFO"


@dataclass
class TodocalConfig:
    """
    Complete Todocal configuration.

    Loaded from ~/.todocal/config.yaml with environment variable overrides.
    """

    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Convenience accessors
    @property
    def calendars_dir(self) -> Optional[Path]:
        if not self.storage.calendars_dir:
            return None
        return Path(self.storage.calendars_dir).expanduser()

    @property
    def log_level(self) -> int:
        return getattr(logging, self.logging.level, logging.INFO)

    def to_dict(self) -> dict:
        """Convert to dictionary for display."""
        return asdict(self)


def _normalize_level(level: Optional[str]) -> str:
    value = str(level or "INFO").upper()
    if value not in LOG_LEVELS:
        logger.warning(f"Unknown log level '{level}', using INFO")
        return "INFO"
    return value


def _parse_storage_config(data: dict) -> StorageConfig:
    """Parse storage configuration from YAML data."""
    storage_data = data.get("storage") or {}

    return StorageConfig(
        calendars_dir=storage_data.get("calendars_dir"),
        search_from=storage_data.get("search_from"),
        create_missing=bool(storage_data.get("create_missing", True)),
    )


def _parse_logging_config(data: dict) -> LoggingConfig:
    """Parse logging configuration from YAML data."""
    logging_data = data.get("logging") or {}

    return LoggingConfig(level=_normalize_level(logging_data.get("level")))


def load_config(config_path: Optional[Path] = None) -> TodocalConfig:
    """
    Load configuration from file with environment variable overrides.

    Args:
        config_path: Optional path to config file. Defaults to ~/.todocal/config.yaml

    Returns:
        TodocalConfig instance
    """
    config_file = config_path or CONFIG_FILE
    config = TodocalConfig()

    if config_file.exists():
        try:
            with open(config_file, 'r') as f:
                data = yaml.safe_load(f) or {}

            if not isinstance(data, dict):
                raise ValueError("top level must be a mapping")

            config.storage = _parse_storage_config(data)
            config.logging = _parse_logging_config(data)

        except yaml.YAMLError as e:
            logger.warning(f"Could not parse config file at {config_file}: {e}")
        except (OSError, ValueError, AttributeError) as e:
            logger.warning(f"Unexpected error loading config from {config_file}: {e}")

    # Environment variable overrides
    if os.environ.get("TODOCAL_CALENDARS_DIR"):
        config.storage.calendars_dir = os.environ["TODOCAL_CALENDARS_DIR"]

    if os.environ.get("TODOCAL_LOG_LEVEL"):
        config.logging.level = _normalize_level(os.environ["TODOCAL_LOG_LEVEL"])

    return config


def save_config(config: TodocalConfig, config_path: Optional[Path] = None) -> None:
    """
    Save configuration to file.

    Args:
        config: TodocalConfig instance to save
        config_path: Optional path to config file. Defaults to ~/.todocal/config.yaml
    """
    if config_path is None:
        config_file = ensure_config_dir() / CONFIG_FILE.name
    else:
        config_file = config_path
        config_file.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "storage": {},
        "logging": {"level": config.logging.level},
    }

    if config.storage.calendars_dir:
        data["storage"]["calendars_dir"] = config.storage.calendars_dir
    if config.storage.search_from:
        data["storage"]["search_from"] = config.storage.search_from
    if not config.storage.create_missing:
        data["storage"]["create_missing"] = False

    with open(config_file, 'w') as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    logger.info(f"Configuration saved to {config_file}")


def ensure_config_dir() -> Path:
    """Ensure config directory exists and return its path."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    return CONFIG_DIR


# Cached config instance
_config: Optional[TodocalConfig] = None


def get_config() -> TodocalConfig:
    """Get cached config instance, loading if needed."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config() -> TodocalConfig:
    """Force reload config from file."""
    global _config
    _config = load_config()
    return _config
