"""
Configuration for PocketNotes.

Settings are read from a YAML file:
- Config: $XDG_CONFIG_HOME/pocketnotes/config.yaml
- Data:   $POCKETNOTES_HOME, else $XDG_DATA_HOME/pocketnotes
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional
import logging
import os

import yaml

from .errors import ConfigError
from .storage.note_store import DEFAULT_KEY
from .storage.slots import validate_key

logger = logging.getLogger(__name__)

BACKENDS = ("file", "sqlite", "memory")


def get_config_dir() -> Path:
    """Get the config directory (XDG_CONFIG_HOME/pocketnotes)."""
    base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base / "pocketnotes"


def get_data_dir() -> Path:
    """Get the data directory (POCKETNOTES_HOME or XDG_DATA_HOME/pocketnotes)."""
    if env_home := os.environ.get("POCKETNOTES_HOME"):
        return Path(env_home).expanduser()
    base = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))
    return base / "pocketnotes"


def get_config_path() -> Path:
    """Get the path to config.yaml."""
    return get_config_dir() / "config.yaml"


@dataclass
class AppConfig:
    """Application settings.

    Attributes:
        storage_backend: One of "file", "sqlite" or "memory"
        storage_path: Directory (file) or database file (sqlite); defaults
            to a location under the data directory
        storage_key: Name of the slot holding the note collection
        log_level: Logging level name
    """
    storage_backend: str = "file"
    storage_path: Optional[Path] = None
    storage_key: str = DEFAULT_KEY
    log_level: str = "INFO"
    extra: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.storage_backend not in BACKENDS:
            raise ConfigError(
                f"Unknown storage backend '{self.storage_backend}' "
                f"(expected one of: {', '.join(BACKENDS)})"
            )
        self.storage_key = str(self.storage_key)
        try:
            validate_key(self.storage_key)
        except ValueError as e:
            raise ConfigError(str(e)) from e
        if self.storage_path is not None:
            self.storage_path = Path(os.path.expandvars(str(self.storage_path))).expanduser()

    def resolved_storage_path(self) -> Path:
        """Storage location, falling back to the data directory."""
        if self.storage_path is not None:
            return self.storage_path
        if self.storage_backend == "sqlite":
            return get_data_dir() / "pocketnotes.db"
        return get_data_dir()

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        data: dict[str, Any] = {
            "storage": {
                "backend": self.storage_backend,
                "key": self.storage_key,
            },
            "logging": {
                "level": self.log_level,
            },
        }
        if self.storage_path is not None:
            data["storage"]["path"] = str(self.storage_path)
        data.update(self.extra)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "AppConfig":
        """Create from the nested dictionary found in config.yaml."""
        storage = data.get("storage") or {}
        logging_section = data.get("logging") or {}
        if not isinstance(storage, dict) or not isinstance(logging_section, dict):
            raise ConfigError("'storage' and 'logging' must be mappings")

        path = storage.get("path")
        return cls(
            storage_backend=storage.get("backend", "file"),
            storage_path=Path(path) if path else None,
            storage_key=storage.get("key", DEFAULT_KEY),
            log_level=str(logging_section.get("level", "INFO")).upper(),
            extra={k: v for k, v in data.items() if k not in ("storage", "logging")},
        )


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """
    Load settings from a YAML file.

    Returns defaults if the file doesn't exist.

    Raises:
        ConfigError: If the file exists but cannot be parsed
    """
    config_path = config_path or get_config_path()

    if not config_path.exists():
        logger.warning(f"Config file not found: {config_path}; using defaults")
        return AppConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Error loading config {config_path}: {e}") from e

    if not data:
        return AppConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must be a mapping")

    config = AppConfig.from_dict(data)
    logger.info(f"Loaded config from {config_path}")
    return config


def save_config(config: AppConfig, config_path: Path) -> None:
    """Write settings to a YAML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, allow_unicode=True)

    logger.info(f"Saved config to {config_path}")


# Example configuration template
EXAMPLE_CONFIG = """# PocketNotes configuration

storage:
  # file:   one JSON file per slot in a directory
  # sqlite: a single SQLite database
  # memory: nothing is kept after exit
  backend: file
  # path: ~/notes
  key: notes

logging:
  level: INFO
"""


def write_example_config(config_path: Path) -> None:
    """Write an example configuration file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        f.write(EXAMPLE_CONFIG)
    logger.info(f"Wrote example configuration to {config_path}")
