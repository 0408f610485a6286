"""
procsignal Configuration
"""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Mapping, Optional

import yaml

# Environment variable that relocates the process-information root
PROC_ROOT_ENV = "HOST_PROC"
DEFAULT_PROC_ROOT = "/proc"

# Kernel truncates the status Name field at this many bytes
TRUNCATED_NAME_LENGTH = 15

# Logging
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


class ConfigError(ValueError):
    """Raised when a configuration file or value is invalid."""


def host_proc(*parts: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Return the process-information root joined with ``parts``.

    An empty ``HOST_PROC`` value counts as unset.
    """
    if environ is None:
        environ = os.environ
    root = environ.get(PROC_ROOT_ENV) or DEFAULT_PROC_ROOT
    if not parts:
        return root
    return os.path.join(root, *parts)


@dataclass
class Settings:
    """Values that may come from a YAML config file."""
    proc_root: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[str] = None
    ignore_vanished: bool = False

    @property
    def level(self) -> int:
        """Numeric logging level for ``log_level``."""
        try:
            return LOG_LEVELS[str(self.log_level).upper()]
        except KeyError:
            raise ConfigError(f"Unknown log level: {self.log_level}") from None


def load_config(path: Path) -> Settings:
    """
    Load settings from a YAML file.

    An empty document yields the defaults.
    """
    path = Path(path)
    try:
        content = path.read_text(encoding='utf-8')
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys in {path}: {', '.join(map(str, unknown))}")

    if not isinstance(data.get("ignore_vanished", False), bool):
        raise ConfigError("ignore_vanished must be true or false")
    for key in ("proc_root", "log_file"):
        if data.get(key) is not None and not isinstance(data[key], str):
            raise ConfigError(f"{key} must be a path string")
    if not isinstance(data.get("log_level", DEFAULT_LOG_LEVEL), str):
        raise ConfigError("log_level must be a string")

    settings = Settings(**data)
    if settings.log_level.upper() not in LOG_LEVELS:
        raise ConfigError(f"Unknown log level: {settings.log_level}")
    return settings
