"""Configuration for bluenet-shared logging.

Simple dataclass-based configuration with sensible defaults.
Override via environment variables with BLUENET_LOG_ prefix.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from bluenet_shared.levels import LogLevel
from bluenet_shared.log_config import get_logger

log = get_logger("config")

# Load .env file if present (existing environment wins)
_env_loaded = load_dotenv()
log.debug(f"Loaded .env file: {_env_loaded}")

DEFAULT_BASE_FILENAME = "BluenetLog"
DEFAULT_RETENTION_DAYS = 3


def _get_env(key: str, default: str) -> str:
    """Get environment variable with BLUENET_LOG_ prefix."""
    return os.getenv(f"BLUENET_LOG_{key}", default)


def _get_env_bool(key: str, default: bool) -> bool:
    """Get boolean environment variable."""
    val = os.getenv(f"BLUENET_LOG_{key}")
    if val is None:
        return default
    return val.lower() in ("true", "1", "yes")


@dataclass
class LogConfig:
    """LogService configuration.

    Attributes:
        retention_days: Previous days of log files kept besides today (default: 3)
        base_filename: Stem of the daily log filenames (default: BluenetLog)
        log_dir: Directory holding the log files (default: ~/.bluenet/logs)
        print_level: Minimum severity printed to the console (default: INFO)
        file_level: Minimum severity written to the log file (default: NONE)
        print_timestamps: Prefix console lines with timestamp and delta (default: False)
        persist: Write files at all; False selects a no-op storage backend (default: True)
    """

    retention_days: int = field(
        default_factory=lambda: int(_get_env("RETENTION_DAYS", str(DEFAULT_RETENTION_DAYS)))
    )
    base_filename: str = field(
        default_factory=lambda: _get_env("BASE_FILENAME", DEFAULT_BASE_FILENAME)
    )
    log_dir: Path = field(
        default_factory=lambda: Path(_get_env("DIR", str(Path.home() / ".bluenet" / "logs")))
    )
    print_level: LogLevel = field(
        default_factory=lambda: LogLevel.parse(_get_env("PRINT_LEVEL", "INFO"))
    )
    file_level: LogLevel = field(
        default_factory=lambda: LogLevel.parse(_get_env("FILE_LEVEL", "NONE"))
    )
    print_timestamps: bool = field(
        default_factory=lambda: _get_env_bool("PRINT_TIMESTAMPS", False)
    )
    persist: bool = field(
        default_factory=lambda: _get_env_bool("PERSIST", True)
    )

    def __post_init__(self):
        """Normalize field types and validate."""
        if isinstance(self.log_dir, str):
            self.log_dir = Path(self.log_dir)
        self.log_dir = self.log_dir.expanduser()
        self.print_level = LogLevel.parse(self.print_level)
        self.file_level = LogLevel.parse(self.file_level)

        if self.retention_days < 0:
            raise ValueError(f"retention_days must be >= 0, got {self.retention_days}")
        if not self.base_filename:
            raise ValueError("base_filename must not be empty")

        log.debug(f"log_dir={self.log_dir}, persist={self.persist}")
        log.debug(f"print_level={self.print_level.name}, file_level={self.file_level.name}")
        log.debug(f"base_filename={self.base_filename}, retention_days={self.retention_days}")
