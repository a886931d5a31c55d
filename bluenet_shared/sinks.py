"""Storage backends for persisted log files.

A LogSink owns a flat namespace of log files. Backends raise OSError on
failure; LogService decides what a failure means for the caller.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from bluenet_shared.log_config import get_logger

log = get_logger("sinks")


class LogSink(ABC):
    """Abstract base class for log file storage."""

    @property
    @abstractmethod
    def location(self) -> Path | None:
        """Directory backing this sink, None if nothing is persisted."""
        pass

    @abstractmethod
    def append(self, name: str, data: bytes) -> None:
        """Append data to the file called name, creating it if absent."""
        pass

    @abstractmethod
    def names(self) -> list[str]:
        """Names of all files currently stored."""
        pass

    @abstractmethod
    def remove(self, name: str) -> None:
        """Delete the file called name."""
        pass

    @abstractmethod
    def read_text(self, name: str) -> str:
        """Full contents of the file called name."""
        pass


class FileLogSink(LogSink):
    """Log files in a single directory on the local filesystem."""

    def __init__(self, directory: Path | str):
        """Initialize the sink and create its directory.

        Args:
            directory: Directory that holds the log files
        """
        self.directory = Path(directory)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            # Later operations fail with OSError and are reported by the caller
            log.error(f"Could not create log directory {self.directory}: {e}")
        else:
            log.debug(f"FileLogSink initialized at {self.directory}")

    @property
    def location(self) -> Path:
        return self.directory

    def path_for(self, name: str) -> Path:
        return self.directory / name

    def append(self, name: str, data: bytes) -> None:
        # Append mode positions every write at end of file
        with self.path_for(name).open("ab") as fh:
            fh.write(data)

    def names(self) -> list[str]:
        return sorted(p.name for p in self.directory.iterdir() if p.is_file())

    def remove(self, name: str) -> None:
        self.path_for(name).unlink()
        log.debug(f"Removed log file {name}")

    def read_text(self, name: str) -> str:
        return self.path_for(name).read_text(encoding="utf-8", errors="replace")


class NullLogSink(LogSink):
    """Sink for platforms without persistent storage; drops every write."""

    @property
    def location(self) -> None:
        return None

    def append(self, name: str, data: bytes) -> None:
        pass

    def names(self) -> list[str]:
        return []

    def remove(self, name: str) -> None:
        pass

    def read_text(self, name: str) -> str:
        return ""
