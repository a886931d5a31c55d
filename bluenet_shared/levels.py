"""Severity levels for LogService."""

from enum import IntEnum


class LogLevel(IntEnum):
    """Totally ordered severity. NONE is a threshold meaning "never emit"."""

    VERBOSE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    NONE = 5

    @classmethod
    def parse(cls, value: "str | int | LogLevel") -> "LogLevel":
        """Coerce a level name (case-insensitive), number or LogLevel.

        Raises:
            ValueError: If the value names no level
        """
        if isinstance(value, LogLevel):
            return value
        if isinstance(value, int):
            return cls(value)
        if not isinstance(value, str):
            raise ValueError(f"Unknown log level: {value!r}")
        name = value.strip().upper()
        if name == "WARNING":
            name = "WARN"
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"Unknown log level: {value!r}") from None
