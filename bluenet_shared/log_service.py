"""Leveled, thread-safe logger with daily log files and retention.

LogService prints to a console stream and appends to one file per base name
and day. Files older than the retention window are removed on construction
and whenever the base name or retention changes.

CONCURRENCY:
Every public method holds one reentrant lock for its whole duration, so
console lines and file appends from concurrent threads never interleave.
The lock only covers this process; several processes sharing one log
directory are not coordinated.

Logging calls never raise. I/O and telemetry failures are reported through
the diagnostics logger and the single entry or file is skipped.
"""

import sys
import threading
from collections.abc import Callable
from datetime import date, datetime, timedelta
from typing import TextIO

from bluenet_shared.config import LogConfig
from bluenet_shared.entries import LogEntry, format_entry, log_filename, parse_entry
from bluenet_shared.levels import LogLevel
from bluenet_shared.log_config import get_logger
from bluenet_shared.sinks import FileLogSink, LogSink, NullLogSink
from bluenet_shared.telemetry import (
    BatteryProvider,
    MemoryProvider,
    ProcessMemoryProvider,
    PsutilBatteryProvider,
    sample_battery,
    sample_memory,
)

log = get_logger("log_service")

CONSOLE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S %z"


def _local_now() -> datetime:
    return datetime.now().astimezone()


class LogService:
    """Guarded, stateful logger for one log group.

    Construct once and pass the instance to every caller that logs into the
    same group. All collaborators are injectable:

    - sink: storage backend (default: FileLogSink on config.log_dir, or
      NullLogSink when config.persist is False)
    - battery / memory: telemetry sampled on each file write
    - clock: returns the current aware datetime
    - stream: console destination (default: sys.stdout at call time)
    """

    def __init__(
        self,
        config: LogConfig | None = None,
        *,
        sink: LogSink | None = None,
        battery: BatteryProvider | None = None,
        memory: MemoryProvider | None = None,
        clock: Callable[[], datetime] | None = None,
        stream: TextIO | None = None,
    ):
        """Initialize the service and run the first retention cleanup.

        Args:
            config: Levels, names and retention (default: LogConfig())
            sink: Storage backend override
            battery: Battery level provider
            memory: Memory footprint provider
            clock: Source of the current time
            stream: Console output stream
        """
        self._lock = threading.RLock()
        config = config or LogConfig()

        self._print_level = config.print_level
        self._file_level = config.file_level
        self._base_filename = config.base_filename
        self._print_timestamps = config.print_timestamps
        self._retention_days = config.retention_days
        self._last_timestamp = 0.0

        if sink is None:
            sink = FileLogSink(config.log_dir) if config.persist else NullLogSink()
        self._sink = sink
        self._battery = battery or PsutilBatteryProvider()
        self._memory = memory or ProcessMemoryProvider()
        self._clock = clock or _local_now
        self._stream = stream

        log.info(f"LogService '{self._base_filename}' using {type(sink).__name__} at {sink.location}")
        self.clean_logs()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def print_level(self) -> LogLevel:
        return self._print_level

    @property
    def file_level(self) -> LogLevel:
        return self._file_level

    @property
    def base_filename(self) -> str:
        return self._base_filename

    @property
    def print_timestamps(self) -> bool:
        return self._print_timestamps

    @property
    def retention_days(self) -> int:
        return self._retention_days

    @property
    def last_timestamp(self) -> float:
        return self._last_timestamp

    @property
    def sink(self) -> LogSink:
        return self._sink

    def set_print_level(self, level: LogLevel | str) -> None:
        level = LogLevel.parse(level)
        with self._lock:
            self._print_level = level

    def set_file_level(self, level: LogLevel | str) -> None:
        level = LogLevel.parse(level)
        with self._lock:
            self._file_level = level

    def set_timestamp_printing(self, enabled: bool) -> None:
        with self._lock:
            self._print_timestamps = enabled

    def set_base_filename(self, base_filename: str) -> None:
        """Switch to a new base name.

        Every file of the current base is deleted first, whatever its date.
        """
        if not base_filename:
            raise ValueError("base_filename must not be empty")
        with self._lock:
            self.clear_logs()
            self._base_filename = base_filename
            self.clean_logs()

    def set_retention_days(self, days: int) -> None:
        if days < 0:
            raise ValueError(f"retention days must be >= 0, got {days}")
        with self._lock:
            self._retention_days = days
            self.clean_logs()

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------

    def verbose(self, message: str) -> None:
        self.log(LogLevel.VERBOSE, message)

    def debug(self, message: str) -> None:
        self.log(LogLevel.DEBUG, message)

    def info(self, message: str) -> None:
        self.log(LogLevel.INFO, message)

    def warn(self, message: str) -> None:
        self.log(LogLevel.WARN, message)

    def error(self, message: str) -> None:
        self.log(LogLevel.ERROR, message)

    def file(self, message: str) -> None:
        """Write message to today's file regardless of the level thresholds."""
        with self._lock:
            self._write_file_entry(f"-- FILE: {message}", self._base_filename)

    def log(self, level: LogLevel | str, message: str, write_to_file: bool = True) -> None:
        """Emit message at level to each sink whose threshold it reaches.

        Args:
            level: Severity of the message; NONE is never emitted
            message: Text to log
            write_to_file: False keeps this message out of the log file

        An unknown level name is reported on the diagnostics channel and the
        message is dropped.
        """
        try:
            level = LogLevel.parse(level)
        except ValueError as e:
            log.error(f"Dropping message with invalid level: {e}")
            return
        if level is LogLevel.NONE:
            return

        data = f"-- {level.name}: {message}"
        with self._lock:
            if self._print_level <= level:
                self._print(data)
            if write_to_file and self._file_level <= level:
                self._write_file_entry(data, self._base_filename)

    def _print(self, data: str) -> None:
        stream = self._stream or sys.stdout
        if self._print_timestamps:
            now = self._clock()
            timestamp = now.timestamp()
            delta = timestamp - self._last_timestamp
            self._last_timestamp = timestamp
            data = f"{timestamp} (dt: {delta}) @ {now.strftime(CONSOLE_TIME_FORMAT)} {data}"
        try:
            print(data, file=stream, flush=True)
        except (OSError, ValueError) as e:
            log.error(f"Could not print log line: {e}")

    def _write_file_entry(self, data: str, base: str) -> None:
        """Append one entry to the file of base for the current day.

        Caller must hold the lock.
        """
        now = self._clock()
        filename = log_filename(base, now.date())
        content = format_entry(
            now,
            battery=sample_battery(self._battery),
            memory_bytes=sample_memory(self._memory),
            message=data,
        )
        try:
            # Lone surrogates (e.g. undecodable filenames) must not escape
            self._sink.append(filename, content.encode("utf-8", errors="backslashreplace"))
        except OSError as e:
            log.error(f"Could not write to file {filename}: {e}")

    # ------------------------------------------------------------------
    # Retention
    # ------------------------------------------------------------------

    def clean_logs(self) -> int:
        """Remove files of the current base outside the retention window."""
        with self._lock:
            return self.clear_logs(self._retention_days)

    def clear_logs(self, keep_days: int = 0) -> int:
        """Remove files of the current base, keeping the last keep_days days.

        keep_days=0 removes every file of the base. keep_days=d > 0 keeps the
        files dated today, today-1, ..., today-d, i.e. d+1 daily files.

        Returns:
            Number of files removed
        """
        with self._lock:
            base = self._base_filename
            today = self._clock().date()
            allowed: set[str] = set()
            if keep_days > 0:
                allowed = {log_filename(base, today - timedelta(days=i)) for i in range(keep_days + 1)}

            try:
                names = self._sink.names()
            except OSError as e:
                log.error(f"Could not list log files at {self._sink.location}: {e}")
                return 0

            removed = 0
            for name in names:
                if base not in name or name in allowed:
                    continue
                try:
                    self._sink.remove(name)
                    removed += 1
                except OSError as e:
                    log.error(f"Could not remove file {name}: {e}")

            if removed:
                log.info(f"Removed {removed} log file(s) of '{base}' (keep_days={keep_days})")
            return removed

    # ------------------------------------------------------------------
    # Read-back
    # ------------------------------------------------------------------

    def current_log_file(self) -> str:
        """Filename that entries written now end up in."""
        with self._lock:
            return log_filename(self._base_filename, self._clock().date())

    def read_entries(self, day: date | None = None) -> list[LogEntry]:
        """Parse the file of the current base for day (default: today).

        Lines that do not match the entry format are skipped.
        """
        with self._lock:
            day = day or self._clock().date()
            filename = log_filename(self._base_filename, day)
            if filename not in self._safe_names():
                return []
            try:
                text = self._sink.read_text(filename)
            except OSError as e:
                log.error(f"Could not read log file {filename}: {e}")
                return []

        entries = []
        # Entries never contain a raw newline, so split on it alone
        for line in text.split("\n"):
            if not line:
                continue
            entry = parse_entry(line)
            if entry is None:
                log.debug(f"Skipping unparseable line in {filename}: {line[:80]}")
                continue
            entries.append(entry)
        return entries

    def _safe_names(self) -> list[str]:
        try:
            return self._sink.names()
        except OSError as e:
            log.error(f"Could not list log files at {self._sink.location}: {e}")
            return []
