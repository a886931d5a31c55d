"""Daily log filenames and the persisted line format.

Each persisted line reads:
<epoch_ms> @ <yyyy-MM-dd HH:mm:ss> - battery:<float|unknown> - ram:<float>MB - <message>
"""

import math
import re
from dataclasses import dataclass
from datetime import date, datetime

FILENAME_DATE_FORMAT = "%Y-%m-%d"
LINE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_EXTENSION = ".log"
UNKNOWN_BATTERY = "unknown"

# Pattern to parse a persisted entry line
LOG_PATTERN = re.compile(
    r"^(-?\d+) @ (\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}) - battery:(\S+) - ram:([-\d.eE+]+)MB - (.*)$"
)


@dataclass
class LogEntry:
    """One parsed line of a daily log file."""

    timestamp_ms: int
    time: datetime
    battery: float | None  # None when the battery level was unknown
    ram_mb: float
    message: str


def _reading(value) -> float | None:
    """Telemetry value as a finite float, None if it is not one."""
    if value is None:
        return None
    try:
        value = float(value)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def log_filename(base: str, day: date) -> str:
    """Filename of the log file for base on day."""
    return f"{base}{day.strftime(FILENAME_DATE_FORMAT)}{LOG_EXTENSION}"


def format_entry(
    now: datetime,
    battery: float | None,
    memory_bytes: float | None,
    message: str,
) -> str:
    """Render one newline-terminated log file line.

    Non-numeric or non-finite telemetry counts as unknown. Line breaks in
    message are written as the two characters backslash-n (or backslash-r)
    so every entry stays on one line.

    Args:
        now: Time of the entry
        battery: Battery level 0.0-1.0, None if unknown
        memory_bytes: Memory footprint in bytes, None if unknown
        message: Already tagged message text
    """
    timestamp_ms = round(1000 * now.timestamp())
    battery = _reading(battery)
    battery_text = UNKNOWN_BATTERY if battery is None else str(battery)
    used_mb = float(int(_reading(memory_bytes) or 0)) / 1024 / 1024
    message = message.replace("\r", "\\r").replace("\n", "\\n")
    return (
        f"{timestamp_ms} @ {now.strftime(LINE_TIME_FORMAT)}"
        f" - battery:{battery_text} - ram:{used_mb}MB - {message}\n"
    )


def parse_entry(line: str) -> LogEntry | None:
    """Parse a persisted line, returning None if it does not match the format."""
    match = LOG_PATTERN.match(line.rstrip("\n"))
    if not match:
        return None

    timestamp_ms, time_text, battery_text, ram_text, message = match.groups()
    try:
        battery = None if battery_text == UNKNOWN_BATTERY else float(battery_text)
        return LogEntry(
            timestamp_ms=int(timestamp_ms),
            time=datetime.strptime(time_text, LINE_TIME_FORMAT),
            battery=battery,
            ram_mb=float(ram_text),
            message=message,
        )
    except ValueError:
        return None
