"""bluenet-shared - logging and protocols shared by Bluenet applications.

Provides:
- LogService: leveled, thread-safe logger with daily log files
- Retention of the last N days of log files
- Pluggable storage backends and telemetry providers
"""

__version__ = "0.1.0"

from bluenet_shared.config import LogConfig
from bluenet_shared.entries import LogEntry
from bluenet_shared.levels import LogLevel
from bluenet_shared.log_config import configure_diagnostics
from bluenet_shared.log_service import LogService
from bluenet_shared.protocols import IBeaconPacket, LocalizationClassifier
from bluenet_shared.sinks import FileLogSink, LogSink, NullLogSink
from bluenet_shared.telemetry import BatteryProvider, MemoryProvider

__all__ = [
    "LogConfig",
    "LogEntry",
    "LogLevel",
    "LogService",
    "LogSink",
    "FileLogSink",
    "NullLogSink",
    "BatteryProvider",
    "MemoryProvider",
    "IBeaconPacket",
    "LocalizationClassifier",
    "configure_diagnostics",
]
