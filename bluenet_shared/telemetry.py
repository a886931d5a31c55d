"""Device telemetry sampled into every persisted log line.

Providers are injected into LogService so hosts and tests can supply their
own sources. Both readings are optional; None means "unavailable".
"""

from typing import Protocol, runtime_checkable

import psutil

from bluenet_shared.log_config import get_logger

log = get_logger("telemetry")


@runtime_checkable
class BatteryProvider(Protocol):
    """Protocol for battery level capability."""

    def battery_level(self) -> float | None:
        """Battery charge in the range 0.0-1.0, None if unknown."""
        ...


@runtime_checkable
class MemoryProvider(Protocol):
    """Protocol for memory footprint capability."""

    def memory_footprint(self) -> float | None:
        """Memory used by this process in bytes, None if unknown."""
        ...


class PsutilBatteryProvider:
    """Battery level from the operating system via psutil."""

    def battery_level(self) -> float | None:
        battery = psutil.sensors_battery()
        if battery is None:
            return None
        return round(battery.percent / 100, 2)


class ProcessMemoryProvider:
    """Resident memory of the current process via psutil."""

    def __init__(self):
        self._process = psutil.Process()

    def memory_footprint(self) -> float | None:
        return float(self._process.memory_info().rss)


class NullBatteryProvider:
    def battery_level(self) -> float | None:
        return None


class NullMemoryProvider:
    def memory_footprint(self) -> float | None:
        return None


def sample_battery(provider: BatteryProvider) -> float | None:
    """Read the battery level, treating provider failures as unknown."""
    try:
        return provider.battery_level()
    except Exception as e:
        log.warning(f"Battery provider failed: {e}")
        return None


def sample_memory(provider: MemoryProvider) -> float | None:
    """Read the memory footprint, treating provider failures as unknown."""
    try:
        return provider.memory_footprint()
    except Exception as e:
        log.warning(f"Memory provider failed: {e}")
        return None
