"""Shared pytest fixtures for bluenet-shared tests."""

from __future__ import annotations

import io
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from loguru import logger

# 2024-03-10 12:00:00 UTC
START_TIME = datetime(2024, 3, 10, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Deterministic clock that only moves when told to."""

    def __init__(self, start: datetime = START_TIME):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FakeBattery:
    def __init__(self, level: float | None = 0.5):
        self.level = level

    def battery_level(self) -> float | None:
        return self.level


class FakeMemory:
    def __init__(self, footprint: float | None = 3 * 1024 * 1024):
        self.footprint = footprint

    def memory_footprint(self) -> float | None:
        return self.footprint


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def battery() -> FakeBattery:
    return FakeBattery()


@pytest.fixture
def memory() -> FakeMemory:
    return FakeMemory()


@pytest.fixture
def console() -> io.StringIO:
    """Console stream the service prints into."""
    return io.StringIO()


@pytest.fixture
def log_dir(tmp_path: Path) -> Path:
    return tmp_path / "logs"


@pytest.fixture
def make_service(log_dir, clock, battery, memory, console):
    """Factory building a LogService wired to the fakes above.

    Keyword arguments go to LogConfig; `sink` replaces the file sink.
    """
    from bluenet_shared.config import LogConfig
    from bluenet_shared.log_service import LogService

    def _make(sink=None, **config_kwargs):
        config_kwargs.setdefault("log_dir", log_dir)
        config_kwargs.setdefault("retention_days", 3)
        config_kwargs.setdefault("base_filename", "BluenetLog")
        config_kwargs.setdefault("print_level", "INFO")
        config_kwargs.setdefault("file_level", "NONE")
        config_kwargs.setdefault("print_timestamps", False)
        config_kwargs.setdefault("persist", True)
        return LogService(
            LogConfig(**config_kwargs),
            sink=sink,
            battery=battery,
            memory=memory,
            clock=clock,
            stream=console,
        )

    return _make


@pytest.fixture
def diagnostics() -> list[dict]:
    """Records emitted on the bluenet-shared diagnostics channel."""
    from bluenet_shared.log_config import PACKAGE

    records: list[dict] = []
    logger.enable(PACKAGE)
    handler_id = logger.add(
        lambda message: records.append(message.record),
        level=0,
        filter=lambda record: "bluenet_component" in record["extra"],
    )
    yield records
    logger.remove(handler_id)
    logger.disable(PACKAGE)
