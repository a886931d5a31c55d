"""Telemetry provider tests for bluenet-shared.

Tests critical telemetry pathways:
- psutil-backed providers convert to the logged units
- Missing or failing sources degrade to None
"""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest


class TestPsutilBatteryProvider:
    """Test the psutil battery provider."""

    def test_percent_is_scaled_to_fraction(self):
        """psutil reports percent, the log wants 0.0-1.0."""
        from bluenet_shared.telemetry import PsutilBatteryProvider

        with patch("bluenet_shared.telemetry.psutil.sensors_battery", return_value=SimpleNamespace(percent=73.0)):
            assert PsutilBatteryProvider().battery_level() == 0.73

    def test_no_battery_is_none(self):
        """Machines without a battery report None."""
        from bluenet_shared.telemetry import PsutilBatteryProvider

        with patch("bluenet_shared.telemetry.psutil.sensors_battery", return_value=None):
            assert PsutilBatteryProvider().battery_level() is None


class TestProcessMemoryProvider:
    """Test the psutil process memory provider."""

    def test_reports_rss_bytes(self):
        from bluenet_shared.telemetry import ProcessMemoryProvider

        process = MagicMock()
        process.memory_info.return_value = SimpleNamespace(rss=1048576)
        with patch("bluenet_shared.telemetry.psutil.Process", return_value=process):
            provider = ProcessMemoryProvider()

        assert provider.memory_footprint() == 1048576.0

    def test_real_process_has_positive_footprint(self):
        """The current process always uses some memory."""
        from bluenet_shared.telemetry import ProcessMemoryProvider

        assert ProcessMemoryProvider().memory_footprint() > 0


class TestSampling:
    """Test failure handling when sampling providers."""

    def test_null_providers(self):
        from bluenet_shared.telemetry import NullBatteryProvider, NullMemoryProvider, sample_battery, sample_memory

        assert sample_battery(NullBatteryProvider()) is None
        assert sample_memory(NullMemoryProvider()) is None

    def test_failing_provider_is_none_and_reported(self, diagnostics):
        """An exception from a provider becomes None plus a warning."""
        from bluenet_shared.telemetry import sample_memory

        provider = MagicMock()
        provider.memory_footprint.side_effect = OSError("access denied")

        assert sample_memory(provider) is None
        assert any("Memory provider failed" in r["message"] for r in diagnostics)

    def test_providers_satisfy_protocols(self):
        from bluenet_shared.telemetry import (
            BatteryProvider,
            MemoryProvider,
            NullBatteryProvider,
            ProcessMemoryProvider,
            PsutilBatteryProvider,
        )

        assert isinstance(PsutilBatteryProvider(), BatteryProvider)
        assert isinstance(NullBatteryProvider(), BatteryProvider)
        assert isinstance(ProcessMemoryProvider(), MemoryProvider)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
