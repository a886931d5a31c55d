"""Data-access protocols shared by Bluenet host applications.

These carry no implementation; hosts provide scanners and classifiers that
satisfy them.
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class IBeaconPacket(Protocol):
    """A received iBeacon advertisement."""

    @property
    def rssi(self) -> float:
        """Received signal strength in dBm."""
        ...

    @property
    def id_string(self) -> str:
        """Beacon identifier (UUID with major and minor)."""
        ...


@runtime_checkable
class LocalizationClassifier(Protocol):
    """Protocol for indoor localization capability."""

    def classify(self, input_vector: Sequence[IBeaconPacket], collection_id: str) -> str | None:
        """Return the location id for the packets, None if undecided."""
        ...
