"""Sensor connectors: abstraction layer for sensor reading retrieval."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from aegis.domains.health.domain_logic.reading_models import SensorReading


@runtime_checkable
class SensorReadingSource(Protocol):
    """Abstract interface for a stream of sensor snapshots.

    The monitor loop pulls readings without knowing whether they come from
    the hub's WebSocket feed, a replay file or the built-in simulator.
    """

    async def next_reading(self) -> SensorReading:
        """Return the next snapshot, waiting for it if necessary."""
        ...

    def is_connected(self) -> bool:
        """Whether real sensor hardware is behind this source."""
        ...

    @property
    def data_source(self) -> str:
        """Label for the active source: 'sensor_hub' or 'simulated'."""
        ...
