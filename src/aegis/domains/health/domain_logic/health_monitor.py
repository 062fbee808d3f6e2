"""Monitor loop: pulls readings from a source and feeds the analysis engine."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from aegis.domains.health.domain_logic.health_rules import requires_notification
from aegis.domains.health.domain_logic.reading_models import AnalysisResult, SensorReading

if TYPE_CHECKING:
    from aegis.domains.health.connectors import SensorReadingSource
    from aegis.domains.health.domain_logic.health_engine import HealthAnalysisEngine

logger = logging.getLogger(__name__)

ResultListener = Callable[[SensorReading, AnalysisResult], None]


class HealthMonitor:
    """Drives an engine from a reading source at the hub's push interval.

    Listeners receive every ``(reading, result)`` pair; a failing listener is
    logged and skipped so one broken renderer cannot stall the feed.

    Usage::

        monitor = HealthMonitor(engine, SimulatedSensorHub(), interval_s=2.0)
        monitor.add_listener(lambda reading, result: print(result.overall_health))
        await monitor.run(max_readings=30)
    """

    def __init__(
        self,
        engine: HealthAnalysisEngine,
        source: SensorReadingSource,
        *,
        interval_s: float = 2.0,
        listeners: list[ResultListener] | None = None,
    ) -> None:
        if interval_s < 0:
            raise ValueError("interval_s must be non-negative")
        self._engine = engine
        self._source = source
        self._interval_s = interval_s
        self._listeners: list[ResultListener] = list(listeners or [])

    def add_listener(self, listener: ResultListener) -> None:
        self._listeners.append(listener)

    async def step(self) -> AnalysisResult:
        """Analyze exactly one reading from the source."""
        reading = await self._source.next_reading()
        result = self._engine.analyze(reading)

        for alert in result.alerts:
            if requires_notification(alert):
                logger.warning("%s %s", alert.title, alert.description)

        for listener in self._listeners:
            try:
                listener(reading, result)
            except Exception:
                logger.exception("Result listener %r failed", listener)

        return result

    async def run(self, max_readings: int | None = None) -> int:
        """Run until ``max_readings`` have been analyzed (forever if None).

        Returns the number of readings analyzed.
        """
        logger.info(
            "Monitoring %s source every %.1fs",
            self._source.data_source,
            self._interval_s,
        )
        count = 0
        while max_readings is None or count < max_readings:
            await self.step()
            count += 1
            if max_readings is None or count < max_readings:
                await asyncio.sleep(self._interval_s)
        return count
