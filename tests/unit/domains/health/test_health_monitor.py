"""Tests for the HealthMonitor feed loop."""

from __future__ import annotations

import asyncio
import logging

import pytest

from aegis.domains.health.domain_logic.health_monitor import HealthMonitor
from aegis.domains.health.domain_logic.reading_models import SensorReading


def _run(coro):
    """Run an async coroutine synchronously (no pytest-asyncio required)."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


class _ScriptedSource:
    """Replays a fixed list of readings."""

    def __init__(self, readings: list[SensorReading]) -> None:
        self._readings = list(readings)

    async def next_reading(self) -> SensorReading:
        return self._readings.pop(0)

    def is_connected(self) -> bool:
        return True

    @property
    def data_source(self) -> str:
        return "scripted"


def test_step_analyzes_one_reading(health_engine):
    source = _ScriptedSource([SensorReading(heart_rate=72, temperature=36.6, gas_level=300, posture=0)])
    monitor = HealthMonitor(health_engine, source, interval_s=0)
    result = _run(monitor.step())
    assert result.overall_health == 100
    assert health_engine.history == (result,)


def test_run_stops_after_max_readings(health_engine):
    source = _ScriptedSource([SensorReading(heart_rate=hr) for hr in (70, 80, 90, 100)])
    monitor = HealthMonitor(health_engine, source, interval_s=0)
    assert _run(monitor.run(max_readings=3)) == 3
    assert len(health_engine.history) == 3


def test_listeners_receive_reading_and_result(health_engine):
    reading = SensorReading(heart_rate=135)
    seen = []
    monitor = HealthMonitor(
        health_engine,
        _ScriptedSource([reading]),
        interval_s=0,
        listeners=[lambda r, res: seen.append((r, res))],
    )
    result = _run(monitor.step())
    assert seen == [(reading, result)]


def test_failing_listener_does_not_stop_feed(health_engine, caplog):
    def _broken(reading, result):
        raise RuntimeError("renderer down")

    seen = []
    monitor = HealthMonitor(
        health_engine,
        _ScriptedSource([SensorReading(heart_rate=72)] * 2),
        interval_s=0,
    )
    monitor.add_listener(_broken)
    monitor.add_listener(lambda r, res: seen.append(res))

    with caplog.at_level(logging.ERROR):
        assert _run(monitor.run(max_readings=2)) == 2
    assert len(seen) == 2
    assert "Result listener" in caplog.text


def test_critical_alerts_are_logged(health_engine, caplog):
    monitor = HealthMonitor(
        health_engine,
        _ScriptedSource([SensorReading(heart_rate=72, flame_detected=True)]),
        interval_s=0,
    )
    with caplog.at_level(logging.WARNING):
        _run(monitor.step())
    assert "Fire Hazard!" in caplog.text


def test_negative_interval_rejected(health_engine):
    with pytest.raises(ValueError):
        HealthMonitor(health_engine, _ScriptedSource([]), interval_s=-1)
