"""Simulated sensor hub for development and testing.

Mirrors the firmware's placeholder generators: heart rate, temperature,
posture and falls are random on the device too. Gas and flame come from real
sensors there, so they are simulated here as an analog MQ-2 reading and a rare
flame trip.
"""

from __future__ import annotations

import random
import time
from dataclasses import replace

from aegis.domains.health.connectors.wire_format import derive_status
from aegis.domains.health.domain_logic.reading_models import SensorReading

FALL_PROBABILITY = 0.05
FLAME_PROBABILITY = 0.01
ADC_MAX = 4096  # 12-bit analog input


class SimulatedSensorHub:
    """Generates firmware-shaped readings. Always available."""

    def __init__(self, rng: random.Random | None = None, *, clients: int = 1) -> None:
        self._rng = rng or random.Random()
        self._clients = clients
        self._started = time.monotonic()
        self.readings_sent = 0

    def generate(self) -> SensorReading:
        rng = self._rng
        reading = SensorReading(
            heart_rate=70 + rng.randrange(-10, 15),
            temperature=25.0 + rng.randrange(-10, 10) / 10.0,
            gas_level=rng.randrange(0, ADC_MAX),
            posture=rng.randrange(0, 3),
            fall_detected=rng.random() < FALL_PROBABILITY,
            flame_detected=rng.random() < FLAME_PROBABILITY,
            timestamp=int(time.monotonic() - self._started),
            clients=self._clients,
        )
        self.readings_sent += 1
        return _with_status(reading)

    async def next_reading(self) -> SensorReading:
        return self.generate()

    def is_connected(self) -> bool:
        return False

    @property
    def data_source(self) -> str:
        return "simulated"


def _with_status(reading: SensorReading) -> SensorReading:
    return replace(reading, status=derive_status(reading))
