"""Shared test fixtures for AEGIS health monitor tests."""

from __future__ import annotations

import random
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BASELINE_PROFILE_PATH", "")
    monkeypatch.setenv("HISTORY_CAPACITY", "1000")
    monkeypatch.setenv("RANDOM_SEED", "1234")
    monkeypatch.setenv("AEGIS_LOG_LEVEL", "info")

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from aegis.domains.health.domain_logic.health_engine import HealthAnalysisEngine  # noqa: E402
from aegis.domains.health.domain_logic.reading_models import SensorReading  # noqa: E402


def make_reading(**overrides) -> SensorReading:
    """Create a reading sitting exactly on every optimal point."""
    values = {
        "heart_rate": 72,
        "temperature": 36.6,
        "gas_level": 300,
        "posture": 0,
        "fall_detected": False,
        "flame_detected": False,
    }
    values.update(overrides)
    return SensorReading(**values)


class StepClock:
    """Deterministic clock advancing two seconds per call (hub push period)."""

    def __init__(self) -> None:
        self._now = datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self._now += timedelta(seconds=2)
        return self._now


@pytest.fixture
def optimal_reading() -> SensorReading:
    return make_reading()


@pytest.fixture
def health_engine() -> HealthAnalysisEngine:
    """Engine with a seeded random source and a stepping clock."""
    return HealthAnalysisEngine(rng=random.Random(42), clock=StepClock())


@pytest.fixture
def small_engine() -> HealthAnalysisEngine:
    """Engine with a tiny history, for eviction tests."""
    return HealthAnalysisEngine(history_capacity=3, rng=random.Random(42), clock=StepClock())
