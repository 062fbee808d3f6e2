"""Sensor reading and analysis result models, plus the engine's domain constants."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from enum import IntEnum
from typing import Any, Literal

Severity = Literal["low", "medium", "high", "critical"]
RiskLevel = Literal["low", "medium", "high", "critical"]
TrendDirection = Literal["improving", "stable", "declining"]
DeviceStatus = Literal["NORMAL", "WARNING", "EMERGENCY"]


class Posture(IntEnum):
    """Posture codes as reported by the sensor hub."""

    GOOD = 0
    FAIR = 1
    POOR = 2


# ---------------------------------------------------------------------------
# Baseline ranges
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ParameterBaseline:
    """Healthy range and optimal point for one scored parameter."""

    min: float
    max: float
    optimal: float


@dataclass(frozen=True)
class HealthBaseline:
    """Baselines for the three range-scored parameters."""

    heart_rate: ParameterBaseline = ParameterBaseline(min=60, max=100, optimal=72)
    temperature: ParameterBaseline = ParameterBaseline(min=36.0, max=37.5, optimal=36.6)
    gas_level: ParameterBaseline = ParameterBaseline(min=0, max=1000, optimal=300)


DEFAULT_BASELINE = HealthBaseline()

# ---------------------------------------------------------------------------
# Scoring weights: heart rate dominates, posture is a minor ergonomic factor
# ---------------------------------------------------------------------------

HEART_RATE_WEIGHT = 0.4
TEMPERATURE_WEIGHT = 0.3
GAS_LEVEL_WEIGHT = 0.2
POSTURE_WEIGHT = 0.1

POSTURE_SCORES = {Posture.GOOD: 100, Posture.FAIR: 70}
POSTURE_FALLBACK_SCORE = 30     # Poor, or no usable posture code

# Risk accumulator -> tier. Tuned independently from the weights above.
RISK_CRITICAL_MIN = 5
RISK_HIGH_MIN = 3
RISK_MEDIUM_MIN = 2

# ---------------------------------------------------------------------------
# History and trend windows
# ---------------------------------------------------------------------------

HISTORY_CAPACITY = 1000
DECLINE_WINDOW = 10
DECLINE_RATIO = 0.7
PREDICTION_WINDOW = 5
PREDICTION_SLOPE_THRESHOLD = 2.0


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SensorReading:
    """One snapshot pushed by the sensor hub.

    Every field is optional. The engine does not validate ranges; absent or
    non-numeric values simply fail every threshold check.
    """

    heart_rate: float | None = None
    temperature: float | None = None
    gas_level: float | None = None
    posture: int | None = None
    fall_detected: bool = False
    flame_detected: bool = False

    # Extended sensors, passed through but never scored
    humidity: float | None = None
    stress_level: float | None = None
    motion_detected: bool | None = None
    latitude: float | None = None
    longitude: float | None = None
    gps_fixed: bool | None = None
    satellites: int | None = None

    # Firmware envelope
    status: str | None = None
    timestamp: int | None = None
    clients: int | None = None


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PatternMatch:
    name: str
    description: str
    severity: Severity
    recommendation: str


@dataclass(frozen=True)
class Insight:
    type: str
    title: str
    description: str
    severity: Severity
    icon: str


@dataclass(frozen=True)
class Recommendation:
    type: str
    title: str
    description: str
    priority: Severity
    icon: str


@dataclass(frozen=True)
class Alert:
    type: str
    title: str
    description: str
    severity: Severity
    immediate_action: bool
    icon: str


@dataclass(frozen=True)
class AnalysisResult:
    """Derived scoring and alerting result for a single reading."""

    timestamp: datetime
    overall_health: int
    risk_level: RiskLevel
    patterns: tuple[PatternMatch, ...] = ()
    insights: tuple[Insight, ...] = ()
    recommendations: tuple[Recommendation, ...] = ()
    alerts: tuple[Alert, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly representation for renderers and tool responses."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "overall_health": self.overall_health,
            "risk_level": self.risk_level,
            "patterns": [asdict(p) for p in self.patterns],
            "insights": [asdict(i) for i in self.insights],
            "recommendations": [asdict(r) for r in self.recommendations],
            "alerts": [asdict(a) for a in self.alerts],
        }


@dataclass(frozen=True)
class HealthBreakdown:
    """Display sub-scores; jittered on purpose, not a reproducible metric."""

    cardiovascular: float
    respiratory: float
    stress: float

    def to_dict(self) -> dict[str, float]:
        return {
            "cardiovascular": round(self.cardiovascular, 2),
            "respiratory": round(self.respiratory, 2),
            "stress": round(self.stress, 2),
        }
