"""Deterministic health scoring and risk classification.

Scores are computed from a single reading. Missing or non-numeric fields are
coerced to NaN, which fails every comparison: an absent parameter scores 0 and
contributes nothing to the risk accumulator.
"""

from __future__ import annotations

import math
from typing import Any

from aegis.domains.health.domain_logic.reading_models import (
    DEFAULT_BASELINE,
    GAS_LEVEL_WEIGHT,
    HEART_RATE_WEIGHT,
    POSTURE_FALLBACK_SCORE,
    POSTURE_SCORES,
    POSTURE_WEIGHT,
    RISK_CRITICAL_MIN,
    RISK_HIGH_MIN,
    RISK_MEDIUM_MIN,
    TEMPERATURE_WEIGHT,
    HealthBaseline,
    ParameterBaseline,
    Posture,
    RiskLevel,
    SensorReading,
)


def as_number(val: Any) -> float:
    """Convert to float, returning NaN for None, non-numeric or out-of-range values."""
    if val is None:
        return math.nan
    try:
        return float(val)
    except (TypeError, ValueError, OverflowError):
        return math.nan


def posture_code(val: Any) -> Posture | None:
    """Return the Posture for a 0/1/2 code, or None for anything else."""
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        return None
    if val in (0, 1, 2):
        return Posture(int(val))
    return None


def _clamp(value: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return max(lo, min(hi, value))


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


# ---------------------------------------------------------------------------
# Overall health
# ---------------------------------------------------------------------------

def compute_parameter_score(value: Any, baseline: ParameterBaseline) -> float:
    """Score one parameter in [0, 100] by its distance from the optimal point.

    Half the healthy range away from optimal costs 50 points; anything outside
    [min, max] scores 0.
    """
    v = as_number(value)
    if baseline.min <= v <= baseline.max:
        allowed_range = (baseline.max - baseline.min) / 2
        distance = abs(v - baseline.optimal)
        return max(0.0, 100 - (distance / allowed_range) * 50)
    return 0.0


def compute_posture_score(posture: Any) -> float:
    code = posture_code(posture)
    return float(POSTURE_SCORES.get(code, POSTURE_FALLBACK_SCORE))


def compute_overall_health(
    reading: SensorReading, baseline: HealthBaseline = DEFAULT_BASELINE
) -> int:
    """Weighted composite health score, an integer in [0, 100]."""
    score = 100.0
    score -= (100 - compute_parameter_score(reading.heart_rate, baseline.heart_rate)) * HEART_RATE_WEIGHT
    score -= (100 - compute_parameter_score(reading.temperature, baseline.temperature)) * TEMPERATURE_WEIGHT
    score -= (100 - compute_parameter_score(reading.gas_level, baseline.gas_level)) * GAS_LEVEL_WEIGHT
    score -= (100 - compute_posture_score(reading.posture)) * POSTURE_WEIGHT

    if math.isnan(score):
        return 0
    return _round_half_up(_clamp(score))


# ---------------------------------------------------------------------------
# Risk
# ---------------------------------------------------------------------------

def compute_risk_score(reading: SensorReading) -> int:
    """Additive risk accumulator over the threshold table."""
    hr = as_number(reading.heart_rate)
    temp = as_number(reading.temperature)
    gas = as_number(reading.gas_level)
    risk = 0

    if hr > 120 or hr < 50:
        risk += 3
    elif hr > 100 or hr < 60:
        risk += 2
    elif hr > 90 or hr < 65:
        risk += 1

    if temp > 38.0 or temp < 35.0:
        risk += 3
    elif temp > 37.5 or temp < 35.5:
        risk += 2

    if gas > 800:
        risk += 2
    elif gas > 600:
        risk += 1

    if posture_code(reading.posture) is Posture.POOR:
        risk += 1

    if reading.fall_detected:
        risk += 3
    if reading.flame_detected:
        risk += 3

    return risk


def classify_risk(risk_score: int) -> RiskLevel:
    """Map an accumulated risk score onto its tier."""
    if risk_score >= RISK_CRITICAL_MIN:
        return "critical"
    if risk_score >= RISK_HIGH_MIN:
        return "high"
    if risk_score >= RISK_MEDIUM_MIN:
        return "medium"
    return "low"


def assess_risk_level(reading: SensorReading) -> RiskLevel:
    return classify_risk(compute_risk_score(reading))
