"""Rule tables: health patterns, insights, recommendations and safety alerts.

Every rule reads only the current reading. The canned messages are immutable
module constants; results reuse them rather than building copies.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from aegis.domains.health.domain_logic.health_scoring import as_number, posture_code
from aegis.domains.health.domain_logic.reading_models import (
    Alert,
    Insight,
    PatternMatch,
    Posture,
    Recommendation,
    SensorReading,
    Severity,
)

HrvEstimator = Callable[[SensorReading], float]


# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

class PatternKind(str, Enum):
    STRESS = "stress_pattern"
    FATIGUE = "fatigue_pattern"
    FEVER = "fever_pattern"
    POOR_POSTURE = "poor_posture_pattern"


@dataclass(frozen=True)
class HealthPattern:
    """A named diagnostic pattern with canned description and advice."""

    kind: PatternKind
    description: str
    severity: Severity
    recommendation: str

    @property
    def name(self) -> str:
        return self.kind.value

    def to_match(self) -> PatternMatch:
        return PatternMatch(
            name=self.name,
            description=self.description,
            severity=self.severity,
            recommendation=self.recommendation,
        )


# Evaluation order is the order of this tuple.
HEALTH_PATTERNS: tuple[HealthPattern, ...] = (
    HealthPattern(
        kind=PatternKind.STRESS,
        description="Elevated heart rate with irregular breathing",
        severity="medium",
        recommendation="Practice deep breathing exercises",
    ),
    HealthPattern(
        kind=PatternKind.FATIGUE,
        description="Consistent low heart rate variability",
        severity="low",
        recommendation="Consider taking a short break",
    ),
    HealthPattern(
        kind=PatternKind.FEVER,
        description="Elevated body temperature",
        severity="high",
        recommendation="Monitor temperature and stay hydrated",
    ),
    HealthPattern(
        kind=PatternKind.POOR_POSTURE,
        description="Extended period of poor posture",
        severity="medium",
        recommendation="Adjust your sitting position",
    ),
)

FATIGUE_HRV_THRESHOLD = 20


def pattern_matches(
    pattern: HealthPattern, reading: SensorReading, hrv_estimator: HrvEstimator
) -> bool:
    """Evaluate one pattern's predicate against a reading.

    The HRV estimator is only consulted for the fatigue pattern.
    """
    kind = pattern.kind
    if kind is PatternKind.STRESS:
        return as_number(reading.heart_rate) > 85 and as_number(reading.gas_level) > 600
    if kind is PatternKind.FATIGUE:
        return as_number(hrv_estimator(reading)) < FATIGUE_HRV_THRESHOLD
    if kind is PatternKind.FEVER:
        return as_number(reading.temperature) > 37.2
    if kind is PatternKind.POOR_POSTURE:
        return posture_code(reading.posture) is Posture.POOR
    raise ValueError(f"Unknown pattern kind: {kind!r}")


def detect_patterns(
    reading: SensorReading,
    hrv_estimator: HrvEstimator,
    patterns: tuple[HealthPattern, ...] = HEALTH_PATTERNS,
) -> list[PatternMatch]:
    return [p.to_match() for p in patterns if pattern_matches(p, reading, hrv_estimator)]


# ---------------------------------------------------------------------------
# Insights
# ---------------------------------------------------------------------------

HEART_RATE_HIGH_INSIGHT = Insight(
    type="heart_rate_high",
    title="Elevated Heart Rate",
    description=(
        "Your heart rate is above normal range. "
        "This could indicate physical exertion or stress."
    ),
    severity="medium",
    icon="fas fa-heartbeat",
)
HEART_RATE_LOW_INSIGHT = Insight(
    type="heart_rate_low",
    title="Low Heart Rate",
    description=(
        "Your heart rate is below normal range. "
        "This is common in well-trained athletes."
    ),
    severity="low",
    icon="fas fa-heart",
)
TEMPERATURE_HIGH_INSIGHT = Insight(
    type="temperature_high",
    title="Elevated Temperature",
    description="Your body temperature is slightly elevated. Monitor for signs of fever.",
    severity="medium",
    icon="fas fa-thermometer-full",
)
AIR_QUALITY_POOR_INSIGHT = Insight(
    type="air_quality_poor",
    title="Poor Air Quality",
    description="Gas levels are elevated. Consider moving to better ventilated area.",
    severity="high",
    icon="fas fa-wind",
)
POSTURE_POOR_INSIGHT = Insight(
    type="posture_poor",
    title="Poor Posture Detected",
    description="Your posture needs adjustment for better ergonomics.",
    severity="low",
    icon="fas fa-user-slouch",
)
HEALTH_DECLINE_INSIGHT = Insight(
    type="health_decline",
    title="Health Trend Declining",
    description="Your overall health score has been consistently decreasing.",
    severity="medium",
    icon="fas fa-chart-line-down",
)


def generate_insights(reading: SensorReading) -> list[Insight]:
    """Threshold findings for the current reading (trend insights excluded)."""
    hr = as_number(reading.heart_rate)
    insights: list[Insight] = []

    if hr > 100:
        insights.append(HEART_RATE_HIGH_INSIGHT)
    elif hr < 60:
        insights.append(HEART_RATE_LOW_INSIGHT)

    if as_number(reading.temperature) > 37.2:
        insights.append(TEMPERATURE_HIGH_INSIGHT)

    if as_number(reading.gas_level) > 600:
        insights.append(AIR_QUALITY_POOR_INSIGHT)

    if posture_code(reading.posture) is Posture.POOR:
        insights.append(POSTURE_POOR_INSIGHT)

    return insights


# ---------------------------------------------------------------------------
# Recommendations
# ---------------------------------------------------------------------------

RELAXATION_RECOMMENDATION = Recommendation(
    type="relaxation",
    title="Take a Break",
    description=(
        "Your heart rate suggests you might be stressed. "
        "Consider taking a 5-minute break."
    ),
    priority="high",
    icon="fas fa-coffee",
)
HYDRATION_RECOMMENDATION = Recommendation(
    type="hydration",
    title="Stay Hydrated",
    description="Drink water to help regulate your body temperature.",
    priority="medium",
    icon="fas fa-tint",
)
VENTILATION_RECOMMENDATION = Recommendation(
    type="ventilation",
    title="Improve Ventilation",
    description="Air quality could be better. Open a window or move to fresh air.",
    priority="high",
    icon="fas fa-fan",
)
POSTURE_RECOMMENDATION = Recommendation(
    type="posture_correction",
    title="Adjust Posture",
    description="Sit up straight with your back supported for better ergonomics.",
    priority="low",
    icon="fas fa-user-check",
)
MOVEMENT_RECOMMENDATION = Recommendation(
    type="preventive",
    title="Regular Movement",
    description="Take short walking breaks every hour to maintain circulation.",
    priority="medium",
    icon="fas fa-walking",
)


def generate_recommendations(reading: SensorReading) -> list[Recommendation]:
    """Advisory list; always ends with the regular-movement reminder."""
    recommendations: list[Recommendation] = []

    if as_number(reading.heart_rate) > 90:
        recommendations.append(RELAXATION_RECOMMENDATION)
    if as_number(reading.temperature) > 37.0:
        recommendations.append(HYDRATION_RECOMMENDATION)
    if as_number(reading.gas_level) > 500:
        recommendations.append(VENTILATION_RECOMMENDATION)
    # A missing posture code counts as "not good"
    if posture_code(reading.posture) is not Posture.GOOD:
        recommendations.append(POSTURE_RECOMMENDATION)

    recommendations.append(MOVEMENT_RECOMMENDATION)
    return recommendations


# ---------------------------------------------------------------------------
# Alerts
# ---------------------------------------------------------------------------

FALL_ALERT = Alert(
    type="fall_detected",
    title="Fall Detected!",
    description="A fall has been detected. Please check if assistance is needed.",
    severity="critical",
    immediate_action=True,
    icon="fas fa-exclamation-triangle",
)
FLAME_ALERT = Alert(
    type="flame_detected",
    title="Fire Hazard!",
    description="Flame detected in the vicinity. Please evacuate if necessary.",
    severity="critical",
    immediate_action=True,
    icon="fas fa-fire",
)
HEART_RATE_EXTREME_ALERT = Alert(
    type="heart_rate_extreme",
    title="Critical Heart Rate",
    description=(
        "Heart rate is at dangerous levels. "
        "Seek medical attention if symptoms persist."
    ),
    severity="high",
    immediate_action=False,
    icon="fas fa-heart-crack",
)
TEMPERATURE_EXTREME_ALERT = Alert(
    type="temperature_extreme",
    title="Dangerous Body Temperature",
    description=(
        "Body temperature is at critical levels. "
        "Medical attention may be required."
    ),
    severity="high",
    immediate_action=False,
    icon="fas fa-temperature-high",
)


def check_alerts(reading: SensorReading) -> list[Alert]:
    """Safety alerts, independent of the health score and risk tier."""
    hr = as_number(reading.heart_rate)
    temp = as_number(reading.temperature)
    alerts: list[Alert] = []

    if reading.fall_detected:
        alerts.append(FALL_ALERT)
    if reading.flame_detected:
        alerts.append(FLAME_ALERT)
    if hr > 130 or hr < 45:
        alerts.append(HEART_RATE_EXTREME_ALERT)
    if temp > 39.0 or temp < 34.0:
        alerts.append(TEMPERATURE_EXTREME_ALERT)

    return alerts


def requires_notification(alert: Alert) -> bool:
    """Whether the viewer should raise a pop-up/sound for this alert."""
    return alert.severity == "critical" or alert.immediate_action
