"""Rule-based health analysis engine.

Turns one sensor reading at a time into a scored, classified and annotated
``AnalysisResult``, keeping a bounded history of past results for trend
detection and prediction.
"""

from __future__ import annotations

import logging
import math
import random
import threading
from collections import deque
from collections.abc import Callable
from datetime import datetime, timezone
from itertools import islice

from aegis.domains.health.domain_logic.health_rules import (
    HEALTH_DECLINE_INSIGHT,
    HEALTH_PATTERNS,
    HrvEstimator,
    check_alerts,
    detect_patterns,
    generate_insights,
    generate_recommendations,
)
from aegis.domains.health.domain_logic.health_scoring import (
    as_number,
    assess_risk_level,
    compute_overall_health,
)
from aegis.domains.health.domain_logic.health_trends import (
    classify_slope,
    is_consistent_decline,
    least_squares_slope,
)
from aegis.domains.health.domain_logic.reading_models import (
    DECLINE_WINDOW,
    DEFAULT_BASELINE,
    HISTORY_CAPACITY,
    PREDICTION_WINDOW,
    AnalysisResult,
    HealthBaseline,
    HealthBreakdown,
    Insight,
    SensorReading,
    TrendDirection,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HealthAnalysisEngine:
    """Scores readings, classifies risk and derives insights and alerts.

    The engine owns its history; ``analyze`` is serialised with a lock so a
    single instance can be shared by a feed loop and a tool server.

    Usage::

        engine = HealthAnalysisEngine(rng=random.Random(7))
        result = engine.analyze(SensorReading(heart_rate=72, temperature=36.6))
        trend = engine.predict_trend()
    """

    def __init__(
        self,
        *,
        baseline: HealthBaseline = DEFAULT_BASELINE,
        history_capacity: int = HISTORY_CAPACITY,
        rng: random.Random | None = None,
        hrv_estimator: HrvEstimator | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if history_capacity < 1:
            raise ValueError("history_capacity must be at least 1")
        self._baseline = baseline
        self._rng = rng or random.Random()
        self._hrv_estimator = hrv_estimator or self._simulated_hrv
        self._clock = clock
        self._patterns = HEALTH_PATTERNS
        self._history: deque[AnalysisResult] = deque(maxlen=history_capacity)
        self._lock = threading.Lock()
        logger.info(
            "Health analysis engine initialized (%d patterns, history capacity %d)",
            len(self._patterns),
            history_capacity,
        )

    @property
    def baseline(self) -> HealthBaseline:
        return self._baseline

    @property
    def history(self) -> tuple[AnalysisResult, ...]:
        """Past results, oldest first."""
        with self._lock:
            return tuple(self._history)

    @property
    def history_capacity(self) -> int:
        return self._history.maxlen or 0

    def latest(self) -> AnalysisResult | None:
        with self._lock:
            return self._history[-1] if self._history else None

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    def analyze(self, reading: SensorReading) -> AnalysisResult:
        """Analyze one reading and append the result to history."""
        with self._lock:
            overall = compute_overall_health(reading, self._baseline)
            insights = generate_insights(reading)
            insights.extend(self._trend_insights(overall))

            result = AnalysisResult(
                timestamp=self._clock(),
                overall_health=overall,
                risk_level=assess_risk_level(reading),
                patterns=tuple(detect_patterns(reading, self._hrv_estimator, self._patterns)),
                insights=tuple(insights),
                recommendations=tuple(generate_recommendations(reading)),
                alerts=tuple(check_alerts(reading)),
            )
            self._history.append(result)

        logger.debug(
            "Analyzed reading: health=%d risk=%s patterns=%d alerts=%d",
            result.overall_health,
            result.risk_level,
            len(result.patterns),
            len(result.alerts),
        )
        return result

    def _trend_insights(self, current_score: int) -> list[Insight]:
        """Decline check over the most recent scores, including the current one."""
        prior = list(islice(reversed(self._history), DECLINE_WINDOW - 1))[::-1]
        scores = [r.overall_health for r in prior] + [current_score]
        if len(scores) < DECLINE_WINDOW:
            return []
        if is_consistent_decline(scores):
            return [HEALTH_DECLINE_INSIGHT]
        return []

    def _simulated_hrv(self, reading: SensorReading) -> float:
        # Placeholder: the hub reports no RR intervals to derive real HRV from.
        return self._rng.random() * 50 + 30

    # ------------------------------------------------------------------
    # Display helpers
    # ------------------------------------------------------------------

    def health_breakdown(self, overall_health: float) -> HealthBreakdown:
        """Jittered sub-scores for the dashboard breakdown bars.

        Stress is drawn independently of ``overall_health``.
        """
        overall = as_number(overall_health)
        if math.isnan(overall):
            overall = 0.0
        rng = self._rng
        cardiovascular = overall + (rng.random() * 20 - 10)
        respiratory = overall + (rng.random() * 15 - 7)
        stress = 100 - rng.random() * 30
        return HealthBreakdown(
            cardiovascular=_bounded(cardiovascular),
            respiratory=_bounded(respiratory),
            stress=_bounded(stress),
        )

    def predict_trend(self) -> TrendDirection:
        """Direction of the last few overall scores by least-squares slope."""
        history = self.history
        if len(history) < PREDICTION_WINDOW:
            return "stable"
        scores = [r.overall_health for r in history[-PREDICTION_WINDOW:]]
        return classify_slope(least_squares_slope(scores))


def _bounded(value: float) -> float:
    return max(0.0, min(100.0, value))
