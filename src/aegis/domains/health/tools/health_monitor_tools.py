"""MCP tools exposing the health analysis engine.

Readings are accepted in the hub's wire format (camelCase keys), so a viewer
can forward frames unchanged.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from fastmcp import FastMCP

from aegis.domains.health.connectors.wire_format import (
    derive_status,
    parse_sensor_message,
    reading_to_dict,
)
from aegis.domains.health.domain_logic.health_rules import requires_notification
from aegis.domains.health.domain_logic.reading_models import AnalysisResult, SensorReading

if TYPE_CHECKING:
    from aegis.domains.health.connectors import SensorReadingSource
    from aegis.domains.health.domain_logic.health_engine import HealthAnalysisEngine

logger = logging.getLogger(__name__)

MAX_HISTORY_LIMIT = 200


def _analysis_payload(reading: SensorReading, result: AnalysisResult) -> dict[str, Any]:
    return {
        "status": "ok",
        "device_status": reading.status or derive_status(reading),
        "analysis": result.to_dict(),
        "notify": [a.type for a in result.alerts if requires_notification(a)],
    }


def _history_entry(result: AnalysisResult) -> dict[str, Any]:
    return {
        "timestamp": result.timestamp.isoformat(),
        "overall_health": result.overall_health,
        "risk_level": result.risk_level,
        "alerts": [a.type for a in result.alerts],
    }


def register_health_monitor_tools(
    mcp: FastMCP,
    engine: HealthAnalysisEngine,
    source: SensorReadingSource,
) -> None:
    """Register health analysis tools on the MCP server."""

    @mcp.tool
    def analyze_sensor_snapshot(reading: dict[str, Any]) -> str:
        """Analyze one sensor snapshot and return score, risk, insights and alerts.

        Args:
            reading: Hub snapshot, e.g. {"heartRate": 74, "temperature": 36.7,
                "gasLevel": 410, "posture": 0, "fallDetected": false,
                "flameDetected": false}. Missing fields are tolerated.
        """
        parsed = parse_sensor_message(reading)
        if parsed is None:
            return json.dumps({
                "status": "ignored",
                "message": "Frame carries no sensor values (control message).",
            })
        result = engine.analyze(parsed)
        return json.dumps(_analysis_payload(parsed, result), indent=2)

    @mcp.tool
    async def simulate_sensor_snapshot() -> str:
        """Pull one reading from the configured source and analyze it."""
        reading = await source.next_reading()
        result = engine.analyze(reading)
        payload = _analysis_payload(reading, result)
        payload["reading"] = reading_to_dict(reading)
        payload["data_source"] = source.data_source
        return json.dumps(payload, indent=2)

    @mcp.tool
    def health_breakdown(overall_health: float | None = None) -> str:
        """Cardiovascular, respiratory and stress sub-scores for display.

        Args:
            overall_health: Score to break down; defaults to the latest analysis.
        """
        if overall_health is None:
            latest = engine.latest()
            if latest is None:
                return json.dumps({
                    "status": "no_data",
                    "message": "No analysis yet. Analyze a sensor snapshot first.",
                })
            overall_health = latest.overall_health
        breakdown = engine.health_breakdown(overall_health)
        return json.dumps({
            "status": "ok",
            "overall_health": overall_health,
            "breakdown": breakdown.to_dict(),
        })

    @mcp.tool
    def predict_health_trend() -> str:
        """Predict whether the overall health score is improving, stable or declining."""
        history = engine.history
        return json.dumps({
            "trend": engine.predict_trend(),
            "data_points": len(history),
        })

    @mcp.tool
    def analysis_history(limit: int = 20) -> str:
        """Most recent analyses, newest last.

        Args:
            limit: Number of entries to return (1-200).
        """
        limit = max(1, min(MAX_HISTORY_LIMIT, limit))
        history = engine.history
        return json.dumps({
            "entries": [_history_entry(r) for r in history[-limit:]],
            "total": len(history),
            "capacity": engine.history_capacity,
        }, indent=2)
