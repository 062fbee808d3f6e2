"""AEGIS entry points.

``python -m aegis.core.server.main`` serves the MCP tools;
``aegis-monitor`` runs the analysis loop headless and logs each result.
"""

from __future__ import annotations

import asyncio
import logging
from ipaddress import ip_address

from aegis.core.config.settings import Settings, get_settings
from aegis.core.server.app import build_engine, build_source, create_app
from aegis.domains.health.domain_logic.health_monitor import HealthMonitor
from aegis.domains.health.domain_logic.reading_models import AnalysisResult, SensorReading

logger = logging.getLogger(__name__)


def _is_loopback_host(host: str) -> bool:
    if host in {"localhost"}:
        return True
    try:
        return ip_address(host).is_loopback
    except ValueError:
        return False


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=getattr(logging, settings.aegis_log_level.upper(), logging.INFO))


def run() -> None:
    """Start the AEGIS MCP server with Streamable HTTP transport."""
    settings = get_settings()
    _configure_logging(settings)

    if not settings.aegis_allow_insecure_bind and not _is_loopback_host(settings.aegis_host):
        raise RuntimeError(
            "Refusing to bind AEGIS server to a non-loopback host without an auth layer. "
            "Set AEGIS_ALLOW_INSECURE_BIND=true to override (unsafe)."
        )
    logger.info(
        "Starting AEGIS Health Monitor server on %s:%d",
        settings.aegis_host,
        settings.aegis_port,
    )

    mcp = create_app()
    mcp.run(
        transport="streamable-http",
        host=settings.aegis_host,
        port=settings.aegis_port,
    )


def _log_result(reading: SensorReading, result: AnalysisResult) -> None:
    logger.info(
        "hr=%s temp=%s gas=%s -> health=%d risk=%s alerts=%s",
        reading.heart_rate,
        reading.temperature,
        reading.gas_level,
        result.overall_health,
        result.risk_level,
        ",".join(a.type for a in result.alerts) or "-",
    )


def monitor(max_readings: int | None = None) -> None:
    """Analyze readings from the configured source until interrupted."""
    settings = get_settings()
    _configure_logging(settings)

    engine = build_engine(settings)
    health_monitor = HealthMonitor(
        engine,
        build_source(settings),
        interval_s=settings.update_interval_ms / 1000,
        listeners=[_log_result],
    )
    try:
        asyncio.run(health_monitor.run(max_readings=max_readings))
    except KeyboardInterrupt:
        logger.info("Monitor stopped; trend was %s", engine.predict_trend())


if __name__ == "__main__":
    run()
