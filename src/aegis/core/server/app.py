"""AEGIS Health Monitor MCP server: application factory.

This module provides:
- create_app() for testability (integration tests create fresh server instances)
- Module-level `mcp` variable for FastMCP discovery
"""

from __future__ import annotations

import logging
import random

from fastmcp import FastMCP

from aegis.core.config.settings import Settings, get_settings
from aegis.domains.health.connectors import SensorReadingSource
from aegis.domains.health.connectors.sensor_hub import SimulatedSensorHub
from aegis.domains.health.domain_logic.baseline_loader import (
    BaselineProfileError,
    load_baseline_profile,
)
from aegis.domains.health.domain_logic.health_engine import HealthAnalysisEngine
from aegis.domains.health.domain_logic.reading_models import DEFAULT_BASELINE
from aegis.domains.health.tools.health_monitor_tools import register_health_monitor_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "AEGIS Health Monitor"
SERVER_VERSION = "0.1.0"

# Offsets keep the engine and the simulated hub on distinct streams under one seed.
ENGINE_SEED_OFFSET = 0
SOURCE_SEED_OFFSET = 1


def _seeded_rng(settings: Settings, offset: int) -> random.Random:
    if settings.random_seed is None:
        return random.Random()
    return random.Random(settings.random_seed + offset)


def build_engine(settings: Settings) -> HealthAnalysisEngine:
    """Create the analysis engine, applying the baseline profile if configured.

    A broken profile is logged and the built-in baseline is used instead.
    """
    baseline = DEFAULT_BASELINE
    if settings.baseline_profile_path:
        try:
            baseline = load_baseline_profile(settings.baseline_profile_path)
        except BaselineProfileError as exc:
            logger.error("Failed to load baseline profile: %s", exc)
            logger.warning("Continuing with the built-in baseline")
    return HealthAnalysisEngine(
        baseline=baseline,
        history_capacity=settings.history_capacity,
        rng=_seeded_rng(settings, ENGINE_SEED_OFFSET),
    )


def build_source(settings: Settings) -> SensorReadingSource:
    # Only the simulator ships today; the hub's WebSocket feed plugs in here.
    logger.info("Using simulated sensor hub")
    return SimulatedSensorHub(_seeded_rng(settings, SOURCE_SEED_OFFSET))


def create_app(
    *,
    engine_override: HealthAnalysisEngine | None = None,
    source_override: SensorReadingSource | None = None,
) -> FastMCP:
    """Create and configure the AEGIS Health Monitor MCP server.

    This is the main application factory. It:
    1. Creates the FastMCP server instance
    2. Resolves the scoring baseline (built-in or YAML profile)
    3. Creates the analysis engine that owns the reading history
    4. Initializes the reading source (simulated hub for now)
    5. Registers all tools
    """
    settings = get_settings()

    # --- Server instance ---
    server = FastMCP(
        SERVER_NAME,
        instructions=(
            "Real-time health and environment monitoring. Scores sensor hub "
            "snapshots (heart rate, temperature, gas, posture, fall and flame "
            "detectors), classifies risk, and returns insights, recommendations "
            "and safety alerts."
        ),
    )

    # --- Analysis engine ---
    engine = engine_override if engine_override is not None else build_engine(settings)

    # --- Reading source ---
    if source_override is not None:
        source = source_override
    else:
        source = build_source(settings)

    # --- Register tools ---
    @server.tool
    def health_check() -> dict:
        """Check server health and return basic status information."""
        return {
            "status": "ok",
            "server": SERVER_NAME,
            "version": SERVER_VERSION,
            "data_source": source.data_source,
            "sensor_connected": source.is_connected(),
            "analyses_stored": len(engine.history),
            "history_capacity": engine.history_capacity,
        }

    register_health_monitor_tools(server, engine, source)
    logger.info("Health monitor tools registered")

    return server


# Module-level instance for FastMCP discovery.
# Lazy: only created when accessed (not when tests import create_app).
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
