"""Application settings loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """AEGIS health monitor configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Server
    # Loopback by default; the tool surface has no auth layer.
    aegis_host: str = "127.0.0.1"
    aegis_port: int = 8010
    aegis_log_level: str = "info"
    aegis_allow_insecure_bind: bool = False

    # Analysis engine
    history_capacity: int = 1000
    baseline_profile_path: str = ""

    # Sensor feed (firmware pushes a snapshot every 2 s)
    update_interval_ms: int = 2000

    # Simulated sources; None means seeded from system entropy
    random_seed: int | None = None


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
