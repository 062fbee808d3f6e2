"""Baseline profile loader: reads optional YAML overrides for scoring ranges.

Example profile::

    heart_rate:
      min: 55
      max: 95
      optimal: 68
    temperature:
      optimal: 36.8

Parameters or keys left out keep their built-in defaults.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Any

import yaml

from aegis.domains.health.domain_logic.reading_models import (
    DEFAULT_BASELINE,
    HealthBaseline,
    ParameterBaseline,
)

logger = logging.getLogger(__name__)

_PARAMETERS = ("heart_rate", "temperature", "gas_level")


class BaselineProfileError(Exception):
    """Raised when a baseline profile cannot be read or is inconsistent."""


def _parameter_from_dict(
    name: str, data: Any, default: ParameterBaseline
) -> ParameterBaseline:
    if data is None:
        return default
    if not isinstance(data, dict):
        raise BaselineProfileError(f"'{name}' must be a mapping of min/max/optimal")

    values: dict[str, float] = {}
    for key in ("min", "max", "optimal"):
        if key not in data:
            continue
        try:
            values[key] = float(data[key])
        except (TypeError, ValueError) as exc:
            raise BaselineProfileError(f"'{name}.{key}' must be a number") from exc

    param = replace(default, **values)
    if param.max <= param.min:
        raise BaselineProfileError(f"'{name}' max must be greater than min")
    if not param.min <= param.optimal <= param.max:
        raise BaselineProfileError(f"'{name}' optimal must lie within [min, max]")
    return param


def baseline_from_dict(data: dict[str, Any] | None) -> HealthBaseline:
    """Merge a parsed profile mapping over the default baseline."""
    if not data:
        return DEFAULT_BASELINE
    if not isinstance(data, dict):
        raise BaselineProfileError("Baseline profile must be a mapping")

    unknown = set(data) - set(_PARAMETERS)
    if unknown:
        logger.warning("Ignoring unknown baseline parameters: %s", ", ".join(sorted(unknown)))

    return HealthBaseline(
        **{
            name: _parameter_from_dict(name, data.get(name), getattr(DEFAULT_BASELINE, name))
            for name in _PARAMETERS
        }
    )


def load_baseline_profile(path: str | Path) -> HealthBaseline:
    """Parse a YAML baseline profile into a HealthBaseline."""
    path = Path(path).expanduser()
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise BaselineProfileError(f"Cannot read baseline profile {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise BaselineProfileError(f"Invalid YAML in baseline profile {path}: {exc}") from exc

    baseline = baseline_from_dict(data)
    logger.info("Loaded baseline profile from %s", path)
    return baseline
