"""JSON wire format of the sensor hub's push feed.

The hub broadcasts one flat JSON object per snapshot, camelCase keys::

    {"heartRate": 74, "temperature": 36.7, "gasLevel": 412, "posture": 0,
     "fallDetected": false, "flameDetected": false,
     "status": "NORMAL", "timestamp": 1520, "clients": 1}

It also sends small control frames (``{"status": "connected"}``,
``{"action": "sos_activated"}``, ``{"alert": "EMERGENCY_MANUAL_TRIGGER"}``)
on the same socket; those carry no sensor values and decode to ``None``.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from aegis.domains.health.domain_logic.reading_models import DeviceStatus, SensorReading

logger = logging.getLogger(__name__)

# wire key -> SensorReading attribute
_SENSOR_FIELDS = {
    "heartRate": "heart_rate",
    "temperature": "temperature",
    "gasLevel": "gas_level",
    "posture": "posture",
    "fallDetected": "fall_detected",
    "flameDetected": "flame_detected",
}

_OPTIONAL_FIELDS = {
    "humidity": "humidity",
    "stressLevel": "stress_level",
    "motionDetected": "motion_detected",
    "latitude": "latitude",
    "longitude": "longitude",
    "gpsFixed": "gps_fixed",
    "satellites": "satellites",
    "status": "status",
    "timestamp": "timestamp",
    "clients": "clients",
}

_BOOLEAN_FIELDS = {"fall_detected", "flame_detected"}


class SensorMessageError(ValueError):
    """Raised when a frame is not a decodable JSON object."""


def decode_frame(raw: str | bytes | dict[str, Any]) -> dict[str, Any]:
    """Decode one frame into a dict without interpreting it."""
    if isinstance(raw, dict):
        return raw
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise SensorMessageError(f"Sensor frame is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise SensorMessageError(
            f"Sensor frame must be a JSON object, got {type(data).__name__}"
        )
    return data


def is_sensor_frame(data: dict[str, Any]) -> bool:
    return any(key in data for key in _SENSOR_FIELDS)


def reading_from_dict(data: dict[str, Any]) -> SensorReading:
    """Build a SensorReading from a decoded wire object.

    Values are passed through as sent; only the two detector flags are
    coerced to bool. Unknown keys are ignored.
    """
    kwargs: dict[str, Any] = {}
    for wire_key, attr in {**_SENSOR_FIELDS, **_OPTIONAL_FIELDS}.items():
        if wire_key not in data:
            continue
        value = data[wire_key]
        kwargs[attr] = bool(value) if attr in _BOOLEAN_FIELDS else value
    return SensorReading(**kwargs)


def parse_sensor_message(raw: str | bytes | dict[str, Any]) -> SensorReading | None:
    """Decode a frame into a reading, or ``None`` for control frames."""
    data = decode_frame(raw)
    if not is_sensor_frame(data):
        logger.debug("Skipping control frame: %s", sorted(data))
        return None
    return reading_from_dict(data)


def derive_status(reading: SensorReading) -> DeviceStatus:
    """Hub status: EMERGENCY when a detector has tripped, NORMAL otherwise."""
    if reading.flame_detected or reading.fall_detected:
        return "EMERGENCY"
    return "NORMAL"


def reading_to_dict(reading: SensorReading) -> dict[str, Any]:
    """Wire-shaped dict; optional fields are omitted when unset."""
    data: dict[str, Any] = {
        wire_key: getattr(reading, attr) for wire_key, attr in _SENSOR_FIELDS.items()
    }
    for wire_key, attr in _OPTIONAL_FIELDS.items():
        value = getattr(reading, attr)
        if value is not None:
            data[wire_key] = value
    data.setdefault("status", derive_status(reading))
    return data


def encode_sensor_message(reading: SensorReading) -> str:
    return json.dumps(reading_to_dict(reading))
