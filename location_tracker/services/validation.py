# location_tracker/services/validation.py
from datetime import datetime
from math import isfinite

from ..core.errors import ValidationError
from ..schemas.common import Telemetry
from ..utils.time import as_utc

LAT_RANGE = (-90.0, 90.0)
LON_RANGE = (-180.0, 180.0)
BATTERY_RANGE = (0, 100)


def require(value, field: str):
    """Falla si falta el valor; los strings se devuelven sin espacios alrededor."""
    if isinstance(value, str):
        value = value.strip()
    if value is None or value == "":
        raise ValidationError(field, "es obligatorio")
    return value

def check_range(value: float, bounds: tuple[float, float], field: str) -> float:
    lo, hi = bounds
    if not isfinite(float(value)) or not lo <= value <= hi:
        raise ValidationError(field, f"{value} fuera de [{lo}, {hi}]")
    return value

def validate_sample(
    external_uid: str | None,
    latitude: float | None,
    longitude: float | None,
    timestamp: datetime | None,
    telemetry: Telemetry,
) -> tuple[str, float, float, datetime]:
    """
    Valida una lectura antes de cualquier escritura. Devuelve
    (external_uid, lat, lon, timestamp_utc) normalizados.
    """
    uid = require(external_uid, "externalUid")
    lat = check_range(require(latitude, "latitude"), LAT_RANGE, "latitude")
    lon = check_range(require(longitude, "longitude"), LON_RANGE, "longitude")
    ts = as_utc(require(timestamp, "timestamp"))
    if telemetry.battery_level is not None:
        check_range(telemetry.battery_level, BATTERY_RANGE, "batteryLevel")
    return uid, lat, lon, ts

def validate_window(start: datetime | None, end: datetime | None) -> tuple[datetime, datetime]:
    start = as_utc(require(start, "start"))
    end = as_utc(require(end, "end"))
    if start > end:
        raise ValidationError("start", "debe ser <= end")
    return start, end
