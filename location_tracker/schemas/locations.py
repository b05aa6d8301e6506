# location_tracker/schemas/locations.py
from datetime import date, datetime

from pydantic import Field

from .common import CamelModel, Telemetry

class LocationCreateRequest(Telemetry):
    # Sin restricciones declarativas: los rangos los valida services/validation.py
    external_uid: str | None = Field(None, description="UID externo (p.ej. Firebase) del usuario")
    latitude: float | None = Field(None, description="Grados, [-90, 90]")
    longitude: float | None = Field(None, description="Grados, [-180, 180]")
    timestamp: datetime | None = Field(None, description="Instante de captura ISO-8601; sin offset = UTC")

class LocationResponse(Telemetry):
    id: int
    latitude: float
    longitude: float
    timestamp: datetime

class LocationHistoryResponse(CamelModel):
    external_uid: str
    start: datetime
    end: datetime
    points: list[LocationResponse]
    total_distance_km: float

class DailyDistanceResponse(CamelModel):
    external_uid: str
    date: date
    distance_km: float
