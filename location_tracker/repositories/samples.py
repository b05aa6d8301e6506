# location_tracker/repositories/samples.py
import logging
from datetime import datetime
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core.errors import UnknownUser
from ..db.models import LocationSample, User
from ..schemas.common import Telemetry
from ..services.distance import total_distance_m
from ..utils.geo import GeodesicFn, Position, haversine_m

logger = logging.getLogger(__name__)


class SampleStore(Protocol):
    """Log append-only de muestras por usuario."""

    def append(self, user_id: str, position: Position, timestamp: datetime, telemetry: Telemetry) -> int: ...

    def query_range(self, user_id: str, start: datetime, end: datetime) -> list[LocationSample]: ...

    def distance_meters(self, user_id: str, start: datetime, end: datetime, geodesic: GeodesicFn = haversine_m) -> float: ...


class SqlSampleStore:
    """SampleStore sobre SQLAlchemy, ligado a la sesión de una unidad de trabajo."""

    def __init__(self, session: Session):
        self.session = session

    def append(self, user_id: str, position: Position, timestamp: datetime, telemetry: Telemetry) -> int:
        if self.session.get(User, user_id) is None:
            raise UnknownUser(user_id, kind="userId")

        record = LocationSample(
            user_id=user_id,
            latitude=position.lat,
            longitude=position.lon,
            timestamp=timestamp,
            accuracy=telemetry.accuracy,
            altitude=telemetry.altitude,
            speed=telemetry.speed,
            heading=telemetry.heading,
            battery_level=telemetry.battery_level,
            activity_type=telemetry.activity_type,
        )
        self.session.add(record)
        self.session.flush()  # asigna id
        return record.id

    def get(self, sample_id: int) -> LocationSample | None:
        return self.session.get(LocationSample, sample_id)

    def query_range(self, user_id: str, start: datetime, end: datetime) -> list[LocationSample]:
        """[start, end) ordenado por (timestamp, id); nunca por orden de inserción."""
        stmt = (
            select(LocationSample)
            .where(
                LocationSample.user_id == user_id,
                LocationSample.timestamp >= start,
                LocationSample.timestamp < end,
            )
            .order_by(LocationSample.timestamp.asc(), LocationSample.id.asc())
        )
        return list(self.session.scalars(stmt))

    def distance_meters(self, user_id: str, start: datetime, end: datetime, geodesic: GeodesicFn = haversine_m) -> float:
        # mismo rango y mismo orden que query_range; solo trae las coordenadas
        stmt = (
            select(LocationSample.latitude, LocationSample.longitude)
            .where(
                LocationSample.user_id == user_id,
                LocationSample.timestamp >= start,
                LocationSample.timestamp < end,
            )
            .order_by(LocationSample.timestamp.asc(), LocationSample.id.asc())
        )
        positions = [Position(lat, lon) for lat, lon in self.session.execute(stmt)]
        return total_distance_m(positions, geodesic)
