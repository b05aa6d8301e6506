# location_tracker/services/locations.py
"""
Registro de muestras, historial con distancia total y distancia diaria (UTC).

Cada operación corre en su propia unidad de trabajo (Database.session_scope):
resolver identidad + leer/escribir ocurre dentro de la misma transacción.
"""
import logging
from datetime import date, datetime
from typing import Callable

from sqlalchemy.orm import Session

from ..db.models import LocationSample
from ..db.session import Database
from ..repositories.samples import SampleStore, SqlSampleStore
from ..repositories.users import IdentityResolver, SqlUserDirectory
from ..schemas.common import Telemetry
from ..schemas.locations import DailyDistanceResponse, LocationHistoryResponse, LocationResponse
from ..utils.geo import GeodesicFn, Position, haversine_m
from ..utils.time import utc_day_window
from .distance import meters_to_km, total_distance_m
from .validation import require, validate_sample, validate_window

logger = logging.getLogger(__name__)


def to_response(record: LocationSample) -> LocationResponse:
    return LocationResponse(
        id=record.id,
        latitude=record.latitude,
        longitude=record.longitude,
        timestamp=record.timestamp,
        accuracy=record.accuracy,
        altitude=record.altitude,
        speed=record.speed,
        heading=record.heading,
        battery_level=record.battery_level,
        activity_type=record.activity_type,
    )


class LocationService:
    def __init__(
        self,
        db: Database,
        geodesic: GeodesicFn = haversine_m,
        store_factory: Callable[[Session], SampleStore] = SqlSampleStore,
        resolver_factory: Callable[[Session], IdentityResolver] = SqlUserDirectory,
    ):
        self.db = db
        self.geodesic = geodesic
        self.store_factory = store_factory
        self.resolver_factory = resolver_factory

    def record_sample(
        self,
        external_uid: str | None,
        latitude: float | None,
        longitude: float | None,
        timestamp: datetime | None,
        accuracy: float | None = None,
        altitude: float | None = None,
        speed: float | None = None,
        heading: float | None = None,
        battery_level: int | None = None,
        activity_type: str | None = None,
    ) -> LocationResponse:
        telemetry = Telemetry(
            accuracy=accuracy,
            altitude=altitude,
            speed=speed,
            heading=heading,
            battery_level=battery_level,
            activity_type=activity_type,
        )
        # validación completa antes de abrir la sesión
        uid, lat, lon, ts = validate_sample(external_uid, latitude, longitude, timestamp, telemetry)

        with self.db.session_scope() as session:
            user_id = self.resolver_factory(session).resolve(uid)
            logger.debug("Guardando ubicación para usuario %s", uid)
            store = self.store_factory(session)
            sample_id = store.append(user_id, Position(lat, lon), ts, telemetry)

        logger.debug("Ubicación persistida con id=%s", sample_id)
        # la muestra es inmutable: la vista sale de los datos ya validados
        return LocationResponse(id=sample_id, latitude=lat, longitude=lon, timestamp=ts, **telemetry.model_dump())

    def get_history(self, external_uid: str | None, start: datetime | None, end: datetime | None) -> LocationHistoryResponse:
        uid = require(external_uid, "externalUid")
        start, end = validate_window(start, end)

        with self.db.session_scope() as session:
            user_id = self.resolver_factory(session).resolve(uid)
            logger.debug("Obteniendo historial para uid=%s entre %s y %s", uid, start, end)
            records = self.store_factory(session).query_range(user_id, start, end)
            points = [to_response(r) for r in records]

        # distancia sobre la misma secuencia ya ordenada (mismo algoritmo que distance_meters)
        distance_m = total_distance_m((Position(p.latitude, p.longitude) for p in points), self.geodesic)
        distance_km = meters_to_km(distance_m)
        logger.debug("Historial obtenido: puntos=%d distanciaKm=%.4f", len(points), distance_km)

        return LocationHistoryResponse(
            external_uid=uid,
            start=start,
            end=end,
            points=points,
            total_distance_km=distance_km,
        )

    def distance_km(self, external_uid: str, start: datetime, end: datetime) -> float:
        start, end = validate_window(start, end)
        with self.db.session_scope() as session:
            user_id = self.resolver_factory(session).resolve(require(external_uid, "externalUid"))
            meters = self.store_factory(session).distance_meters(user_id, start, end, self.geodesic)
        return meters_to_km(meters)

    def get_daily_distance(self, external_uid: str | None, day: date | None) -> DailyDistanceResponse:
        uid = require(external_uid, "externalUid")
        day = require(day, "date")
        start, end = utc_day_window(day)
        logger.debug("Calculando distancia diaria para uid=%s fecha=%s", uid, day)

        distance_km = self.distance_km(uid, start, end)
        logger.debug("Distancia diaria calculada: %.4f km", distance_km)
        return DailyDistanceResponse(external_uid=uid, date=day, distance_km=distance_km)
