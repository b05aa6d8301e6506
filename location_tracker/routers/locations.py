# location_tracker/routers/locations.py
import logging
from datetime import date, datetime

from fastapi import APIRouter, Depends, Query, status

from ..db.session import Database, get_database
from ..schemas.locations import (
    DailyDistanceResponse,
    LocationCreateRequest,
    LocationHistoryResponse,
    LocationResponse,
)
from ..services.locations import LocationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/locations", tags=["locations"])


def get_location_service(db: Database = Depends(get_database)) -> LocationService:
    return LocationService(db)


@router.post("", response_model=LocationResponse, status_code=status.HTTP_201_CREATED)
def create_location(q: LocationCreateRequest, service: LocationService = Depends(get_location_service)):
    """Registra una lectura GPS para el usuario identificado por externalUid."""
    logger.debug("Recibida ubicación para externalUid=%s lat=%s lng=%s", q.external_uid, q.latitude, q.longitude)
    try:
        return service.record_sample(
            q.external_uid,
            q.latitude,
            q.longitude,
            q.timestamp,
            accuracy=q.accuracy,
            altitude=q.altitude,
            speed=q.speed,
            heading=q.heading,
            battery_level=q.battery_level,
            activity_type=q.activity_type,
        )
    except Exception:
        logger.exception("Error almacenando ubicación para externalUid=%s", q.external_uid)
        raise


@router.get("/history", response_model=LocationHistoryResponse)
def history(
    external_uid: str = Query(..., alias="externalUid", description="UID externo del usuario"),
    start: datetime = Query(..., description="Inicio (ISO-8601, incluido)"),
    end: datetime = Query(..., description="Fin (ISO-8601, excluido)"),
    service: LocationService = Depends(get_location_service),
):
    """Historial de ubicaciones en [start, end) con distancia total en km."""
    logger.debug("Consultando historial para uid=%s start=%s end=%s", external_uid, start, end)
    try:
        return service.get_history(external_uid, start, end)
    except Exception:
        logger.exception("Error consultando historial para uid=%s", external_uid)
        raise


@router.get("/distance", response_model=DailyDistanceResponse)
def daily_distance(
    external_uid: str = Query(..., alias="externalUid", description="UID externo del usuario"),
    day: date = Query(..., alias="date", description="Fecha UTC, YYYY-MM-DD"),
    service: LocationService = Depends(get_location_service),
):
    """Distancia total recorrida en el día UTC indicado."""
    logger.debug("Consultando distancia para uid=%s fecha=%s", external_uid, day)
    try:
        return service.get_daily_distance(external_uid, day)
    except Exception:
        logger.exception("Error consultando distancia para uid=%s fecha=%s", external_uid, day)
        raise
