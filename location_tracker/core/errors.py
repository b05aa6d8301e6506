# location_tracker/core/errors.py
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class TrackerError(Exception):
    """Base de los errores del dominio."""

    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class UnknownUser(TrackerError):
    """No existe usuario para el identificador dado (externalUid o handle interno userId)."""

    status_code = 404

    def __init__(self, identifier: str, kind: str = "externalUid"):
        super().__init__(f"Usuario no encontrado para {kind}={identifier}")
        self.identifier = identifier
        self.kind = kind


class ValidationError(TrackerError):
    """Entrada fuera de rango o incompleta; se rechaza antes de tocar el storage."""

    status_code = 422

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field


class StorageUnavailable(TrackerError):
    """Fallo transitorio de persistencia. No se reintenta aquí."""

    status_code = 503


async def _tracker_error_handler(request: Request, exc: TrackerError):
    if exc.status_code >= 500:
        logger.error("%s %s -> %s: %s", request.method, request.url.path, type(exc).__name__, exc.detail)
    body = {"detail": exc.detail, "error": type(exc).__name__}
    if isinstance(exc, ValidationError):
        body["field"] = exc.field
    return JSONResponse(status_code=exc.status_code, content=body)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TrackerError, _tracker_error_handler)
