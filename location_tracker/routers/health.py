import logging

from fastapi import APIRouter, Depends

from ..db.session import Database, get_database

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/db")
def database_status(db: Database = Depends(get_database)):
    result = db.ping()
    logger.debug("Health-check DB ejecutado, resultado=%s", result)
    return {"status": "UP", "db": result}
