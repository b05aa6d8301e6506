# location_tracker/core/log_config.py
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configura el logger raíz una sola vez (idempotente entre reloads de uvicorn)."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    else:
        root.setLevel(level.upper())
    # SQLAlchemy es muy verboso en DEBUG; lo controla DATABASE_ECHO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
