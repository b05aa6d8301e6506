# location_tracker/db/session.py
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator

from sqlalchemy import DateTime, create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.types import TypeDecorator

from ..core.config import settings
from ..core.errors import StorageUnavailable
from ..utils.time import as_utc

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class UTCDateTime(TypeDecorator):
    """
    Guarda instantes normalizados a UTC (sin tzinfo en la columna) y los
    devuelve siempre timezone-aware. Así el orden lexicográfico de SQLite y el
    de Postgres coinciden con el orden temporal real.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return as_utc(value).replace(tzinfo=None)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return value.replace(tzinfo=timezone.utc)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Database:
    """Engine + fábrica de sesiones; cada operación del core abre su propia unidad de trabajo."""

    def __init__(self, url: str, echo: bool = False):
        kwargs = {"echo": echo}
        if url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if url in ("sqlite://", "sqlite:///:memory:"):
                # una sola conexión compartida; si no, cada sesión vería una BD vacía
                kwargs["poolclass"] = StaticPool
        self.url = url
        self.engine: Engine = create_engine(url, **kwargs)
        self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)

    def create_all(self) -> None:
        from . import models  # noqa: F401  registra las tablas en Base.metadata

        Base.metadata.create_all(self.engine)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Commit al salir bien, rollback ante cualquier excepción, close siempre."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except (OperationalError, InterfaceError) as ex:
            session.rollback()
            logger.error("Fallo de persistencia: %s", ex)
            raise StorageUnavailable(f"Base de datos no disponible: {ex.orig or ex}") from ex
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def ping(self) -> int:
        with self.session_scope() as session:
            return session.execute(text("SELECT 1")).scalar_one()


_default_db: Database | None = None


def get_database() -> Database:
    """Dependencia FastAPI; los tests la sustituyen vía app.dependency_overrides."""
    global _default_db
    if _default_db is None:
        _default_db = Database(settings.database_url, echo=settings.database_echo)
    return _default_db
