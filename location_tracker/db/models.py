"""Tablas: usuarios (identidad externa) y muestras de ubicación (log append-only)."""

import uuid
from datetime import datetime

from sqlalchemy import Float, ForeignKey, Index, Integer, String, event
from sqlalchemy.orm import Mapped, mapped_column

from .session import Base, UTCDateTime, utcnow


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    external_uid: Mapped[str] = mapped_column(String(128), unique=True, nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow, onupdate=utcnow)


class LocationSample(Base):
    """Una lectura GPS. Inmutable una vez insertada."""
    __tablename__ = "location_samples"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    accuracy: Mapped[float | None] = mapped_column(Float)
    altitude: Mapped[float | None] = mapped_column(Float)
    speed: Mapped[float | None] = mapped_column(Float)
    heading: Mapped[float | None] = mapped_column(Float)
    battery_level: Mapped[int | None] = mapped_column(Integer)
    activity_type: Mapped[str | None] = mapped_column(String(64))
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)

    __table_args__ = (
        # (user, timestamp, id): rango por usuario ya ordenado con desempate estable
        Index("ix_location_samples_user_ts_id", "user_id", "timestamp", "id"),
    )


@event.listens_for(LocationSample, "before_update")
def _reject_update(mapper, connection, target):
    raise RuntimeError(f"LocationSample id={target.id} es inmutable")


@event.listens_for(LocationSample, "before_delete")
def _reject_delete(mapper, connection, target):
    raise RuntimeError(f"LocationSample id={target.id} es append-only")
