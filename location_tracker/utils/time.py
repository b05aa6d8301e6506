from datetime import date, datetime, timedelta, timezone

def as_utc(dt: datetime) -> datetime:
    # naive -> se interpreta como UTC (no como hora local del servidor)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)

def utc_day_window(day: date) -> tuple[datetime, datetime]:
    """Ventana semiabierta [00:00 UTC, 00:00 UTC del día siguiente)."""
    start = datetime(day.year, day.month, day.day, tzinfo=timezone.utc)
    return start, start + timedelta(days=1)
