# location_tracker/services/distance.py
from typing import Iterable

import numpy as np

from ..utils.geo import GeodesicFn, Position, haversine_m, haversine_legs_m


def total_distance_m(positions: Iterable[Position], geodesic: GeodesicFn = haversine_m) -> float:
    """
    Suma de la distancia geodésica entre cada par consecutivo, en metros.

    La secuencia debe venir ya ordenada por (timestamp, id). No se filtra
    jitter: todo par consecutivo aporta, aunque sea ruido del receptor.
    0 o 1 puntos -> 0.0.
    """
    pts = list(positions)
    if len(pts) < 2:
        return 0.0

    if geodesic is haversine_m:
        lats = np.fromiter((p.lat for p in pts), dtype=float, count=len(pts))
        lons = np.fromiter((p.lon for p in pts), dtype=float, count=len(pts))
        return float(haversine_legs_m(lats, lons).sum())

    return float(sum(geodesic(a, b) for a, b in zip(pts, pts[1:])))


def meters_to_km(meters: float) -> float:
    return meters / 1000.0
