import math
from dataclasses import dataclass
from typing import Callable

import numpy as np

from ..core.config import settings

# Radio medio de la Tierra (esfera IUGG R1) en metros
EARTH_RADIUS_M = settings.earth_radius_m

@dataclass(frozen=True)
class Position:
    """Punto WGS84 (EPSG:4326) en grados decimales."""
    lat: float
    lon: float

# (a, b) -> metros. Cualquier implementación debe ser simétrica y devolver 0 para a == b.
GeodesicFn = Callable[[Position, Position], float]

def haversine_m(a: Position, b: Position) -> float:
    """Distancia de gran círculo (haversine) sobre la esfera de radio EARTH_RADIUS_M."""
    phi1 = math.radians(a.lat)
    phi2 = math.radians(b.lat)
    d_phi = math.radians(b.lat - a.lat)
    d_lambda = math.radians(b.lon - a.lon)

    h = math.sin(d_phi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2.0) ** 2
    return 2.0 * EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(h)))

def haversine_legs_m(lats: np.ndarray, lons: np.ndarray) -> np.ndarray:
    """
    Versión vectorizada: distancias de cada tramo consecutivo (n-1 valores).
    Misma fórmula que haversine_m, para que ambos caminos coincidan.
    """
    phi = np.radians(lats)
    lam = np.radians(lons)
    d_phi = np.diff(phi)
    d_lambda = np.diff(lam)
    h = np.sin(d_phi / 2.0) ** 2 + np.cos(phi[:-1]) * np.cos(phi[1:]) * np.sin(d_lambda / 2.0) ** 2
    return 2.0 * EARTH_RADIUS_M * np.arcsin(np.minimum(1.0, np.sqrt(h)))
