"""Distance metrics for screen points and geographic coordinates."""

import math
from typing import Callable, Sequence

import numpy as np

from ..models import Coordinate, ScreenPoint

# Mercator world as a square of 2**28 map points, the usual zoom-20 tiling grid.
MAP_WORLD_SIZE = 268_435_456.0
EARTH_CIRCUMFERENCE_M = 2 * math.pi * 6_378_137.0
MAX_MERCATOR_LAT = 85.05112878

Metric = Callable[[Coordinate, Coordinate], float]


def planar_distance(a: ScreenPoint, b: ScreenPoint) -> float:
    """Euclidean distance between two screen points."""
    return math.hypot(b.x - a.x, b.y - a.y)


def map_point(coordinate: Coordinate) -> tuple[float, float]:
    """Project a coordinate onto the flat Mercator map-point grid."""
    lat = max(-MAX_MERCATOR_LAT, min(MAX_MERCATOR_LAT, coordinate.latitude))
    s = math.sin(math.radians(lat))
    x = (coordinate.longitude + 180.0) / 360.0 * MAP_WORLD_SIZE
    y = (0.5 - math.log((1 + s) / (1 - s)) / (4 * math.pi)) * MAP_WORLD_SIZE
    return x, y


def meters_per_map_point(latitude: float) -> float:
    return EARTH_CIRCUMFERENCE_M * math.cos(math.radians(latitude)) / MAP_WORLD_SIZE


def geographic_distance(a: Coordinate, b: Coordinate) -> float:
    """Approximate distance in meters between two coordinates.

    Measured as a straight line between Mercator map points, scaled at the
    pair's mean latitude. Not a geodesic: only meant for ranking nearby
    points against each other over a small area.
    """
    ax, ay = map_point(a)
    bx, by = map_point(b)
    mean_lat = (a.latitude + b.latitude) / 2
    return math.hypot(bx - ax, by - ay) * meters_per_map_point(mean_lat)


def geographic_distances(points: Sequence[Coordinate], query: Coordinate) -> np.ndarray:
    """Vectorised ``geographic_distance`` from each of ``points`` to ``query``."""
    lats = np.array([p.latitude for p in points], dtype=float)
    lons = np.array([p.longitude for p in points], dtype=float)

    clipped = np.clip(lats, -MAX_MERCATOR_LAT, MAX_MERCATOR_LAT)
    s = np.sin(np.radians(clipped))
    xs = (lons + 180.0) / 360.0 * MAP_WORLD_SIZE
    ys = (0.5 - np.log((1 + s) / (1 - s)) / (4 * np.pi)) * MAP_WORLD_SIZE

    qx, qy = map_point(query)
    mean_lats = (lats + query.latitude) / 2
    scale = EARTH_CIRCUMFERENCE_M * np.cos(np.radians(mean_lats)) / MAP_WORLD_SIZE
    return np.hypot(xs - qx, ys - qy) * scale
