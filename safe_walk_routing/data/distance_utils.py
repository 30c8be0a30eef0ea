"""
Distance calculation utilities optimized for performance.
"""

import math
from typing import Tuple

import numpy as np

EARTH_RADIUS_KM = 6371.0
KM_TO_MILES = 0.621371


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float,
                 radius_km: float = EARTH_RADIUS_KM) -> float:
    """
    Calculate the great circle distance between two points on Earth.

    Args:
        lat1, lon1: First point coordinates
        lat2, lon2: Second point coordinates
        radius_km: Earth radius

    Returns:
        Distance in kilometers
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (math.sin(delta_lat / 2) ** 2 +
         math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return radius_km * c


def haversine_km_array(lat: float, lon: float, lats: np.ndarray, lons: np.ndarray,
                       radius_km: float = EARTH_RADIUS_KM) -> np.ndarray:
    """
    Vectorized haversine distance from one point to many.

    Args:
        lat, lon: Query point
        lats, lons: Arrays of candidate coordinates

    Returns:
        Array of distances in kilometers
    """
    lat_rad = np.radians(lat)
    lats_rad = np.radians(lats)
    delta_lat = np.radians(lats - lat)
    delta_lon = np.radians(lons - lon)

    a = (np.sin(delta_lat / 2) ** 2 +
         np.cos(lat_rad) * np.cos(lats_rad) * np.sin(delta_lon / 2) ** 2)
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))

    return radius_km * c


def midpoint(lat1: float, lon1: float, lat2: float, lon2: float) -> Tuple[float, float]:
    """Arithmetic midpoint of two coordinates, good enough for street segments."""
    return (lat1 + lat2) / 2, (lon1 + lon2) / 2


def km_to_miles(distance_km: float, factor: float = KM_TO_MILES) -> float:
    return distance_km * factor


def is_valid_coordinate(lat, lon) -> bool:
    """True for finite WGS84 degrees: lat in [-90, 90], lon in [-180, 180]."""
    if lat is None or lon is None:
        return False
    try:
        lat, lon = float(lat), float(lon)
    except (TypeError, ValueError):
        return False
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return False
    return -90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0
