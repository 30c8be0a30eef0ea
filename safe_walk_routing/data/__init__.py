"""
Data processing and utilities for safety-weighted routing.

This module contains:
- Raw street-segment input and Overpass response parsing
- Distance calculations
"""

from .raw_ways import RawCoordinate, RawWay, ways_from_overpass, load_ways
from .distance_utils import haversine_km, haversine_km_array, is_valid_coordinate, km_to_miles, midpoint

__all__ = [
    'RawCoordinate',
    'RawWay',
    'ways_from_overpass',
    'load_ways',
    'haversine_km',
    'haversine_km_array',
    'is_valid_coordinate',
    'km_to_miles',
    'midpoint'
]
