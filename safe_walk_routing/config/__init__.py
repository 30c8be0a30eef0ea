"""
Configuration management for safety-weighted routing.
"""

from .routing_config import RoutingConfig
from .zone_table import DEFAULT_ZONE, Zone, ZoneTable, load_zone_table

__all__ = [
    'RoutingConfig',
    'DEFAULT_ZONE',
    'Zone',
    'ZoneTable',
    'load_zone_table'
]
