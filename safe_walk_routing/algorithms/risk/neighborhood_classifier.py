"""
Point-in-polygon neighborhood lookup.
"""

import logging
from functools import lru_cache
from typing import Optional

from shapely.geometry import Point
from shapely.prepared import prep

from ...config.routing_config import RoutingConfig
from ...config.zone_table import DEFAULT_ZONE, ZoneTable, load_zone_table

logger = logging.getLogger(__name__)


class NeighborhoodClassifier:
    """
    Map a coordinate to the name of the first zone whose boundary covers it.

    Zones are tested in table order, so overlapping zones resolve to the one
    listed first. Points on a boundary count as inside.
    """

    def __init__(self, zone_table: Optional[ZoneTable] = None,
                 config: Optional[RoutingConfig] = None):
        """
        Initialize the classifier.

        Args:
            zone_table: Zones to test, defaults to the bundled neighborhood table
            config: Routing configuration (cache size, default multiplier)
        """
        self.config = config or RoutingConfig()
        self.zone_table = zone_table if zone_table is not None else load_zone_table()
        self._prepared = [(zone.name, prep(zone.polygon)) for zone in self.zone_table]

        if self.config.classifier_cache_size > 0:
            self._lookup = lru_cache(maxsize=self.config.classifier_cache_size)(self._classify)
        else:
            self._lookup = self._classify

        logger.debug(f"NeighborhoodClassifier initialized with {len(self._prepared)} zones")

    def classify(self, lat: float, lng: float) -> str:
        """
        Return the zone name containing (lat, lng), or ``"default"``.

        Args:
            lat: Latitude in decimal degrees
            lng: Longitude in decimal degrees
        """
        return self._lookup(float(lat), float(lng))

    def _classify(self, lat: float, lng: float) -> str:
        point = Point(lng, lat)
        for name, polygon in self._prepared:
            if polygon.covers(point):
                return name
        return DEFAULT_ZONE

    def multiplier_for(self, zone_name: str) -> float:
        """Risk multiplier of a zone; unknown zones use the default multiplier."""
        return self.zone_table.multiplier_for(zone_name)

    @property
    def default_multiplier(self) -> float:
        return self.zone_table.default_multiplier

    def describe(self) -> str:
        """One line per zone with its multiplier, table order."""
        return '\n'.join(f"{name}: {factor}"
                         for name, factor in self.zone_table.multipliers.items())
