"""
Neighborhood zone table: named polygons with a risk multiplier each.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

from shapely.geometry import Polygon

logger = logging.getLogger(__name__)

DEFAULT_ZONE = 'default'

DEFAULT_ZONE_TABLE_PATH = os.path.join(
    os.path.dirname(os.path.abspath(__file__)), '..', 'data', 'neighborhoods.geojson'
)


@dataclass(frozen=True)
class Zone:
    """A named neighborhood polygon. Boundary pairs are (lng, lat) as in GeoJSON."""

    name: str
    boundary: Tuple[Tuple[float, float], ...]
    risk_multiplier: float
    polygon: Polygon = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.name == DEFAULT_ZONE:
            raise ValueError(f"'{DEFAULT_ZONE}' is reserved for unmatched points")
        if self.risk_multiplier <= 0:
            raise ValueError(f"Zone {self.name!r} must have a positive risk multiplier")
        if len(self.boundary) < 3:
            raise ValueError(f"Zone {self.name!r} boundary needs at least 3 points")
        # shapely closes the ring if the last point differs from the first
        object.__setattr__(self, 'polygon', Polygon(self.boundary))


@dataclass(frozen=True)
class ZoneTable:
    """Ordered zones; the first zone containing a point wins."""

    zones: Tuple[Zone, ...] = ()
    default_multiplier: float = 1.0

    def __post_init__(self):
        names = [zone.name for zone in self.zones]
        duplicates = {name for name in names if names.count(name) > 1}
        if duplicates:
            raise ValueError(f"Duplicate zone names: {sorted(duplicates)}")
        if self.default_multiplier <= 0:
            raise ValueError("default_multiplier must be positive")

    def __len__(self) -> int:
        return len(self.zones)

    def __iter__(self):
        return iter(self.zones)

    def multiplier_for(self, zone_name: str) -> float:
        """Risk multiplier for a zone name, the default for unknown names."""
        for zone in self.zones:
            if zone.name == zone_name:
                return zone.risk_multiplier
        return self.default_multiplier

    @property
    def multipliers(self) -> Dict[str, float]:
        factors = {zone.name: zone.risk_multiplier for zone in self.zones}
        factors[DEFAULT_ZONE] = self.default_multiplier
        return factors

    @classmethod
    def from_zones(cls, zones: Iterable[Tuple[str, Sequence[Tuple[float, float]], float]],
                   default_multiplier: float = 1.0) -> 'ZoneTable':
        """Build a table from (name, boundary, multiplier) triples."""
        return cls(
            zones=tuple(Zone(name, tuple(tuple(p) for p in boundary), float(multiplier))
                        for name, boundary, multiplier in zones),
            default_multiplier=default_multiplier
        )

    @classmethod
    def from_geojson(cls, collection: Dict[str, Any],
                     default_multiplier: Optional[float] = None) -> 'ZoneTable':
        """
        Build a table from a GeoJSON FeatureCollection.

        Each feature needs a Polygon geometry and ``name`` and
        ``risk_multiplier`` properties. Only the exterior ring is used. A
        collection-level ``default_multiplier`` member is honoured unless
        overridden by the argument.

        Raises:
            ValueError: If the collection or one of its features is malformed
        """
        if collection.get('type') != 'FeatureCollection' or 'features' not in collection:
            raise ValueError("Zone data must be a GeoJSON FeatureCollection")

        zones = []
        for index, feature in enumerate(collection['features']):
            geometry = feature.get('geometry') or {}
            properties = feature.get('properties') or {}
            if geometry.get('type') != 'Polygon':
                raise ValueError(f"Zone feature {index} is not a Polygon")
            if 'name' not in properties or 'risk_multiplier' not in properties:
                raise ValueError(f"Zone feature {index} needs 'name' and 'risk_multiplier'")
            exterior = geometry['coordinates'][0]
            zones.append(Zone(
                name=str(properties['name']),
                boundary=tuple((float(lng), float(lat)) for lng, lat in exterior),
                risk_multiplier=float(properties['risk_multiplier'])
            ))

        if default_multiplier is None:
            default_multiplier = float(collection.get('default_multiplier', 1.0))

        return cls(zones=tuple(zones), default_multiplier=default_multiplier)


def load_zone_table(data_path: Optional[str] = None) -> ZoneTable:
    """
    Load the zone table from a GeoJSON file.

    Args:
        data_path: Path to the GeoJSON file, defaults to the bundled table

    Returns:
        ZoneTable in file order

    Raises:
        FileNotFoundError: If the zone file is not found
        ValueError: If the file is not valid zone GeoJSON
    """
    if data_path is None:
        data_path = DEFAULT_ZONE_TABLE_PATH

    if not os.path.exists(data_path):
        raise FileNotFoundError(f"Zone data file not found: {data_path}")

    try:
        with open(data_path, 'r') as f:
            collection = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON format in zone data file: {e}")

    table = ZoneTable.from_geojson(collection)
    logger.info(f"Loaded {len(table)} zones from {data_path}")
    return table
