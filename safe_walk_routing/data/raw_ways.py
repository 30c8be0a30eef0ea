"""
Raw street-segment input and the Overpass JSON loader that produces it.
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Hashable, List, Optional, Sequence, Tuple

from .distance_utils import is_valid_coordinate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawCoordinate:
    """A way vertex as delivered by the street data source.

    ``lat``/``lng`` are None when the source referenced a node it never
    resolved.
    """

    source_id: Hashable
    lat: Optional[float]
    lng: Optional[float]

    @property
    def is_valid(self) -> bool:
        return is_valid_coordinate(self.lat, self.lng)


@dataclass(frozen=True)
class RawWay:
    """One named street segment source: an ordered run of coordinates."""

    way_id: Hashable
    coordinates: Tuple[RawCoordinate, ...]
    name: Optional[str] = None

    @classmethod
    def from_points(cls, way_id: Hashable,
                    points: Sequence[Tuple[Hashable, Optional[float], Optional[float]]],
                    name: Optional[str] = None) -> 'RawWay':
        """Build a way from (source_id, lat, lng) triples."""
        return cls(way_id, tuple(RawCoordinate(*point) for point in points), name)


def ways_from_overpass(data: Dict[str, Any]) -> List[RawWay]:
    """
    Convert an Overpass API JSON response into raw ways.

    Node elements are collected first, then every way with more than one node
    reference becomes a RawWay. References to nodes missing from the response
    are kept as invalid coordinates so the graph builder can drop the affected
    segments.

    Args:
        data: Parsed Overpass response (``{"elements": [...]}``)

    Returns:
        Ways in response order

    Raises:
        ValueError: If the response has no ``elements`` list
    """
    elements = data.get('elements') if isinstance(data, dict) else None
    if not isinstance(elements, list):
        raise ValueError("Overpass response must contain an 'elements' list")

    # elements without an id cannot be referenced or deduplicated
    well_formed = [e for e in elements if isinstance(e, dict) and isinstance(e.get('id'), (int, str))]
    malformed = len(elements) - len(well_formed)

    osm_nodes = {}
    for element in well_formed:
        if element.get('type') == 'node':
            osm_nodes[element['id']] = (element.get('lat'), element.get('lon'))

    ways = []
    unresolved = 0
    for element in well_formed:
        if element.get('type') != 'way':
            continue
        node_refs = element.get('nodes') or []
        if not isinstance(node_refs, list) or not all(isinstance(ref, (int, str)) for ref in node_refs):
            malformed += 1
            continue
        if len(node_refs) < 2:
            continue

        coordinates = []
        for ref in node_refs:
            lat, lon = osm_nodes.get(ref, (None, None))
            if lat is None or lon is None:
                unresolved += 1
            coordinates.append(RawCoordinate(ref, lat, lon))

        tags = element.get('tags')
        name = tags.get('name') if isinstance(tags, dict) else None
        ways.append(RawWay(element['id'], tuple(coordinates), name))

    logger.info(f"Parsed {len(ways)} ways and {len(osm_nodes)} nodes from Overpass response")
    if unresolved:
        logger.warning(f"{unresolved} way node references could not be resolved")
    if malformed:
        logger.warning(f"Skipped {malformed} malformed Overpass elements")
    return ways


def load_ways(data_path: str) -> List[RawWay]:
    """
    Load raw ways from a saved Overpass JSON response.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a valid Overpass response
    """
    if not os.path.exists(data_path):
        raise FileNotFoundError(f"Street data file not found: {data_path}")

    try:
        with open(data_path, 'r') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON format in street data file: {e}")

    return ways_from_overpass(data)
