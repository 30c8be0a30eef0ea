"""
Street data from an OSMnx walking network.
"""

import logging
from typing import Hashable, List, Optional, Tuple

import networkx as nx
import osmnx as ox

from ...config.routing_config import RoutingConfig
from ...data.raw_ways import RawCoordinate, RawWay
from ...exceptions import StreetDataError

logger = logging.getLogger(__name__)


def _first(value):
    # OSMnx stores merged attributes as lists
    if isinstance(value, list):
        return value[0] if value else None
    return value


def ways_from_networkx(graph: nx.MultiDiGraph) -> List[RawWay]:
    """
    Convert an OSMnx graph into two-point raw ways, one per undirected edge.

    Node ids are OSM ids and become the source ids used for deduplication.
    """
    undirected = graph.to_undirected()
    ways = []
    for u, v, data in undirected.edges(data=True):
        way_id: Hashable = _first(data.get('osmid'))
        u_data, v_data = undirected.nodes[u], undirected.nodes[v]
        ways.append(RawWay(
            way_id=way_id,
            coordinates=(
                RawCoordinate(u, u_data.get('y'), u_data.get('x')),
                RawCoordinate(v, v_data.get('y'), v_data.get('x'))
            ),
            name=_first(data.get('name'))
        ))
    return ways


class OSMnxStreetSource:
    """Download an unsimplified walking network around a point."""

    def __init__(self, center: Optional[Tuple[float, float]] = None,
                 dist_m: float = 1000.0,
                 config: Optional[RoutingConfig] = None):
        """
        Initialize the source.

        Args:
            center: (lat, lon) of the network center, defaults to the map center
            dist_m: Network radius in meters
            config: Routing configuration parameters
        """
        self.config = config or RoutingConfig()
        self.center = center or self.config.map_center
        self.dist_m = dist_m

    def fetch_ways(self) -> List[RawWay]:
        """
        Raises:
            StreetDataError: If OSMnx cannot load the network
        """
        logger.info(f"Building walk network around ({self.center[0]:.4f}, {self.center[1]:.4f}), "
                    f"radius {self.dist_m:.0f}m")
        try:
            # unsimplified so every vertex is a real OSM node
            graph = ox.graph_from_point(
                self.center,
                dist=self.dist_m,
                network_type='walk',
                simplify=False
            )
        except Exception as e:
            raise StreetDataError(f"Failed to load street network: {e}") from e

        logger.info(f"Network loaded: {len(graph.nodes)} nodes, {len(graph.edges)} edges")
        return ways_from_networkx(graph)
