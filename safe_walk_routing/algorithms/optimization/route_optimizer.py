"""
Route optimizer: coordinates in, safest-weighted route summary out.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from ...config.routing_config import RoutingConfig
from ...data.distance_utils import is_valid_coordinate
from ...exceptions import EmptyGraphError, InvalidInputError
from ...mapping.network.network_store import GraphStore
from ...mapping.network.street_graph import StreetGraph
from ..routing.dijkstra import nearest_node, shortest_path
from ..routing.route_summary import RouteSummary, summarize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteResult:
    """A computed route with the graph nodes it was snapped to."""

    start_coords: Tuple[float, float]
    end_coords: Tuple[float, float]
    start_node: int
    end_node: int
    summary: RouteSummary
    calculation_time: float

    def to_dict(self) -> Dict[str, Any]:
        result = self.summary.get_summary()
        result.update({
            'start_coords': self.start_coords,
            'end_coords': self.end_coords,
            'start_node': self.start_node,
            'end_node': self.end_node,
            'calculation_time_ms': round(self.calculation_time * 1000, 1)
        })
        return result


class SafeRouteOptimizer:
    """
    Main interface for route calculation over the live street graph.

    Every query reads the graph once and works on that snapshot, so a
    concurrent refresh of the store cannot change it mid-query.
    """

    def __init__(self, graph: Union[GraphStore, StreetGraph, None] = None,
                 config: Optional[RoutingConfig] = None):
        """
        Initialize the optimizer.

        Args:
            graph: Graph store to read from, or a fixed graph
            config: Routing configuration parameters
        """
        self.config = config or RoutingConfig()
        self.config.validate()

        if isinstance(graph, GraphStore):
            self.store = graph
        else:
            self.store = GraphStore(config=self.config, graph=graph)

        logger.info("SafeRouteOptimizer initialized")

    @property
    def graph(self) -> StreetGraph:
        return self.store.current

    def find_safe_route(self, start_coords: Tuple[float, float],
                        end_coords: Tuple[float, float]) -> RouteResult:
        """
        Find the minimum-weight route between two coordinates.

        Args:
            start_coords: (lat, lon) of route start
            end_coords: (lat, lon) of route end

        Returns:
            RouteResult with the path summary

        Raises:
            InvalidInputError: If either coordinate is not finite or out of range
            EmptyGraphError: If no street graph has been loaded
            NoPathFoundError: If both points snap to one node or are disconnected
        """
        start_time = time.time()
        for coords in (start_coords, end_coords):
            if len(coords) != 2 or not is_valid_coordinate(*coords):
                raise InvalidInputError(f"Invalid coordinate: {coords}")

        graph = self.graph

        if graph.is_empty():
            raise EmptyGraphError("Street data not loaded yet")

        start_node = nearest_node(graph, *start_coords, radius_km=self.config.earth_radius_km)
        end_node = nearest_node(graph, *end_coords, radius_km=self.config.earth_radius_km)
        logger.debug(f"Snapped {start_coords} -> node {start_node.id}, "
                     f"{end_coords} -> node {end_node.id}")

        path = shortest_path(graph, start_node.id, end_node.id)
        summary = summarize(graph, path, self.config)
        calculation_time = time.time() - start_time

        logger.info(f"Route found: {summary.segment_count} segments, "
                    f"{summary.total_miles:.2f} mi, risk {summary.total_risk} "
                    f"({summary.safety_rating}), calculated in {calculation_time * 1000:.1f}ms")

        return RouteResult(
            start_coords=tuple(start_coords),
            end_coords=tuple(end_coords),
            start_node=start_node.id,
            end_node=end_node.id,
            summary=summary,
            calculation_time=calculation_time
        )

    def find_safe_route_by_address(self, start_text: str, end_text: str,
                                   geocoder) -> RouteResult:
        """
        Geocode two addresses and route between them.

        Args:
            start_text: Start address
            end_text: Destination address
            geocoder: Object with ``geocode(text)`` returning a result or None

        Raises:
            InvalidInputError: If an address cannot be geocoded
        """
        coords = []
        for text in (start_text, end_text):
            result = geocoder.geocode(text)
            if result is None:
                raise InvalidInputError(f"Address not found: {text!r}")
            coords.append((result.lat, result.lng))
        return self.find_safe_route(coords[0], coords[1])

    def get_graph_statistics(self) -> Dict[str, Any]:
        return self.store.get_stats()
