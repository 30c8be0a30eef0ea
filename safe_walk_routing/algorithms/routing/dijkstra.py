"""
Dijkstra shortest-path search and nearest-node lookup over a StreetGraph.
"""

import heapq
import logging
import math
from typing import Dict, List, Sequence

import numpy as np

from ...data.distance_utils import EARTH_RADIUS_KM, haversine_km_array, is_valid_coordinate
from ...exceptions import EmptyGraphError, InvalidInputError, NoNearestNodeError, NoPathFoundError
from ...mapping.network.street_graph import Node, StreetGraph

logger = logging.getLogger(__name__)


def shortest_path(graph: StreetGraph, start_node: int, end_node: int) -> List[int]:
    """
    Minimum-weight path between two nodes, treating every edge as bidirectional.

    Heap entries are ``(distance, node_id)`` so equal distances pop the lowest
    node id first. The search stops as soon as ``end_node`` is popped.

    Args:
        graph: Street graph to search
        start_node: Starting node ID
        end_node: Ending node ID

    Returns:
        Node IDs from start to end inclusive (at least two)

    Raises:
        EmptyGraphError: If the graph has no nodes
        InvalidInputError: If either node id is not in the graph
        NoPathFoundError: If start equals end or no path connects them
    """
    if graph.is_empty():
        raise EmptyGraphError("Cannot route on an empty graph")
    for node_id in (start_node, end_node):
        if not graph.has_node(node_id):
            raise InvalidInputError(f"Unknown node id: {node_id}")
    if start_node == end_node:
        raise NoPathFoundError(start_node, end_node, reason="start and end are the same node")

    distances: Dict[int, float] = {start_node: 0.0}
    previous: Dict[int, int] = {}
    visited = set()
    heap = [(0.0, start_node)]

    while heap:
        dist, current = heapq.heappop(heap)
        if current in visited:
            continue
        if current == end_node:
            break
        visited.add(current)

        for neighbor, edge in graph.neighbors(current):
            if neighbor in visited:
                continue
            alt = dist + edge.weight
            if alt < distances.get(neighbor, math.inf):
                distances[neighbor] = alt
                previous[neighbor] = current
                heapq.heappush(heap, (alt, neighbor))
    else:
        logger.info(f"No path found from {start_node} to {end_node} "
                    f"({len(visited)} nodes explored)")
        raise NoPathFoundError(start_node, end_node)

    path = [end_node]
    while path[-1] != start_node:
        path.append(previous[path[-1]])
    path.reverse()

    logger.debug(f"Path found from {start_node} to {end_node}: {len(path)} nodes, "
                 f"weight {distances[end_node]:.2f}, {len(visited)} nodes settled")
    return path


def path_weight(graph: StreetGraph, path: Sequence[int]) -> float:
    """
    Total edge weight along a path.

    Raises:
        InvalidInputError: If two consecutive nodes are not connected
    """
    total = 0.0
    for a, b in zip(path, path[1:]):
        edge = graph.find_edge(a, b)
        if edge is None:
            raise InvalidInputError(f"Discontinuous path at nodes {a} -> {b}")
        total += edge.weight
    return total


def nearest_node(graph: StreetGraph, lat: float, lng: float,
                 radius_km: float = EARTH_RADIUS_KM) -> Node:
    """
    Node closest to a coordinate by haversine distance.

    ``argmin`` returns the first minimum, so ties go to the lowest node id.

    Raises:
        InvalidInputError: If the coordinate is not finite or out of range
        NoNearestNodeError: If the graph has no nodes
    """
    if not is_valid_coordinate(lat, lng):
        raise InvalidInputError(f"Invalid coordinate: ({lat}, {lng})")
    if graph.is_empty():
        raise NoNearestNodeError("Cannot match a coordinate against an empty graph")

    lats, lngs = graph.coordinate_arrays()
    distances = haversine_km_array(lat, lng, lats, lngs, radius_km=radius_km)
    return graph.node(int(np.argmin(distances)))
