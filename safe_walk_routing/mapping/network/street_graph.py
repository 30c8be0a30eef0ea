"""
Street graph model: deduplicated nodes, undirected weighted edges and a
per-node adjacency index.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Hashable, Iterator, List, Optional, Sequence, Tuple

import networkx as nx
import numpy as np

from ...exceptions import InvalidInputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Node:
    """Graph vertex at a unique source coordinate."""

    id: int
    lat: float
    lng: float
    source_id: Hashable


@dataclass(frozen=True)
class Edge:
    """Undirected street segment between two distinct nodes."""

    from_node: int
    to_node: int
    risk: int
    length_km: float
    weight: float
    way_id: Hashable
    street_name: str
    zone: str

    def other(self, node_id: int) -> int:
        """Endpoint opposite ``node_id``."""
        return self.to_node if node_id == self.from_node else self.from_node

    def connects(self, a: int, b: int) -> bool:
        return (self.from_node == a and self.to_node == b) or \
               (self.from_node == b and self.to_node == a)


class StreetGraph:
    """
    Immutable graph for one construction cycle.

    Node ids are dense and equal to their index in ``nodes``. A rebuild
    produces a new StreetGraph; instances are never mutated after creation.
    """

    def __init__(self, nodes: Sequence[Node] = (), edges: Sequence[Edge] = ()):
        """
        Initialize the graph and its adjacency index.

        Args:
            nodes: Nodes ordered by id (``nodes[i].id == i``)
            edges: Edges referencing existing, distinct node ids

        Raises:
            ValueError: If node ids are not dense or an edge is dangling
        """
        self._nodes: Tuple[Node, ...] = tuple(nodes)
        self._edges: Tuple[Edge, ...] = tuple(edges)

        for index, node in enumerate(self._nodes):
            if node.id != index:
                raise ValueError(f"Node ids must be dense and zero-based, got {node.id} at {index}")

        adjacency: List[List[int]] = [[] for _ in self._nodes]
        node_count = len(self._nodes)
        for index, edge in enumerate(self._edges):
            if not (0 <= edge.from_node < node_count and 0 <= edge.to_node < node_count):
                raise ValueError(f"Edge {index} references a missing node")
            if edge.from_node == edge.to_node:
                raise ValueError(f"Edge {index} is a self-loop on node {edge.from_node}")
            adjacency[edge.from_node].append(index)
            adjacency[edge.to_node].append(index)
        self._adjacency: Tuple[Tuple[int, ...], ...] = tuple(tuple(a) for a in adjacency)

        self._lats: Optional[np.ndarray] = None
        self._lngs: Optional[np.ndarray] = None

    @classmethod
    def empty(cls) -> 'StreetGraph':
        return cls()

    @property
    def nodes(self) -> Tuple[Node, ...]:
        return self._nodes

    @property
    def edges(self) -> Tuple[Edge, ...]:
        return self._edges

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def is_empty(self) -> bool:
        return not self._nodes

    def has_node(self, node_id: int) -> bool:
        return isinstance(node_id, (int, np.integer)) and 0 <= node_id < len(self._nodes)

    def node(self, node_id: int) -> Node:
        if not self.has_node(node_id):
            raise InvalidInputError(f"Unknown node id: {node_id}")
        return self._nodes[node_id]

    def neighbors(self, node_id: int) -> Iterator[Tuple[int, Edge]]:
        """Yield (neighbor id, edge) for every edge touching ``node_id``."""
        for edge_index in self._adjacency[node_id]:
            edge = self._edges[edge_index]
            yield edge.other(node_id), edge

    def degree(self, node_id: int) -> int:
        return len(self._adjacency[node_id])

    def find_edge(self, a: int, b: int) -> Optional[Edge]:
        """
        Edge joining ``a`` and ``b`` in either direction.

        When parallel edges exist the lightest one is returned, which is the
        one a shortest-path search traverses.
        """
        if not (self.has_node(a) and self.has_node(b)):
            return None
        best = None
        for edge_index in self._adjacency[a]:
            edge = self._edges[edge_index]
            if edge.connects(a, b) and (best is None or edge.weight < best.weight):
                best = edge
        return best

    def coordinate_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """Node latitudes and longitudes as arrays indexed by node id."""
        if self._lats is None:
            self._lats = np.array([node.lat for node in self._nodes], dtype=float)
            self._lngs = np.array([node.lng for node in self._nodes], dtype=float)
        return self._lats, self._lngs

    def get_bounds(self) -> Dict[str, float]:
        """
        Geographic bounds of the graph.

        Raises:
            ValueError: If the graph has no nodes
        """
        if self.is_empty():
            raise ValueError("Empty graph has no bounds")
        lats, lngs = self.coordinate_arrays()
        return {
            'lat_min': float(lats.min()),
            'lat_max': float(lats.max()),
            'lon_min': float(lngs.min()),
            'lon_max': float(lngs.max())
        }

    def statistics(self) -> Dict[str, Any]:
        """Node/edge counts and edge risk spread."""
        stats: Dict[str, Any] = {
            'nodes': self.node_count,
            'edges': self.edge_count,
        }
        if self._edges:
            risks = np.array([edge.risk for edge in self._edges])
            lengths = np.array([edge.length_km for edge in self._edges])
            stats.update({
                'risk_min': int(risks.min()),
                'risk_max': int(risks.max()),
                'risk_mean': round(float(risks.mean()), 2),
                'total_length_km': round(float(lengths.sum()), 3),
                'zones': sorted({edge.zone for edge in self._edges})
            })
        return stats

    def to_networkx(self) -> nx.MultiGraph:
        """Export as an undirected networkx MultiGraph (x=lng, y=lat like OSMnx)."""
        graph = nx.MultiGraph()
        for node in self._nodes:
            graph.add_node(node.id, x=node.lng, y=node.lat, source_id=node.source_id)
        for edge in self._edges:
            graph.add_edge(
                edge.from_node, edge.to_node,
                risk=edge.risk,
                length=edge.length_km,
                weight=edge.weight,
                way_id=edge.way_id,
                name=edge.street_name,
                zone=edge.zone
            )
        return graph

    def __repr__(self) -> str:
        return f"StreetGraph(nodes={self.node_count}, edges={self.edge_count})"
