"""
Build a weighted street graph from raw ways.
"""

import logging
from typing import Dict, Hashable, Iterable, List, Optional, Tuple

from ...algorithms.risk.risk_scorer import RiskScorer
from ...config.routing_config import RoutingConfig
from ...data.distance_utils import haversine_km, midpoint
from ...data.raw_ways import RawWay
from .street_graph import Edge, Node, StreetGraph

logger = logging.getLogger(__name__)


class GraphBuilder:
    """
    Turn raw ways into a StreetGraph with risk, length and weight on every edge.

    Invalid input never aborts a build: unresolved coordinates create no node
    and every segment touching one is dropped.
    """

    def __init__(self, scorer: Optional[RiskScorer] = None,
                 config: Optional[RoutingConfig] = None):
        """
        Initialize the builder.

        Args:
            scorer: Risk scorer (carries the neighborhood classifier)
            config: Routing configuration parameters
        """
        self.config = config or RoutingConfig()
        self.config.validate()
        self.scorer = scorer or RiskScorer(config=self.config)

    def build(self, ways: Iterable[RawWay]) -> StreetGraph:
        """Build a graph from ways in input order."""
        return self.build_with_stats(ways)[0]

    def build_with_stats(self, ways: Iterable[RawWay]) -> Tuple[StreetGraph, Dict[str, int]]:
        """
        Build a graph and report what was dropped along the way.

        Node ids follow first-seen order of source ids across ways. Edge risk
        and zone come from the segment midpoint; length is the haversine
        distance between its endpoints.

        Args:
            ways: Raw street segments

        Returns:
            (graph, build counters); the graph is empty if no way contributes a node
        """
        ways = list(ways)
        nodes: List[Node] = []
        node_ids: Dict[Hashable, int] = {}

        for way in ways:
            for coord in way.coordinates:
                if coord.source_id in node_ids or not coord.is_valid:
                    continue
                node_id = len(nodes)
                nodes.append(Node(node_id, float(coord.lat), float(coord.lng), coord.source_id))
                node_ids[coord.source_id] = node_id

        edges: List[Edge] = []
        skipped_invalid = 0
        skipped_degenerate = 0
        short_ways = 0

        for way in ways:
            if len(way.coordinates) < 2:
                short_ways += 1
                logger.debug(f"Way {way.way_id} has fewer than 2 coordinates - skipped")
                continue

            street_name = way.name or self.config.unnamed_street
            for start, end in zip(way.coordinates, way.coordinates[1:]):
                if not (start.is_valid and end.is_valid):
                    skipped_invalid += 1
                    logger.debug(f"Way {way.way_id}: dropped segment "
                                 f"{start.source_id} -> {end.source_id} (unresolved coordinate)")
                    continue

                from_id = node_ids[start.source_id]
                to_id = node_ids[end.source_id]
                if from_id == to_id:
                    skipped_degenerate += 1
                    continue

                edges.append(self._make_edge(nodes[from_id], nodes[to_id], way.way_id, street_name))

        stats = {
            'ways': len(ways),
            'nodes': len(nodes),
            'edges': len(edges),
            'skipped_invalid_segments': skipped_invalid,
            'skipped_degenerate_segments': skipped_degenerate,
            'short_ways': short_ways
        }

        logger.info(f"Built street graph: {len(nodes)} nodes, {len(edges)} edges "
                    f"from {len(ways)} ways")
        if skipped_invalid:
            logger.warning(f"Dropped {skipped_invalid} segments with unresolved coordinates")

        return StreetGraph(nodes, edges), stats

    def _make_edge(self, start: Node, end: Node, way_id: Hashable, street_name: str) -> Edge:
        mid_lat, mid_lng = midpoint(start.lat, start.lng, end.lat, end.lng)
        risk, zone = self.scorer.score_with_zone(mid_lat, mid_lng)
        length_km = haversine_km(start.lat, start.lng, end.lat, end.lng,
                                 radius_km=self.config.earth_radius_km)

        return Edge(
            from_node=start.id,
            to_node=end.id,
            risk=risk,
            length_km=length_km,
            weight=self.edge_weight(risk, length_km),
            way_id=way_id,
            street_name=street_name,
            zone=zone
        )

    def edge_weight(self, risk: int, length_km: float) -> float:
        """Combined traversal cost: risk plus length scaled to risk points."""
        return risk + length_km * self.config.distance_scale_factor


def build_graph(ways: Iterable[RawWay], config: Optional[RoutingConfig] = None) -> StreetGraph:
    """Build a graph with the bundled zone table."""
    return GraphBuilder(config=config).build(ways)
