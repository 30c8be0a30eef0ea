"""
Route aggregation: distance, risk and safety classification of a found path.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple

from ...config.routing_config import RoutingConfig
from ...exceptions import InvalidInputError
from ...mapping.network.street_graph import StreetGraph

logger = logging.getLogger(__name__)


class EdgeStyle(NamedTuple):
    """Presentation class of a single street segment."""
    tier: int
    label: str
    color: str
    width: int


def safety_tier(value: float, thresholds: Sequence[float] = (2, 5, 8)) -> int:
    """
    Index 0-3 of the safety tier for a risk value.

    Upper bounds are inclusive: with the default thresholds 2 is tier 0 and
    5 is tier 1.
    """
    for tier, bound in enumerate(thresholds):
        if value <= bound:
            return tier
    return len(thresholds)


def classify_route(mean_risk: float, config: Optional[RoutingConfig] = None) -> str:
    """Safety label for a route's mean risk per segment."""
    config = config or RoutingConfig()
    return config.route_safety_labels[safety_tier(mean_risk, config.safety_thresholds)]


def classify_edge(risk: float, config: Optional[RoutingConfig] = None) -> EdgeStyle:
    """Label, color and line width for one segment; same tiers as routes."""
    config = config or RoutingConfig()
    tier = safety_tier(risk, config.safety_thresholds)
    return EdgeStyle(
        tier=tier,
        label=config.edge_safety_labels[tier],
        color=config.tier_colors[tier],
        width=config.tier_widths[tier]
    )


@dataclass(frozen=True)
class RouteSummary:
    """Read-only statistics of a path through the street graph."""

    path: Tuple[int, ...]
    total_km: float
    total_miles: float
    total_risk: int
    total_weight: float
    segment_count: int
    mean_risk: float
    safety_rating: str
    coordinates: Tuple[Tuple[float, float], ...] = ()
    street_names: Tuple[str, ...] = ()
    segment_risks: Tuple[int, ...] = field(default=(), repr=False)

    def get_summary(self) -> Dict[str, Any]:
        """Summary statistics for display or JSON output."""
        return {
            'node_count': len(self.path),
            'segment_count': self.segment_count,
            'total_distance_km': round(self.total_km, 3),
            'total_distance_mi': round(self.total_miles, 2),
            'total_risk': self.total_risk,
            'mean_risk': round(self.mean_risk, 2),
            'max_risk': max(self.segment_risks) if self.segment_risks else 0,
            'total_weight': round(self.total_weight, 2),
            'safety_rating': self.safety_rating,
            'streets': list(self.street_names)
        }


def summarize(graph: StreetGraph, path: Sequence[int],
              config: Optional[RoutingConfig] = None) -> RouteSummary:
    """
    Walk a path and aggregate its edges.

    Args:
        graph: Graph the path was found in
        path: Node IDs, start to end inclusive
        config: Routing configuration (unit conversion, safety tiers)

    Returns:
        RouteSummary for the path

    Raises:
        InvalidInputError: If the path has fewer than two nodes or is discontinuous
    """
    config = config or RoutingConfig()
    if len(path) < 2:
        raise InvalidInputError("A route needs at least two nodes")

    total_km = 0.0
    total_weight = 0.0
    risks: List[int] = []
    street_names: List[str] = []

    for a, b in zip(path, path[1:]):
        edge = graph.find_edge(a, b)
        if edge is None:
            raise InvalidInputError(f"Discontinuous path at nodes {a} -> {b}")
        total_km += edge.length_km
        total_weight += edge.weight
        risks.append(edge.risk)
        # consecutive segments of one street collapse into a single name
        if not street_names or street_names[-1] != edge.street_name:
            street_names.append(edge.street_name)

    segment_count = len(path) - 1
    total_risk = sum(risks)
    mean_risk = total_risk / segment_count

    return RouteSummary(
        path=tuple(path),
        total_km=total_km,
        total_miles=total_km * config.km_to_miles,
        total_risk=total_risk,
        total_weight=total_weight,
        segment_count=segment_count,
        mean_risk=mean_risk,
        safety_rating=classify_route(mean_risk, config),
        coordinates=tuple((graph.node(n).lat, graph.node(n).lng) for n in path),
        street_names=tuple(street_names),
        segment_risks=tuple(risks)
    )
