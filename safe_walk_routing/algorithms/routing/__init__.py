"""
Core routing algorithms.
"""

from .dijkstra import shortest_path, path_weight, nearest_node
from .route_summary import (
    EdgeStyle,
    RouteSummary,
    classify_edge,
    classify_route,
    safety_tier,
    summarize
)

__all__ = [
    'shortest_path',
    'path_weight',
    'nearest_node',
    'EdgeStyle',
    'RouteSummary',
    'classify_edge',
    'classify_route',
    'safety_tier',
    'summarize'
]
