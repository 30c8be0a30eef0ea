"""
Routing algorithms and optimization functionality.

This module contains:
- Neighborhood classification and risk scoring
- Core routing algorithms (Dijkstra, nearest node, route aggregation)
- Route optimization facade
"""

from .risk.neighborhood_classifier import NeighborhoodClassifier
from .risk.risk_scorer import RiskScorer
from .routing.dijkstra import shortest_path, nearest_node
from .routing.route_summary import RouteSummary, summarize
from .optimization.route_optimizer import RouteResult, SafeRouteOptimizer

__all__ = [
    'NeighborhoodClassifier',
    'RiskScorer',
    'shortest_path',
    'nearest_node',
    'RouteSummary',
    'summarize',
    'RouteResult',
    'SafeRouteOptimizer'
]
