"""
Route optimization functionality.
"""

from .route_optimizer import RouteResult, SafeRouteOptimizer

__all__ = [
    'RouteResult',
    'SafeRouteOptimizer'
]
