"""
Visualization tools for street risk maps and routes.
"""

from .route_visualizer import RouteVisualizer

__all__ = ['RouteVisualizer']
