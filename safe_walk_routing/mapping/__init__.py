"""
Mapping functionality for safety-weighted routing.

This module contains:
- Street graph model and construction
- Live graph storage with wholesale replacement
- Street data sources (Overpass, OSMnx)
"""

from .network import Node, Edge, StreetGraph, GraphBuilder, GraphStore, build_graph
from .sources import OverpassStreetSource, OSMnxStreetSource

__all__ = [
    'Node',
    'Edge',
    'StreetGraph',
    'GraphBuilder',
    'GraphStore',
    'build_graph',
    'OverpassStreetSource',
    'OSMnxStreetSource'
]
