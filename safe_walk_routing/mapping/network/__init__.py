"""
Street graph model, construction and live-graph storage.
"""

from .street_graph import Node, Edge, StreetGraph
from .graph_builder import GraphBuilder, build_graph
from .network_store import GraphStore

__all__ = [
    'Node',
    'Edge',
    'StreetGraph',
    'GraphBuilder',
    'build_graph',
    'GraphStore'
]
