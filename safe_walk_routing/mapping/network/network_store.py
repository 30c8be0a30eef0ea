"""
Holder for the live street graph, replaced wholesale on every refresh.
"""

import logging
import threading
import time
from typing import Any, Dict, Optional

from ...config.routing_config import RoutingConfig
from .graph_builder import GraphBuilder
from .street_graph import StreetGraph

logger = logging.getLogger(__name__)


class GraphStore:
    """
    Owns the current StreetGraph.

    A refresh builds a complete new graph before swapping it in, so readers
    only ever see a fully built graph. Callers holding a previous graph keep
    using it unchanged.
    """

    def __init__(self, builder: Optional[GraphBuilder] = None,
                 config: Optional[RoutingConfig] = None,
                 graph: Optional[StreetGraph] = None):
        self.config = config or RoutingConfig()
        self.builder = builder or GraphBuilder(config=self.config)
        self._graph = graph if graph is not None else StreetGraph.empty()
        self._lock = threading.Lock()
        self.last_refresh: Optional[float] = None
        self.last_build: Dict[str, int] = {}

    @property
    def current(self) -> StreetGraph:
        return self._graph

    def replace(self, graph: StreetGraph,
                build_stats: Optional[Dict[str, int]] = None) -> StreetGraph:
        """Swap in a new graph (and the counters of its build) and return the previous one."""
        with self._lock:
            previous, self._graph = self._graph, graph
            self.last_build = dict(build_stats or {})
            self.last_refresh = time.time()
        logger.info(f"Street graph replaced: {previous!r} -> {graph!r}")
        return previous

    def refresh(self, source) -> StreetGraph:
        """
        Fetch ways from a street source, build a new graph and swap it in.

        Args:
            source: Object with a ``fetch_ways()`` method returning RawWays

        Returns:
            The newly installed graph

        Raises:
            StreetDataError: If the source fails; the current graph is kept
        """
        start_time = time.time()
        ways = source.fetch_ways()
        graph, build_stats = self.builder.build_with_stats(ways)
        self.replace(graph, build_stats)
        logger.info(f"Street graph refreshed in {(time.time() - start_time) * 1000:.1f}ms")
        return graph

    def get_stats(self) -> Dict[str, Any]:
        with self._lock:
            graph, last_refresh, last_build = self._graph, self.last_refresh, self.last_build
        stats = graph.statistics()
        stats['last_refresh'] = last_refresh
        stats['last_build'] = dict(last_build)
        return stats
