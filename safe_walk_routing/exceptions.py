"""
Errors raised by route queries and the street data / geocoding adapters.
"""


class RoutingError(RuntimeError):
    """Base class for routing failures."""


class InvalidInputError(RoutingError, ValueError):
    """Malformed coordinate or unknown node id."""


class EmptyGraphError(RoutingError):
    """A query was made against a graph with no nodes."""


class NoNearestNodeError(EmptyGraphError):
    """No node can be matched to a coordinate (only possible on an empty graph)."""


class NoPathFoundError(RoutingError):
    """Start and end are the same node or lie in disconnected components."""

    def __init__(self, start_node: int, end_node: int, reason: str = "disconnected"):
        self.start_node = start_node
        self.end_node = end_node
        self.reason = reason
        super().__init__(f"No path found from {start_node} to {end_node} ({reason})")


class StreetDataError(RoutingError):
    """Street network could not be fetched or parsed."""


class GeocodingError(RoutingError):
    """The geocoding service could not be reached or returned garbage."""
