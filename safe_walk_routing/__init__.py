"""
Safety-Weighted Walking Router

Finds walking routes that trade physical distance against a deterministic
per-street risk estimate derived from neighborhood statistics.

## Quick Start

```python
from safe_walk_routing import GraphStore, OverpassStreetSource, SafeRouteOptimizer

store = GraphStore()
store.refresh(OverpassStreetSource())

optimizer = SafeRouteOptimizer(store)
result = optimizer.find_safe_route(
    start_coords=(41.3083, -72.9279),  # Yale Campus
    end_coords=(41.3040, -72.9350)     # The Hill
)
print(result.summary.safety_rating, f"{result.summary.total_miles:.2f} mi")
```

## Architecture

- `config/`: Routing configuration and the neighborhood zone table
- `data/`: Raw street input, Overpass parsing and distance utilities
- `algorithms/`: Risk scoring, Dijkstra routing and route aggregation
- `mapping/`: Street graph construction, storage and data sources
- `services/`: Geocoding client
- `visualization/`: Interactive folium maps
"""

from .config import RoutingConfig, ZoneTable, load_zone_table
from .algorithms import (
    NeighborhoodClassifier,
    RiskScorer,
    RouteResult,
    RouteSummary,
    SafeRouteOptimizer,
    nearest_node,
    shortest_path,
    summarize
)
from .mapping import GraphBuilder, GraphStore, StreetGraph, OverpassStreetSource, OSMnxStreetSource
from .data import RawCoordinate, RawWay
from .services import NominatimGeocoder
from .visualization import RouteVisualizer
from .exceptions import (
    RoutingError,
    InvalidInputError,
    EmptyGraphError,
    NoNearestNodeError,
    NoPathFoundError,
    StreetDataError,
    GeocodingError
)

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    'SafeRouteOptimizer',
    'RouteResult',
    'RoutingConfig',
    'GraphStore',
    'RouteVisualizer',

    # Core algorithms
    'NeighborhoodClassifier',
    'RiskScorer',
    'GraphBuilder',
    'StreetGraph',
    'shortest_path',
    'nearest_node',
    'summarize',
    'RouteSummary',

    # Data and collaborators
    'ZoneTable',
    'load_zone_table',
    'RawCoordinate',
    'RawWay',
    'OverpassStreetSource',
    'OSMnxStreetSource',
    'NominatimGeocoder',

    # Errors
    'RoutingError',
    'InvalidInputError',
    'EmptyGraphError',
    'NoNearestNodeError',
    'NoPathFoundError',
    'StreetDataError',
    'GeocodingError',

    '__version__'
]
