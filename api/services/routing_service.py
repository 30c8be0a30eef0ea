"""
Service layer for the safety-weighted routing API.
"""

import logging
import os
from typing import Any, Dict, Optional

import geojson

from safe_walk_routing import __version__
from safe_walk_routing.algorithms.optimization.route_optimizer import RouteResult, SafeRouteOptimizer
from safe_walk_routing.config.routing_config import RoutingConfig
from safe_walk_routing.exceptions import (
    EmptyGraphError,
    GeocodingError,
    InvalidInputError,
    NoPathFoundError,
    StreetDataError
)
from safe_walk_routing.mapping.network.network_store import GraphStore
from safe_walk_routing.mapping.sources.overpass_source import OverpassStreetSource
from safe_walk_routing.services.geocoder import NominatimGeocoder
from api.schemas.routing import (
    AddressRouteRequest,
    GraphStatsResponse,
    HealthResponse,
    RefreshResponse,
    RouteRequest,
    RouteResponse,
    RouteStats
)

logger = logging.getLogger(__name__)


class SafeWalkRoutingService:
    """
    Service class that provides safety-weighted routing for the API.
    """

    def __init__(self, config: Optional[RoutingConfig] = None,
                 street_source=None, geocoder=None,
                 store: Optional[GraphStore] = None):
        """
        Initialize the routing service.

        Args:
            config: Routing configuration parameters
            street_source: Source used by refresh, defaults to Overpass
            geocoder: Address resolver, defaults to Nominatim
            store: Graph store, a new empty one by default
        """
        self.config = config or RoutingConfig()
        self.street_source = street_source or OverpassStreetSource(config=self.config)
        self.geocoder = geocoder or NominatimGeocoder(config=self.config)
        self.store = store or GraphStore(config=self.config)
        self.optimizer = SafeRouteOptimizer(self.store, self.config)

    def initialize(self) -> None:
        """Load the street graph unless SAFE_WALK_SKIP_STREET_LOAD=1."""
        if os.environ.get('SAFE_WALK_SKIP_STREET_LOAD', '0') == '1':
            logger.info("Skipping street data load at startup")
            return
        self.refresh_graph()

    @property
    def is_initialized(self) -> bool:
        return not self.store.current.is_empty()

    def get_health_status(self) -> HealthResponse:
        """Get the health status of the routing service."""
        graph = self.store.current
        return HealthResponse(
            status="healthy" if self.is_initialized else "degraded",
            version=__version__,
            graph_loaded=self.is_initialized,
            node_count=graph.node_count,
            edge_count=graph.edge_count
        )

    def refresh_graph(self) -> RefreshResponse:
        """Rebuild the street graph from the configured source."""
        try:
            graph = self.store.refresh(self.street_source)
        except StreetDataError as e:
            logger.error(f"Street graph refresh failed: {e}")
            return RefreshResponse(success=False, message=str(e),
                                   node_count=self.store.current.node_count,
                                   edge_count=self.store.current.edge_count)

        return RefreshResponse(
            success=True,
            message=f"Street network ready ({graph.edge_count} segments)",
            node_count=graph.node_count,
            edge_count=graph.edge_count
        )

    def get_graph_stats(self) -> GraphStatsResponse:
        stats = self.store.get_stats()
        stats.pop('last_build', None)
        return GraphStatsResponse(**stats)

    def calculate_route(self, request: RouteRequest) -> RouteResponse:
        """
        Calculate the safest-weighted route between two points.

        Args:
            request: Route calculation request

        Returns:
            RouteResponse with route GeoJSON and statistics
        """
        start_coords = (request.start.latitude, request.start.longitude)
        end_coords = (request.destination.latitude, request.destination.longitude)
        logger.info(f"Calculating route from {start_coords} to {end_coords}")

        try:
            result = self.optimizer.find_safe_route(start_coords, end_coords)
        except InvalidInputError as e:
            return RouteResponse(success=False, error="invalid_coordinates", message=str(e))
        except EmptyGraphError:
            return RouteResponse(
                success=False,
                error="empty_graph",
                message="Street data not loaded yet. Please wait..."
            )
        except NoPathFoundError as e:
            return RouteResponse(success=False, error="no_path_found", message=str(e))

        return self._convert_to_response(result)

    def calculate_address_route(self, request: AddressRouteRequest) -> RouteResponse:
        """Geocode both addresses, then calculate the route between them."""
        try:
            result = self.optimizer.find_safe_route_by_address(
                request.start_address, request.destination_address, self.geocoder
            )
        except InvalidInputError as e:
            return RouteResponse(success=False, error="address_not_found", message=str(e))
        except GeocodingError as e:
            return RouteResponse(success=False, error="geocoding_failed", message=str(e))
        except EmptyGraphError:
            return RouteResponse(
                success=False,
                error="empty_graph",
                message="Street data not loaded yet. Please wait..."
            )
        except NoPathFoundError as e:
            return RouteResponse(success=False, error="no_path_found", message=str(e))

        return self._convert_to_response(result)

    def _convert_to_response(self, result: RouteResult) -> RouteResponse:
        return RouteResponse(
            success=True,
            message="Route calculated successfully",
            route_geojson=self._route_to_geojson(result),
            route_stats=self._calculate_route_stats(result)
        )

    def _route_to_geojson(self, result: RouteResult) -> Dict[str, Any]:
        """
        Convert a route to a GeoJSON FeatureCollection.

        Coordinates are emitted as (lon, lat) per RFC 7946.
        """
        summary = result.summary
        geojson_coords = [[lng, lat] for lat, lng in summary.coordinates]

        line_feature = geojson.Feature(
            geometry=geojson.LineString(geojson_coords),
            properties={
                "total_distance_mi": round(summary.total_miles, 2),
                "total_risk": summary.total_risk,
                "safety_rating": summary.safety_rating,
                "node_count": len(summary.path),
                "calculation_time_ms": round(result.calculation_time * 1000, 1)
            }
        )
        start_feature = geojson.Feature(
            geometry=geojson.Point(geojson_coords[0]),
            properties={"type": "start", "name": "Start Point"}
        )
        end_feature = geojson.Feature(
            geometry=geojson.Point(geojson_coords[-1]),
            properties={"type": "end", "name": "End Point"}
        )

        return geojson.FeatureCollection([line_feature, start_feature, end_feature])

    def _calculate_route_stats(self, result: RouteResult) -> RouteStats:
        summary = result.summary
        return RouteStats(
            total_distance_km=round(summary.total_km, 3),
            total_distance_mi=round(summary.total_miles, 2),
            total_risk=summary.total_risk,
            segment_count=summary.segment_count,
            mean_risk=round(summary.mean_risk, 2),
            safety_rating=summary.safety_rating,
            total_weight=round(summary.total_weight, 2),
            streets=list(summary.street_names)
        )


# Global service instance
routing_service = SafeWalkRoutingService()


def get_routing_service() -> SafeWalkRoutingService:
    return routing_service
