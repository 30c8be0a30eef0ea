"""
FastAPI routes for safety-weighted routing endpoints.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.schemas.routing import (
    AddressRouteRequest,
    GraphStatsResponse,
    HealthResponse,
    RefreshResponse,
    RouteRequest,
    RouteResponse
)
from api.services.routing_service import SafeWalkRoutingService, get_routing_service

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/api/routing", tags=["routing"])


@router.get("/health", response_model=HealthResponse, summary="Health Check")
async def health_check(service: SafeWalkRoutingService = Depends(get_routing_service)):
    """
    Check the health status of the routing service.

    Returns:
        HealthResponse: Service health information
    """
    return service.get_health_status()


@router.post("/calculate", response_model=RouteResponse, summary="Calculate Safest Route")
def calculate_route(request: RouteRequest,
                    service: SafeWalkRoutingService = Depends(get_routing_service)):
    """
    Calculate the minimum combined risk-and-distance route between two locations.

    Business failures (no street data yet, no connecting path) come back with
    ``success: false`` and an ``error`` code rather than an HTTP error.

    Example:
        ```json
        {
            "start": {"latitude": 41.3083, "longitude": -72.9279},
            "destination": {"latitude": 41.3040, "longitude": -72.9350}
        }
        ```
    """
    logger.info(f"Route calculation request from "
                f"({request.start.latitude}, {request.start.longitude}) to "
                f"({request.destination.latitude}, {request.destination.longitude})")
    return service.calculate_route(request)


@router.post("/calculate/address", response_model=RouteResponse,
             summary="Calculate Safest Route Between Addresses")
def calculate_address_route(request: AddressRouteRequest,
                            service: SafeWalkRoutingService = Depends(get_routing_service)):
    """
    Geocode two addresses and calculate the route between them.
    """
    return service.calculate_address_route(request)


@router.post("/refresh", response_model=RefreshResponse, summary="Reload Street Network")
def refresh_graph(service: SafeWalkRoutingService = Depends(get_routing_service)):
    """
    Rebuild the street graph from the street data source.

    The previous graph keeps serving requests until the new one is ready.
    """
    response = service.refresh_graph()
    if not response.success:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=response.message
        )
    return response


@router.get("/graph/stats", response_model=GraphStatsResponse, summary="Street Graph Statistics")
async def graph_stats(service: SafeWalkRoutingService = Depends(get_routing_service)):
    """
    Node/edge counts and crime score spread of the loaded street graph.
    """
    return service.get_graph_stats()


@router.get("/", summary="API Information")
async def get_api_info():
    """
    Get information about the Safe Walk Routing API.

    Returns:
        dict: API information and available endpoints
    """
    return {
        "api": "Safe Walk Routing API",
        "description": "Calculate walking routes weighted by neighborhood safety",
        "endpoints": {
            "POST /api/routing/calculate": "Calculate the safest-weighted route between coordinates",
            "POST /api/routing/calculate/address": "Calculate a route between two addresses",
            "POST /api/routing/refresh": "Reload the street network",
            "GET /api/routing/graph/stats": "Street graph statistics",
            "GET /api/routing/health": "Check service health status",
            "GET /api/routing/": "This information endpoint"
        },
        "supported_areas": [
            "New Haven, Connecticut, USA"
        ]
    }
