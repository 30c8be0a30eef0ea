"""
Pydantic schemas for the safety-weighted routing API.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class LocationRequest(BaseModel):
    """Request model for a single location."""
    latitude: float = Field(..., ge=-90, le=90, description="Latitude coordinate")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude coordinate")


class RouteRequest(BaseModel):
    """Request model for route calculation."""
    start: LocationRequest = Field(..., description="Starting location")
    destination: LocationRequest = Field(..., description="Destination location")


class AddressRouteRequest(BaseModel):
    """Request model for route calculation between two addresses."""
    start_address: str = Field(..., min_length=1, description="Starting address")
    destination_address: str = Field(..., min_length=1, description="Destination address")

    @field_validator('start_address', 'destination_address')
    @classmethod
    def strip_address(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Address must not be blank')
        return v


class RouteStats(BaseModel):
    """Statistics about a calculated route."""
    total_distance_km: float = Field(..., ge=0, description="Total route distance in kilometers")
    total_distance_mi: float = Field(..., ge=0, description="Total route distance in miles")
    total_risk: int = Field(..., ge=0, description="Sum of segment crime scores")
    segment_count: int = Field(..., ge=1, description="Number of street segments")
    mean_risk: float = Field(..., ge=0, description="Average crime score per segment")
    safety_rating: str = Field(..., description="Very Safe, Safe, Moderate or Caution Advised")
    total_weight: float = Field(..., ge=0, description="Combined risk and distance cost")
    streets: List[str] = Field(default_factory=list, description="Streets along the route")


class RouteResponse(BaseModel):
    """Response model for route calculation."""
    success: bool = Field(..., description="Whether the route calculation was successful")
    message: str = Field(..., description="Status message")
    error: Optional[str] = Field(default=None, description="Error code when success is false")
    route_geojson: Optional[Dict[str, Any]] = Field(default=None, description="Route as GeoJSON FeatureCollection")
    route_stats: Optional[RouteStats] = Field(default=None, description="Route statistics")


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="API version")
    graph_loaded: bool = Field(..., description="Whether a street graph is loaded")
    node_count: int = Field(..., description="Number of graph nodes")
    edge_count: int = Field(..., description="Number of graph edges")


class GraphStatsResponse(BaseModel):
    """Street graph statistics."""
    nodes: int
    edges: int
    risk_min: Optional[int] = None
    risk_max: Optional[int] = None
    risk_mean: Optional[float] = None
    total_length_km: Optional[float] = None
    zones: List[str] = Field(default_factory=list)
    last_refresh: Optional[float] = Field(default=None, description="Unix time of the last graph swap")


class RefreshResponse(BaseModel):
    """Result of a street graph rebuild."""
    success: bool
    message: str
    node_count: int = 0
    edge_count: int = 0


class ErrorResponse(BaseModel):
    """Error response model."""
    success: bool = Field(False, description="Always false for error responses")
    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Detailed error message")
    details: Optional[Any] = Field(None, description="Additional error details")
