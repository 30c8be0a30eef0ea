"""
Configuration management for safety-weighted routing parameters.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple


@dataclass
class RoutingConfig:
    """Configuration parameters for safety-weighted walking routes."""

    # Edge Weighting
    distance_scale_factor: float = 100.0  # weight per km; 10m of length ~ 1 risk point

    # Risk Scoring
    base_risk: int = 8           # risk scale before the zone multiplier
    max_risk: int = 14           # hard cap on a segment's risk score
    hash_lat_factor: float = 1000.0  # K1 in |sin(lat*K1) * cos(lng*K2)|
    hash_lng_factor: float = 1000.0  # K2
    classifier_cache_size: int = 4096  # memoized (lat, lng) -> zone lookups, 0 disables

    # Geometry
    earth_radius_km: float = 6371.0
    km_to_miles: float = 0.621371

    # Safety Tiers (upper bounds, inclusive) shared by routes and single edges
    safety_thresholds: Tuple[float, float, float] = (2, 5, 8)
    route_safety_labels: Tuple[str, str, str, str] = (
        'Very Safe', 'Safe', 'Moderate', 'Caution Advised'
    )
    edge_safety_labels: Tuple[str, str, str, str] = (
        'Safe', 'Moderate', 'Unsafe', 'Very Unsafe'
    )

    # Street Data
    unnamed_street: str = 'Unnamed Street'
    bbox: Tuple[float, float, float, float] = (41.298, -72.943, 41.318, -72.913)  # S, W, N, E
    highway_types: Tuple[str, ...] = (
        'motorway', 'trunk', 'primary', 'secondary', 'tertiary',
        'residential', 'living_street', 'unclassified'
    )
    overpass_url: str = 'https://overpass-api.de/api/interpreter'
    overpass_timeout_s: int = 25

    # Geocoding
    nominatim_url: str = 'https://nominatim.openstreetmap.org'
    http_timeout_s: float = 10.0
    user_agent: str = 'safe-walk-routing/1.0'
    geocoder_min_delay_s: float = 1.0
    geocoder_max_retries: int = 2

    # Visualization
    map_style: str = 'OpenStreetMap'
    map_center: Tuple[float, float] = (41.3083, -72.9279)
    map_zoom: int = 14
    tier_colors: Tuple[str, str, str, str] = ('#22c55e', '#eab308', '#f97316', '#ef4444')
    tier_widths: Tuple[int, int, int, int] = (2, 3, 4, 5)
    route_style: Dict[str, object] = field(default_factory=lambda: {
        'color': '#60a5fa',
        'weight': 6,
        'opacity': 0.95,
        'dash_array': '10, 8'
    })

    def validate(self) -> None:
        """Validate configuration parameters."""
        if self.distance_scale_factor < 0:
            raise ValueError("distance_scale_factor must be non-negative")
        if self.base_risk <= 0:
            raise ValueError("base_risk must be positive")
        if self.max_risk < 0:
            raise ValueError("max_risk must be non-negative")
        if self.earth_radius_km <= 0:
            raise ValueError("earth_radius_km must be positive")
        if len(self.safety_thresholds) != 3:
            raise ValueError("safety_thresholds must have exactly three bounds")
        if list(self.safety_thresholds) != sorted(set(self.safety_thresholds)):
            raise ValueError("safety_thresholds must be strictly increasing")
        south, west, north, east = self.bbox
        if not (-90 <= south < north <= 90 and -180 <= west < east <= 180):
            raise ValueError(f"bbox must be (south, west, north, east), got {self.bbox}")
        if self.geocoder_min_delay_s < 0 or self.geocoder_max_retries < 0:
            raise ValueError("geocoder rate limits must be non-negative")

    @classmethod
    def create_default_config(cls) -> 'RoutingConfig':
        """Create the default configuration (10m of walking ~ 1 risk point)."""
        return cls()

    @classmethod
    def create_safety_first_config(cls) -> 'RoutingConfig':
        """
        Create configuration that tolerates longer detours around risky streets.

        Halving the distance scale makes 20m of extra walking cost the same as
        one risk point.
        """
        return cls(distance_scale_factor=50.0)

    @classmethod
    def create_distance_first_config(cls) -> 'RoutingConfig':
        """Create configuration that strongly prefers short routes over safe ones."""
        return cls(distance_scale_factor=400.0)
