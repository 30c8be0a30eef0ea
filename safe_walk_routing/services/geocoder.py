"""
Forward and reverse geocoding against a Nominatim server via geopy.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import urlsplit

from geopy.exc import GeopyError
from geopy.extra.rate_limiter import RateLimiter
from geopy.geocoders import Nominatim

from ..config.routing_config import RoutingConfig
from ..data.distance_utils import is_valid_coordinate
from ..exceptions import GeocodingError, InvalidInputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeocodeResult:
    lat: float
    lng: float
    display_name: str


def build_geolocator(config: RoutingConfig) -> Nominatim:
    """Nominatim client pointed at ``config.nominatim_url``."""
    url = urlsplit(config.nominatim_url)
    return Nominatim(
        user_agent=config.user_agent,
        domain=(url.netloc + url.path).rstrip('/'),
        scheme=url.scheme or 'https',
        timeout=config.http_timeout_s
    )


class NominatimGeocoder:
    """
    Resolve addresses to coordinates and coordinates to display names.

    "Not found" is returned as None; service failures and unusable
    results raise GeocodingError.
    """

    def __init__(self, config: Optional[RoutingConfig] = None, geolocator=None):
        self.config = config or RoutingConfig()
        self.config.validate()
        self.geolocator = geolocator or build_geolocator(self.config)

        # Nominatim's usage policy allows one request per second
        limits = dict(
            min_delay_seconds=self.config.geocoder_min_delay_s,
            max_retries=self.config.geocoder_max_retries,
            error_wait_seconds=self.config.geocoder_min_delay_s,
            swallow_exceptions=False
        )
        self._geocode = RateLimiter(self.geolocator.geocode, **limits)
        self._reverse = RateLimiter(self.geolocator.reverse, **limits)

    def geocode(self, text: str) -> Optional[GeocodeResult]:
        """Best match for a free-text address, or None."""
        if not text or not text.strip():
            return None

        query = text.strip()
        location = self._call(self._geocode, query, exactly_one=True)
        if location is None:
            logger.info(f"No geocoding result for {query!r}")
            return None
        return self._to_result(location, query)

    def reverse(self, lat: float, lng: float) -> Optional[GeocodeResult]:
        """Display name for a coordinate, or None."""
        if not is_valid_coordinate(lat, lng):
            raise InvalidInputError(f"Invalid coordinate: ({lat}, {lng})")

        location = self._call(self._reverse, (lat, lng), exactly_one=True)
        if location is None or not location.address:
            return None
        return GeocodeResult(lat=lat, lng=lng, display_name=location.address)

    def _call(self, func, query, **kwargs) -> Any:
        try:
            return func(query, **kwargs)
        except GeopyError as e:
            logger.error(f"Geocoding request for {query!r} failed: {e}")
            raise GeocodingError(f"Geocoding failed: {e}") from e
        except (TypeError, ValueError) as e:
            raise GeocodingError(f"Invalid geocoding response: {e}") from e

    @staticmethod
    def _to_result(location, fallback_name: str) -> GeocodeResult:
        raw = getattr(location, 'raw', None)
        if isinstance(raw, dict) and (raw.get('lat') is None or raw.get('lon') is None):
            raise GeocodingError(f"Geocoding result for {fallback_name!r} has no coordinates")

        try:
            lat = float(location.latitude)
            lng = float(location.longitude)
        except (AttributeError, TypeError, ValueError) as e:
            raise GeocodingError(f"Geocoding result for {fallback_name!r} has no coordinates") from e

        if not is_valid_coordinate(lat, lng):
            raise GeocodingError(f"Geocoding result out of range: ({lat}, {lng})")
        return GeocodeResult(lat=lat, lng=lng, display_name=location.address or fallback_name)
