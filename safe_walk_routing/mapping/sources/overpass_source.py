"""
Street data from the OpenStreetMap Overpass API.
"""

import logging
from typing import List, Optional, Tuple

import requests

from ...config.routing_config import RoutingConfig
from ...data.raw_ways import RawWay, ways_from_overpass
from ...exceptions import StreetDataError

logger = logging.getLogger(__name__)


def build_overpass_query(bbox: Tuple[float, float, float, float],
                         highway_types: Tuple[str, ...],
                         timeout_s: int = 25) -> str:
    """
    Overpass QL for highway ways inside a (south, west, north, east) box,
    followed by their member nodes.
    """
    south, west, north, east = bbox
    pattern = '|'.join(highway_types)
    return (
        f'[out:json][timeout:{timeout_s}];\n'
        f'(\n'
        f'  way["highway"~"^({pattern})$"]({south},{west},{north},{east});\n'
        f');\n'
        f'out body;\n'
        f'>;\n'
        f'out skel qt;\n'
    )


class OverpassStreetSource:
    """Fetch raw ways for a bounding box from an Overpass endpoint."""

    def __init__(self, bbox: Optional[Tuple[float, float, float, float]] = None,
                 config: Optional[RoutingConfig] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize the source.

        Args:
            bbox: (south, west, north, east), defaults to the configured box
            config: Routing configuration (endpoint, timeout, highway filter)
            session: Optional requests session for connection reuse
        """
        self.config = config or RoutingConfig()
        self.bbox = bbox or self.config.bbox
        self.session = session or requests.Session()

    @property
    def query(self) -> str:
        return build_overpass_query(self.bbox, self.config.highway_types,
                                    self.config.overpass_timeout_s)

    def fetch_ways(self) -> List[RawWay]:
        """
        Download and parse the street network.

        Raises:
            StreetDataError: On HTTP errors, timeouts or malformed responses
        """
        logger.info(f"Requesting street data for bbox {self.bbox} from {self.config.overpass_url}")

        try:
            response = self.session.post(
                self.config.overpass_url,
                data=self.query,
                headers={'User-Agent': self.config.user_agent},
                # leave the server its own timeout plus a margin
                timeout=self.config.overpass_timeout_s + 5
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.error(f"Overpass request failed: {e}")
            raise StreetDataError(f"Failed to load street data: {e}") from e
        except ValueError as e:
            logger.error(f"Overpass returned invalid JSON: {e}")
            raise StreetDataError(f"Invalid street data response: {e}") from e

        try:
            return ways_from_overpass(data)
        except ValueError as e:
            raise StreetDataError(str(e)) from e
