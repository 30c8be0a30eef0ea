"""
Deterministic per-coordinate risk scores.

The score is a closed-form proxy, not live crime data:

    hash  = |sin(lat * K1) * cos(lng * K2)|
    frac  = hash - floor(hash)
    score = min(max_risk, floor(frac * base_risk * zone_multiplier))

Scores are never persisted, so they must be recomputable from the coordinate
alone. Results are bit-exact across runs on one platform; across platforms they
follow the host libm's ``sin``/``cos``, which can differ in the last ulp and
move a value sitting exactly on an integer boundary by one point.
"""

import logging
import math
from typing import Optional, Tuple

from ...config.routing_config import RoutingConfig
from .neighborhood_classifier import NeighborhoodClassifier

logger = logging.getLogger(__name__)


def coordinate_hash(lat: float, lng: float,
                    lat_factor: float = 1000.0, lng_factor: float = 1000.0) -> float:
    """Stable pseudo-random fraction in [0, 1) derived from a coordinate pair."""
    value = abs(math.sin(lat * lat_factor) * math.cos(lng * lng_factor))
    return value - math.floor(value)


class RiskScorer:
    """
    Score coordinates from their neighborhood multiplier and a coordinate hash.
    """

    def __init__(self, classifier: Optional[NeighborhoodClassifier] = None,
                 config: Optional[RoutingConfig] = None):
        """
        Initialize the scorer.

        Args:
            classifier: Neighborhood lookup, defaults to the bundled zone table
            config: Routing configuration with the scoring constants
        """
        self.config = config or RoutingConfig()
        self.classifier = classifier or NeighborhoodClassifier(config=self.config)

    def score(self, lat: float, lng: float) -> int:
        """Risk score in [0, max_risk] for a coordinate."""
        return self.score_with_zone(lat, lng)[0]

    def score_with_zone(self, lat: float, lng: float) -> Tuple[int, str]:
        """
        Risk score and zone name from a single classification.

        Returns:
            (risk score, zone name)
        """
        zone = self.classifier.classify(lat, lng)
        return self.score_in_zone(lat, lng, zone), zone

    def score_in_zone(self, lat: float, lng: float, zone: str) -> int:
        multiplier = self.classifier.multiplier_for(zone)
        fraction = coordinate_hash(lat, lng,
                                   self.config.hash_lat_factor,
                                   self.config.hash_lng_factor)
        raw = math.floor(fraction * self.config.base_risk * multiplier)
        return max(0, min(self.config.max_risk, int(raw)))
