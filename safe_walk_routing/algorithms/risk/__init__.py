"""
Neighborhood classification and segment risk scoring.
"""

from .neighborhood_classifier import NeighborhoodClassifier
from .risk_scorer import RiskScorer, coordinate_hash

__all__ = [
    'NeighborhoodClassifier',
    'RiskScorer',
    'coordinate_hash'
]
