"""
External service clients.
"""

from .geocoder import GeocodeResult, NominatimGeocoder

__all__ = [
    'GeocodeResult',
    'NominatimGeocoder'
]
