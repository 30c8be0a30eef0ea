"""
Street data sources producing raw ways for the graph builder.
"""

from .overpass_source import OverpassStreetSource, build_overpass_query
from .osmnx_source import OSMnxStreetSource, ways_from_networkx

__all__ = [
    'OverpassStreetSource',
    'build_overpass_query',
    'OSMnxStreetSource',
    'ways_from_networkx'
]
