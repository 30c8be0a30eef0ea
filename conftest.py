"""
Shared fixtures: a small zone table and a 3x3 street grid inside it.
"""

import pytest

from safe_walk_routing.algorithms.risk.neighborhood_classifier import NeighborhoodClassifier
from safe_walk_routing.algorithms.risk.risk_scorer import RiskScorer
from safe_walk_routing.config.routing_config import RoutingConfig
from safe_walk_routing.config.zone_table import ZoneTable
from safe_walk_routing.data.raw_ways import RawWay
from safe_walk_routing.mapping.network.graph_builder import GraphBuilder
from safe_walk_routing.mapping.network.street_graph import Edge, Node, StreetGraph

YALE_BOX = [(-72.9320, 41.3050), (-72.9320, 41.3110), (-72.9240, 41.3110),
            (-72.9240, 41.3050), (-72.9320, 41.3050)]
HILL_BOX = [(-72.9400, 41.2980), (-72.9400, 41.3050), (-72.9280, 41.3050),
            (-72.9280, 41.2980), (-72.9400, 41.2980)]

GRID_LATS = (41.306, 41.307, 41.308)
GRID_LNGS = (-72.930, -72.929, -72.928)


@pytest.fixture
def config():
    return RoutingConfig()


@pytest.fixture
def zone_table():
    return ZoneTable.from_zones([
        ("Yale Campus", YALE_BOX, 0.25),
        ("The Hill", HILL_BOX, 1.4),
    ])


@pytest.fixture
def classifier(zone_table, config):
    return NeighborhoodClassifier(zone_table, config)


@pytest.fixture
def scorer(classifier, config):
    return RiskScorer(classifier, config)


@pytest.fixture
def builder(scorer, config):
    return GraphBuilder(scorer, config)


@pytest.fixture
def grid_ways():
    """Three east-west and three north-south streets; node n{row}{col}."""
    ways = []
    for row, lat in enumerate(GRID_LATS):
        ways.append(RawWay.from_points(
            f"row{row}",
            [(f"n{row}{col}", lat, lng) for col, lng in enumerate(GRID_LNGS)],
            name=f"Row Street {row}"
        ))
    for col, lng in enumerate(GRID_LNGS):
        ways.append(RawWay.from_points(
            f"col{col}",
            [(f"n{row}{col}", lat, lng) for row, lat in enumerate(GRID_LATS)],
            name=None
        ))
    return ways


@pytest.fixture
def grid_graph(builder, grid_ways):
    return builder.build(grid_ways)


def make_graph(node_count, edge_defs):
    """
    Hand-built graph for solver tests.

    edge_defs: (from, to, weight) or (from, to, weight, risk, length_km)
    """
    nodes = [Node(i, 41.30 + i * 0.001, -72.93, f"s{i}") for i in range(node_count)]
    edges = []
    for entry in edge_defs:
        a, b, weight = entry[:3]
        risk = entry[3] if len(entry) > 3 else 0
        length_km = entry[4] if len(entry) > 4 else 0.0
        edges.append(Edge(a, b, risk, length_km, weight, f"w{a}-{b}", f"Street {a}-{b}", "default"))
    return StreetGraph(nodes, edges)


@pytest.fixture
def graph_factory():
    return make_graph
