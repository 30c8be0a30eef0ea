"""
Tests for building the street graph from raw ways.
"""

import math

import pytest

from safe_walk_routing.config.routing_config import RoutingConfig
from safe_walk_routing.data.distance_utils import haversine_km, midpoint
from safe_walk_routing.data.raw_ways import RawCoordinate, RawWay
from safe_walk_routing.mapping.network.graph_builder import GraphBuilder
from safe_walk_routing.mapping.network.street_graph import Edge, Node, StreetGraph


def test_grid_counts_and_first_seen_ids(grid_graph):
    assert grid_graph.node_count == 9
    assert grid_graph.edge_count == 12
    # row ways come first, so ids follow n00, n01, ... n22
    assert [node.source_id for node in grid_graph.nodes] == [
        f"n{r}{c}" for r in range(3) for c in range(3)
    ]
    assert [node.id for node in grid_graph.nodes] == list(range(9))


def test_shared_source_ids_deduplicate(builder):
    ways = [
        RawWay.from_points("a", [("x", 41.306, -72.930), ("y", 41.307, -72.930)]),
        RawWay.from_points("b", [("y", 41.307, -72.930), ("z", 41.308, -72.930)]),
    ]
    graph = builder.build(ways)

    assert graph.node_count == 3
    assert graph.edge_count == 2
    assert graph.degree(1) == 2


def test_edges_reference_existing_distinct_nodes(grid_graph):
    for edge in grid_graph.edges:
        assert grid_graph.has_node(edge.from_node)
        assert grid_graph.has_node(edge.to_node)
        assert edge.from_node != edge.to_node


def test_edge_attributes(grid_graph, scorer, config):
    for edge in grid_graph.edges:
        start, end = grid_graph.node(edge.from_node), grid_graph.node(edge.to_node)
        mid_lat, mid_lng = midpoint(start.lat, start.lng, end.lat, end.lng)

        assert edge.length_km == pytest.approx(haversine_km(start.lat, start.lng, end.lat, end.lng))
        assert edge.risk == scorer.score(mid_lat, mid_lng)
        assert edge.zone == "Yale Campus"
        assert edge.weight == pytest.approx(edge.risk + edge.length_km * config.distance_scale_factor)
        assert 0 <= edge.risk <= 14


def test_street_names(grid_graph):
    names = {edge.street_name for edge in grid_graph.edges}
    assert names == {"Row Street 0", "Row Street 1", "Row Street 2", "Unnamed Street"}


def test_haversine_length():
    builder = GraphBuilder()
    graph = builder.build([RawWay.from_points("w", [(1, 0.0, 0.0), (2, 0.001, 0.0)])])

    assert graph.edges[0].length_km == pytest.approx(6371 * math.radians(0.001))


def test_unresolved_coordinates_are_skipped(builder):
    way = RawWay("w", (
        RawCoordinate("a", 41.306, -72.930),
        RawCoordinate("missing", None, None),
        RawCoordinate("b", 41.307, -72.930),
        RawCoordinate("c", 41.308, -72.930),
    ))
    graph, stats = builder.build_with_stats([way])

    assert graph.node_count == 3
    assert graph.edge_count == 1
    assert stats['skipped_invalid_segments'] == 2


def test_out_of_range_and_nan_coordinates_are_invalid():
    assert not RawCoordinate("a", 91.0, 0.0).is_valid
    assert not RawCoordinate("a", 0.0, -181.0).is_valid
    assert not RawCoordinate("a", float('nan'), 0.0).is_valid
    assert not RawCoordinate("a", None, 0.0).is_valid
    assert RawCoordinate("a", -90.0, 180.0).is_valid


def test_single_coordinate_way_adds_node_only(builder):
    graph, stats = builder.build_with_stats([RawWay.from_points("w", [("a", 41.306, -72.930)])])

    assert graph.node_count == 1
    assert graph.edge_count == 0
    assert stats['short_ways'] == 1


def test_repeated_consecutive_source_id_is_degenerate(builder):
    graph, stats = builder.build_with_stats([RawWay.from_points("w", [
        ("a", 41.306, -72.930), ("a", 41.306, -72.930), ("b", 41.307, -72.930)
    ])])

    assert graph.edge_count == 1
    assert stats['skipped_degenerate_segments'] == 1


def test_empty_input(builder):
    graph = builder.build([])

    assert graph.is_empty()
    assert graph.node_count == 0
    assert graph.edge_count == 0


def test_build_is_idempotent(builder, grid_ways):
    first = builder.build(grid_ways)
    second = builder.build(grid_ways)

    assert first.nodes == second.nodes
    assert first.edges == second.edges


def test_distance_scale_factor(zone_table, grid_ways):
    from safe_walk_routing.algorithms.risk.neighborhood_classifier import NeighborhoodClassifier
    from safe_walk_routing.algorithms.risk.risk_scorer import RiskScorer

    config = RoutingConfig(distance_scale_factor=0.0)
    builder = GraphBuilder(RiskScorer(NeighborhoodClassifier(zone_table, config), config), config)
    graph = builder.build(grid_ways)

    assert all(edge.weight == edge.risk for edge in graph.edges)


def test_invalid_config_rejected():
    with pytest.raises(ValueError):
        GraphBuilder(config=RoutingConfig(distance_scale_factor=-1.0))


def test_street_graph_validation():
    nodes = [Node(0, 41.0, -72.0, "a"), Node(1, 41.001, -72.0, "b")]
    with pytest.raises(ValueError):
        StreetGraph(nodes, [Edge(0, 2, 1, 0.1, 11.0, "w", "S", "default")])
    with pytest.raises(ValueError):
        StreetGraph(nodes, [Edge(0, 0, 1, 0.1, 11.0, "w", "S", "default")])
    with pytest.raises(ValueError):
        StreetGraph([Node(1, 41.0, -72.0, "a")], [])


def test_statistics_and_networkx_export(grid_graph):
    stats = grid_graph.statistics()
    assert stats['nodes'] == 9
    assert stats['edges'] == 12
    assert stats['zones'] == ["Yale Campus"]
    assert 0 <= stats['risk_min'] <= stats['risk_max'] <= 14

    nx_graph = grid_graph.to_networkx()
    assert nx_graph.number_of_nodes() == 9
    assert nx_graph.number_of_edges() == 12
    assert nx_graph.nodes[0]['y'] == grid_graph.node(0).lat
