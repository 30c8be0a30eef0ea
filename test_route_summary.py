"""
Tests for route aggregation and safety classification.
"""

import pytest

from safe_walk_routing.algorithms.routing.route_summary import (
    classify_edge,
    classify_route,
    safety_tier,
    summarize
)
from safe_walk_routing.config.routing_config import RoutingConfig
from safe_walk_routing.exceptions import InvalidInputError
from safe_walk_routing.mapping.network.street_graph import Edge, Node, StreetGraph


@pytest.fixture
def three_segment_graph(graph_factory):
    return graph_factory(4, [
        (0, 1, 11.0, 1, 0.1),
        (1, 2, 14.0, 4, 0.1),
        (2, 3, 20.0, 10, 0.1),
    ])


def test_summary_totals(three_segment_graph):
    summary = summarize(three_segment_graph, [0, 1, 2, 3])

    assert summary.path == (0, 1, 2, 3)
    assert summary.segment_count == 3
    assert summary.total_risk == 15
    assert summary.mean_risk == 5.0
    assert summary.safety_rating == "Safe"
    assert summary.total_km == pytest.approx(0.3)
    assert summary.total_miles == pytest.approx(0.3 * 0.621371)
    assert summary.total_weight == pytest.approx(45.0)
    assert summary.segment_risks == (1, 4, 10)
    assert len(summary.coordinates) == 4


def test_summary_dict(three_segment_graph):
    result = summarize(three_segment_graph, [0, 1, 2, 3]).get_summary()

    assert result['node_count'] == 4
    assert result['max_risk'] == 10
    assert result['total_distance_mi'] == round(0.3 * 0.621371, 2)
    assert result['safety_rating'] == "Safe"


def test_prefixes_never_shrink(three_segment_graph):
    path = [0, 1, 2, 3]
    totals = [summarize(three_segment_graph, path[:n]).total_km for n in range(2, 5)]
    risks = [summarize(three_segment_graph, path[:n]).total_risk for n in range(2, 5)]

    assert totals == sorted(totals)
    assert risks == sorted(risks)


def test_summary_rejects_bad_paths(three_segment_graph):
    with pytest.raises(InvalidInputError):
        summarize(three_segment_graph, [0])
    with pytest.raises(InvalidInputError):
        summarize(three_segment_graph, [])
    with pytest.raises(InvalidInputError):
        summarize(three_segment_graph, [0, 2])


def test_street_names_collapse():
    nodes = [Node(i, 41.30 + i * 0.001, -72.93, i) for i in range(4)]
    edges = [
        Edge(0, 1, 0, 0.1, 10.0, "w1", "Chapel Street", "default"),
        Edge(1, 2, 0, 0.1, 10.0, "w1", "Chapel Street", "default"),
        Edge(2, 3, 0, 0.1, 10.0, "w2", "College Street", "default"),
    ]
    summary = summarize(StreetGraph(nodes, edges), [0, 1, 2, 3])

    assert summary.street_names == ("Chapel Street", "College Street")


@pytest.mark.parametrize("mean_risk,label", [
    (0, "Very Safe"),
    (2, "Very Safe"),
    (2.01, "Safe"),
    (5, "Safe"),
    (5.5, "Moderate"),
    (8, "Moderate"),
    (8.01, "Caution Advised"),
    (14, "Caution Advised"),
])
def test_route_labels(mean_risk, label):
    assert classify_route(mean_risk) == label


@pytest.mark.parametrize("risk,label,color,width", [
    (0, "Safe", "#22c55e", 2),
    (2, "Safe", "#22c55e", 2),
    (3, "Moderate", "#eab308", 3),
    (5, "Moderate", "#eab308", 3),
    (6, "Unsafe", "#f97316", 4),
    (8, "Unsafe", "#f97316", 4),
    (9, "Very Unsafe", "#ef4444", 5),
    (14, "Very Unsafe", "#ef4444", 5),
])
def test_edge_styles(risk, label, color, width):
    style = classify_edge(risk)

    assert style.label == label
    assert style.color == color
    assert style.width == width


def test_custom_thresholds():
    config = RoutingConfig(safety_thresholds=(1, 2, 3))

    assert safety_tier(1.5, config.safety_thresholds) == 1
    assert classify_route(3.5, config) == "Caution Advised"
    assert classify_edge(2, config).label == "Moderate"
