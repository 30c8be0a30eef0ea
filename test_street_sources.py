"""
Tests for street data parsing and the Overpass / OSMnx sources.
"""

import json

import networkx as nx
import pytest
import requests

from safe_walk_routing.config.routing_config import RoutingConfig
from safe_walk_routing.data.raw_ways import load_ways, ways_from_overpass
from safe_walk_routing.exceptions import StreetDataError
from safe_walk_routing.mapping.network.graph_builder import GraphBuilder
from safe_walk_routing.mapping.sources.osmnx_source import ways_from_networkx
from safe_walk_routing.mapping.sources.overpass_source import (
    OverpassStreetSource,
    build_overpass_query
)

OVERPASS_RESPONSE = {
    "elements": [
        {"type": "way", "id": 100, "nodes": [1, 2, 3], "tags": {"highway": "footway", "name": "Chapel Street"}},
        {"type": "way", "id": 101, "nodes": [3, 4], "tags": {"highway": "path"}},
        {"type": "way", "id": 102, "nodes": [4], "tags": {"highway": "path"}},
        {"type": "way", "id": 103, "nodes": [3, 99], "tags": {"highway": "steps"}},
        {"type": "node", "id": 1, "lat": 41.3060, "lon": -72.9300},
        {"type": "node", "id": 2, "lat": 41.3065, "lon": -72.9300},
        {"type": "node", "id": 3, "lat": 41.3070, "lon": -72.9300},
        {"type": "node", "id": 4, "lat": 41.3070, "lon": -72.9290},
    ]
}


class FakeResponse:
    def __init__(self, payload=None, status_code=200, invalid_json=False):
        self.payload = payload
        self.status_code = status_code
        self.invalid_json = invalid_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if self.invalid_json:
            raise ValueError("Expecting value")
        return self.payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def post(self, url, **kwargs):
        self.requests.append((url, kwargs))
        if self.error:
            raise self.error
        return self.response


def test_overpass_parsing():
    ways = ways_from_overpass(OVERPASS_RESPONSE)

    assert [way.way_id for way in ways] == [100, 101, 103]
    assert ways[0].name == "Chapel Street"
    assert ways[1].name is None
    assert [c.source_id for c in ways[0].coordinates] == [1, 2, 3]
    assert ways[0].coordinates[0].lat == 41.3060
    assert ways[0].coordinates[0].lng == -72.9300
    # node 99 is missing from the response
    assert not ways[2].coordinates[1].is_valid


def test_overpass_response_builds_graph():
    graph, stats = GraphBuilder().build_with_stats(ways_from_overpass(OVERPASS_RESPONSE))

    assert graph.node_count == 4
    assert graph.edge_count == 3
    assert stats['skipped_invalid_segments'] == 1
    assert {edge.street_name for edge in graph.edges} == {"Chapel Street", "Unnamed Street"}


def test_overpass_parsing_rejects_missing_elements():
    with pytest.raises(ValueError):
        ways_from_overpass({"remark": "runtime error"})
    assert ways_from_overpass({"elements": []}) == []


def test_load_ways(tmp_path):
    path = tmp_path / "streets.json"
    path.write_text(json.dumps(OVERPASS_RESPONSE))

    assert len(load_ways(str(path))) == 3

    with pytest.raises(FileNotFoundError):
        load_ways(str(tmp_path / "missing.json"))

    bad = tmp_path / "bad.json"
    bad.write_text("not json")
    with pytest.raises(ValueError):
        load_ways(str(bad))


def test_query_contents():
    query = build_overpass_query((41.298, -72.943, 41.318, -72.913), ("footway", "path"), 25)

    assert query.startswith("[out:json][timeout:25];")
    assert 'way["highway"~"^(footway|path)$"](41.298,-72.943,41.318,-72.913);' in query
    assert "out skel qt;" in query


def test_fetch_ways_posts_query():
    session = FakeSession(FakeResponse(OVERPASS_RESPONSE))
    source = OverpassStreetSource(config=RoutingConfig(), session=session)

    ways = source.fetch_ways()

    assert len(ways) == 3
    url, kwargs = session.requests[0]
    assert url == RoutingConfig().overpass_url
    assert kwargs['data'] == source.query
    assert kwargs['headers']['User-Agent'] == "safe-walk-routing/1.0"
    assert kwargs['timeout'] == 30


@pytest.mark.parametrize("session", [
    FakeSession(error=requests.ConnectionError("connection refused")),
    FakeSession(error=requests.Timeout("timed out")),
    FakeSession(FakeResponse(status_code=504)),
    FakeSession(FakeResponse(invalid_json=True)),
    FakeSession(FakeResponse({"remark": "no elements"})),
])
def test_fetch_ways_errors(session):
    source = OverpassStreetSource(session=session)
    with pytest.raises(StreetDataError):
        source.fetch_ways()


def test_ways_from_networkx():
    graph = nx.MultiDiGraph()
    graph.add_node(11, y=41.3060, x=-72.9300)
    graph.add_node(12, y=41.3070, x=-72.9300)
    graph.add_node(13, y=41.3070, x=-72.9290)
    graph.add_edge(11, 12, key=0, osmid=[500, 501], name=["High Street", "Elm Street"])
    graph.add_edge(12, 11, key=0, osmid=[500, 501], name=["High Street", "Elm Street"])
    graph.add_edge(12, 13, key=0, osmid=502)

    ways = ways_from_networkx(graph)

    assert len(ways) == 2
    by_id = {way.way_id: way for way in ways}
    assert by_id[500].name == "High Street"
    assert by_id[502].name is None
    assert {c.source_id for c in by_id[500].coordinates} == {11, 12}

    built = GraphBuilder().build(ways)
    assert built.node_count == 3
    assert built.edge_count == 2


def test_overpass_parsing_skips_elements_without_id():
    data = {"elements": [
        {"type": "node", "id": 1, "lat": 41.3060, "lon": -72.9300},
        {"type": "node", "id": 2, "lat": 41.3070, "lon": -72.9300},
        {"type": "node", "lat": 41.3080, "lon": -72.9300},
        {"type": "way", "nodes": [1, 2]},
        {"type": "way", "id": 200, "nodes": [1, 2], "tags": "footway"},
        {"type": "way", "id": 201, "nodes": [1, {"ref": 2}]},
        "garbage",
    ]}

    ways = ways_from_overpass(data)

    assert [way.way_id for way in ways] == [200]
    assert ways[0].name is None
    assert all(c.is_valid for c in ways[0].coordinates)


def test_fetch_ways_with_malformed_elements_still_loads():
    payload = {"elements": [{"type": "way", "nodes": [1, 2]}] + OVERPASS_RESPONSE["elements"]}
    source = OverpassStreetSource(session=FakeSession(FakeResponse(payload)))

    assert [way.way_id for way in source.fetch_ways()] == [100, 101, 103]


def test_non_object_response_is_street_data_error():
    source = OverpassStreetSource(session=FakeSession(FakeResponse(["not", "an", "object"])))
    with pytest.raises(StreetDataError):
        source.fetch_ways()
