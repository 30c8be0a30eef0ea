"""
Tests for the folium map output.
"""

import folium

from safe_walk_routing.algorithms.routing.dijkstra import shortest_path
from safe_walk_routing.algorithms.routing.route_summary import classify_edge, summarize
from safe_walk_routing.visualization.route_visualizer import RouteVisualizer


def test_network_map_without_route(grid_graph, config):
    visualizer = RouteVisualizer(config)
    m = visualizer.create_network_map(grid_graph)
    html = m.get_root().render()

    assert isinstance(m, folium.Map)
    assert "Crime Score" in html
    assert "Row Street 0" in html
    for edge in grid_graph.edges:
        assert classify_edge(edge.risk, config).color in html


def test_network_map_with_route(grid_graph, config, tmp_path):
    route = summarize(grid_graph, shortest_path(grid_graph, 0, 8), config)
    visualizer = RouteVisualizer(config)

    m = visualizer.create_network_map(grid_graph, route=route, center_coords=(41.307, -72.929))
    html = m.get_root().render()

    assert config.route_style['color'] in html
    assert "Start Point" in html
    assert "End Point" in html
    assert route.safety_rating in html

    output = tmp_path / "maps" / "route.html"
    visualizer.save_interactive_html(m, str(output))
    assert output.exists()


def test_legend_ranges(config):
    legend = RouteVisualizer(config)._create_legend_html(None)

    assert "(0-2)" in legend
    assert "(3-5)" in legend
    assert "(6-8)" in legend
    assert "(9+)" in legend
