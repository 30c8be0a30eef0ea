"""
Route visualization tools for creating interactive HTML maps with segment
risk coloring.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple

import folium

from ..algorithms.routing.route_summary import RouteSummary, classify_edge
from ..config.routing_config import RoutingConfig
from ..mapping.network.street_graph import Edge, StreetGraph

logger = logging.getLogger(__name__)


class RouteVisualizer:
    """
    Create interactive HTML maps of the street graph and a computed route.
    """

    def __init__(self, config: Optional[RoutingConfig] = None):
        """
        Initialize route visualizer.

        Args:
            config: Routing configuration for styling options
        """
        self.config = config or RoutingConfig()

    def create_network_map(self, graph: StreetGraph,
                           route: Optional[RouteSummary] = None,
                           center_coords: Optional[Tuple[float, float]] = None) -> folium.Map:
        """
        Draw every street segment colored by risk tier, plus an optional route.

        Args:
            graph: Street graph to draw
            route: Route summary to overlay
            center_coords: Map center (lat, lon), defaults to the configured center

        Returns:
            Folium map object
        """
        m = folium.Map(
            location=center_coords or self.config.map_center,
            zoom_start=self.config.map_zoom,
            tiles=self.config.map_style
        )

        streets = folium.FeatureGroup(name='Streets')
        for edge in graph.edges:
            self._add_edge(streets, graph, edge)
        streets.add_to(m)
        logger.debug(f"Drew {graph.edge_count} street segments")

        if route is not None:
            self._add_route_layer(m, route)
            self._add_start_end_markers(m, route)
            self._fit_map_to_route(m, route)

        self._add_legend(m, route)
        folium.LayerControl().add_to(m)
        return m

    def _add_edge(self, layer: folium.FeatureGroup, graph: StreetGraph, edge: Edge) -> None:
        start, end = graph.node(edge.from_node), graph.node(edge.to_node)
        style = classify_edge(edge.risk, self.config)

        folium.PolyLine(
            locations=[(start.lat, start.lng), (end.lat, end.lng)],
            color=style.color,
            weight=style.width,
            opacity=0.7,
            popup=folium.Popup(
                f"<strong>{edge.street_name}</strong><br>"
                f"Neighborhood: {edge.zone}<br>"
                f"Crime Score: {edge.risk}<br>"
                f"Safety: {style.label}",
                max_width=250
            )
        ).add_to(layer)

    def _add_route_layer(self, m: folium.Map, route: RouteSummary) -> None:
        style = self.config.route_style
        folium.PolyLine(
            locations=list(route.coordinates),
            color=style['color'],
            weight=style['weight'],
            opacity=style['opacity'],
            dash_array=style['dash_array'],
            popup=self._create_route_popup(route)
        ).add_to(m)

    def _create_route_popup(self, route: RouteSummary) -> str:
        return (
            f"<div style=\"width: 200px;\">"
            f"<h4>{route.safety_rating}</h4>"
            f"<p><strong>Distance:</strong> {route.total_miles:.2f} mi</p>"
            f"<p><strong>Crime Score:</strong> {route.total_risk}</p>"
            f"<p><strong>Segments:</strong> {route.segment_count}</p>"
            f"</div>"
        )

    def _add_start_end_markers(self, m: folium.Map, route: RouteSummary) -> None:
        if not route.coordinates:
            return

        folium.Marker(
            location=route.coordinates[0],
            popup='Start Point',
            icon=folium.Icon(color='green', icon='play')
        ).add_to(m)

        folium.Marker(
            location=route.coordinates[-1],
            popup='End Point',
            icon=folium.Icon(color='red', icon='stop')
        ).add_to(m)

    def _add_legend(self, m: folium.Map, route: Optional[RouteSummary]) -> None:
        m.get_root().add_child(folium.Element(self._create_legend_html(route)))

    def _create_legend_html(self, route: Optional[RouteSummary]) -> str:
        items = []
        bounds = list(self.config.safety_thresholds)
        for tier, (label, color) in enumerate(zip(self.config.edge_safety_labels,
                                                   self.config.tier_colors)):
            if tier < len(bounds):
                lower = bounds[tier - 1] + 1 if tier else 0
                score_range = f"{lower:g}-{bounds[tier]:g}"
            else:
                score_range = f"{bounds[-1] + 1:g}+"
            items.append(
                f'<div><span style="background-color: {color}; width: 20px; height: 4px; '
                f'display: inline-block; margin-right: 8px;"></span>'
                f'{label} <small>({score_range})</small></div>'
            )

        if route is not None:
            items.append(f'<hr style="margin: 6px 0;"><strong>Route:</strong> '
                         f'{route.total_miles:.2f} mi &bull; {route.safety_rating}')

        return f"""
        <div style="position: fixed;
                   bottom: 50px; left: 50px; width: 200px; height: auto;
                   background-color: white; border:2px solid grey; z-index:9999;
                   font-size:14px; padding: 10px;">
            <h4 style="margin-top: 0;">Crime Score</h4>
            {''.join(items)}
        </div>
        """

    def _fit_map_to_route(self, m: folium.Map, route: RouteSummary) -> None:
        if len(route.coordinates) < 2:
            return
        lats = [coord[0] for coord in route.coordinates]
        lons = [coord[1] for coord in route.coordinates]
        m.fit_bounds([[min(lats), min(lons)], [max(lats), max(lons)]], padding=(50, 50))

    def save_interactive_html(self, map_obj: folium.Map, filepath: str) -> None:
        """
        Save interactive map to HTML file.

        Args:
            map_obj: Folium map object
            filepath: Output file path
        """
        try:
            Path(filepath).parent.mkdir(parents=True, exist_ok=True)
            map_obj.save(filepath)
            logger.info(f"Interactive map saved to {filepath}")
        except OSError as e:
            logger.error(f"Failed to save map to {filepath}: {e}")
            raise
