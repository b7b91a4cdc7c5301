#!/usr/bin/env python3
"""
Scene visualization using folium maps in a planar coordinate system.
"""

from typing import List, Mapping
import logging
import folium
from folium.template import Template

from .config import NearStationsConfig
from .geometry import Point
from .highlight import HighlightState
from .scene import Scene

logger = logging.getLogger(__name__)

PATH_COLOR = "blue"
STATION_RADIUS = 2


class HighlightLegend(folium.MacroElement):
    """Legend listing the station count for each highlight state."""

    def __init__(self, highlights: Mapping[Point, HighlightState], threshold: float):
        super().__init__()
        self.threshold = threshold
        self.entries = [
            {
                "label": _LEGEND_LABELS[state],
                "color": state.color,
                "filled": state.filled,
                "count": sum(1 for s in highlights.values() if s is state),
            }
            for state in HighlightState
        ]

        self._template = Template(
            """
        {% macro html(this, kwargs) %}
        <div id="highlight-legend" style="
            position: fixed;
            bottom: 50px;
            left: 50px;
            width: 240px;
            background-color: white;
            border: 2px solid grey;
            z-index: 9999;
            font-size: 13px;
            padding: 12px;
            font-family: Arial, sans-serif;
            border-radius: 5px;
            box-shadow: 0 2px 5px rgba(0,0,0,0.2);
            box-sizing: border-box;
        ">
            <b>Legend</b> (threshold {{ this.threshold }})<br>
            <div style="margin: 4px 0; line-height: 1.3;">
                <span style="color: blue; font-size: 18px;">&mdash;</span>
                Path
            </div>
            {% for entry in this.entries %}
            <div style="margin: 4px 0; line-height: 1.3;">
                <span style="color: {{ entry.color }}; font-size: 16px;">
                {% if entry.filled %}&#9679;{% else %}&#9675;{% endif %}
                </span>
                {{ entry.label }} ({{ entry.count }})
            </div>
            {% endfor %}
        </div>
        {% endmacro %}
        """
        )


_LEGEND_LABELS = {
    HighlightState.NOT_NEAR: "Not near",
    HighlightState.ONLY_OPTIMIZED: "Near (optimized only)",
    HighlightState.ONLY_BRUTE_FORCE: "Near (brute force only)",
    HighlightState.NEAR_BOTH: "Near (both)",
}


def to_map_location(point: Point, height: float) -> List[float]:
    """
    Convert a scene point to a folium [lat, lng] pair.

    Scene coordinates grow downwards like screen coordinates, while the
    Simple CRS grows upwards, so y is flipped against the field height.
    """
    return [height - point.y, point.x]


def create_scene_map(
    scene: Scene,
    highlights: Mapping[Point, HighlightState],
    output_filename: str,
    config: NearStationsConfig,
) -> None:
    """
    Create an interactive map of the scene and save it as HTML.

    Args:
        scene: Scene with path and stations
        highlights: Highlight state per station
        output_filename: Path where HTML map file should be saved
        config: Configuration holding the distance threshold
    """
    height = scene.height

    scene_map = folium.Map(
        location=[height / 2, scene.width / 2],
        crs="Simple",
        tiles=None,
        zoom_start=0,
    )

    if len(scene.path) >= 2:
        folium.PolyLine(
            [to_map_location(p, height) for p in scene.path],
            color=PATH_COLOR,
            weight=1,
            opacity=1.0,
            popup="Path",
        ).add_to(scene_map)

    for station in scene.stations:
        state = highlights.get(station, HighlightState.NOT_NEAR)
        folium.CircleMarker(
            to_map_location(station, height),
            radius=STATION_RADIUS,
            color=state.color,
            weight=1,
            fill=state.filled,
            fill_color=state.color,
            fill_opacity=1.0 if state.filled else 0.0,
            popup=f"({station.x:.2f}, {station.y:.2f}) {state}",
        ).add_to(scene_map)

    scene_map.add_child(HighlightLegend(highlights, config.threshold))

    scene_map.fit_bounds([[0, 0], [height, scene.width]])
    scene_map.save(output_filename)

    logger.debug(
        f"Map saved to {output_filename} with {len(scene.stations)} stations "
        f"and {len(scene.path)} path points"
    )
