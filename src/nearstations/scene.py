#!/usr/bin/env python3
"""
Random scene generation: a monotone path over a field of stations.

All randomness comes from an injected numpy Generator so that a fixed seed
always reproduces the same scene.
"""

from typing import List, NamedTuple, Optional
import logging
import numpy as np

from .geometry import Point

logger = logging.getLogger(__name__)


class Scene(NamedTuple):
    """A path and a set of stations inside a width x height field."""

    path: List[Point]
    stations: List[Point]
    width: float
    height: float


def create_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create the random source for scene generation."""
    return np.random.default_rng(seed)


def _uniform(
    rng: np.random.Generator, low: float, high: float, count: int
) -> List[float]:
    return [float(v) for v in rng.uniform(low, high, size=count)]


def generate_scene(
    rng: np.random.Generator,
    station_count: int = 500,
    path_point_count: int = 40,
    width: float = 300.0,
    height: float = 600.0,
    margin: float = 10.0,
) -> Scene:
    """
    Generate a random scene.

    Stations are uniform over the field inset by margin. The path takes
    independently drawn x and y samples, sorts each and pairs them up, so
    it runs monotonically from the top-left towards the bottom-right.

    Args:
        rng: Random source
        station_count: Number of stations to draw
        path_point_count: Number of path points to draw
        width: Field width
        height: Field height
        margin: Inset from every edge of the field

    Returns:
        Generated Scene

    Raises:
        ValueError: If a count is negative or the margin leaves no area
    """
    if station_count < 0 or path_point_count < 0:
        raise ValueError("Station and path point counts cannot be negative")
    if margin < 0 or width - 2 * margin <= 0 or height - 2 * margin <= 0:
        raise ValueError(
            f"Margin {margin} leaves no area inside a {width} x {height} field"
        )

    x_low, x_high = margin, width - margin
    y_low, y_high = margin, height - margin

    xs = _uniform(rng, x_low, x_high, station_count)
    ys = _uniform(rng, y_low, y_high, station_count)
    stations = [Point(x, y) for x, y in zip(xs, ys)]

    path_xs = sorted(_uniform(rng, x_low, x_high, path_point_count))
    path_ys = sorted(_uniform(rng, y_low, y_high, path_point_count))
    path = [Point(x, y) for x, y in zip(path_xs, path_ys)]

    logger.debug(
        f"Generated scene with {len(stations)} stations and {len(path)} path points "
        f"in a {width} x {height} field"
    )
    return Scene(path=path, stations=stations, width=width, height=height)
