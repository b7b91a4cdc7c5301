#!/usr/bin/env python3
"""
Nearstations - find the stations that lie near a path.

This package provides an exact point-to-segment distance, a brute-force
proximity query and an optimized query that prunes candidates using
stations sorted by x-coordinate.
"""
import importlib.metadata

__version__ = importlib.metadata.version("nearstations")

# Import main classes for public API
from .geometry import Point, Segment, distance, point_segment_distance
from .query import InvalidArgumentError, brute_force_query, optimized_query
from .highlight import HighlightState, classify_stations
from .scene import Scene, generate_scene

__all__ = [
    "Point",
    "Segment",
    "distance",
    "point_segment_distance",
    "InvalidArgumentError",
    "brute_force_query",
    "optimized_query",
    "HighlightState",
    "classify_stations",
    "Scene",
    "generate_scene",
]
