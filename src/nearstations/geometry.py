#!/usr/bin/env python3
"""
Planar geometry primitives for station proximity analysis.

Points compare and hash by the exact bit patterns of their coordinates, so
two stations are the same only when both coordinates match exactly.
"""

from typing import List, NamedTuple, Sequence
import logging
import math
import struct

logger = logging.getLogger(__name__)

_COORD_PAIR = struct.Struct("<dd")


class Point(NamedTuple):
    """A 2-D point with real-valued coordinates."""

    x: float
    y: float

    def bit_key(self) -> bytes:
        """Raw IEEE-754 representation of both coordinates."""
        return _COORD_PAIR.pack(self.x, self.y)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Point):
            return self.bit_key() == other.bit_key()
        if isinstance(other, tuple):
            # Plain tuples compare numerically and hash differently
            return False
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        return hash(self.bit_key())


class Segment(NamedTuple):
    """One edge of a path, from a to b."""

    a: Point
    b: Point

    def is_degenerate(self) -> bool:
        return self.a == self.b


def sqr(value: float) -> float:
    return value * value


def squared_distance(p1: Point, p2: Point) -> float:
    """Squared Euclidean distance between two points."""
    return sqr(p1.x - p2.x) + sqr(p1.y - p2.y)


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return math.sqrt(squared_distance(p1, p2))


def point_segment_distance(segment: Segment, point: Point) -> float:
    """
    Calculate the minimum distance from a point to a closed segment.

    The point is projected onto the segment's supporting line, the projection
    parameter is clamped to [0, 1] and the distance to the clamped projection
    is returned. A zero-length segment falls back to point-to-point distance.

    Args:
        segment: Segment to measure against
        point: Point to measure from

    Returns:
        Shortest distance from point to any point of the segment
    """
    a, b = segment
    dx = b.x - a.x
    dy = b.y - a.y
    l2 = sqr(dx) + sqr(dy)

    if l2 == 0.0:
        return distance(a, point)

    t = ((point.x - a.x) * dx + (point.y - a.y) * dy) / l2
    t = max(0.0, min(1.0, t))

    projection = Point(a.x + t * dx, a.y + t * dy)
    return distance(point, projection)


def path_segments(path: Sequence[Point]) -> List[Segment]:
    """
    Split a path into its consecutive segments.

    Args:
        path: Ordered path points

    Returns:
        List of len(path) - 1 segments, empty for paths with fewer than two points
    """
    return [Segment(path[i], path[i + 1]) for i in range(len(path) - 1)]
