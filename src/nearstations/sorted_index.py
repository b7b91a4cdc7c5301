#!/usr/bin/env python3
"""
Stations sorted by x-coordinate, with bounded binary search and range slicing.
"""

from typing import Iterable, List, Sequence
import logging

from .geometry import Point

logger = logging.getLogger(__name__)


def build_sorted_index(stations: Iterable[Point]) -> List[Point]:
    """Return a new list of the stations ordered by ascending x-coordinate."""
    return sorted(stations, key=lambda p: p.x)


def x_bound_index(points: Sequence[Point], bound: float, upper: bool) -> int:
    """
    Binary search for the index bracketing a bound on the x-coordinate.

    The window [low, high] starts at the whole sequence and shrinks until the
    cursors are at most one position apart.

    For the lower direction, every point before the returned index has
    x < bound. For the upper direction, every point after the returned index
    has x > bound. The bracketing element itself may still lie outside the
    bound and has to be checked by the caller.

    Args:
        points: Points sorted by ascending x
        bound: x value to locate
        upper: True to bracket the bound from above, False from below

    Returns:
        Index in [0, len(points) - 1]

    Raises:
        ValueError: If points is empty
    """
    if not points:
        raise ValueError("Cannot locate a bound in an empty sequence")

    low = 0
    high = len(points) - 1
    while high - low > 1:
        mid = low + (high - low) // 2
        x = points[mid].x
        if x > bound or (not upper and x == bound):
            high = mid
        else:
            low = mid

    return high if upper else low


def points_bound_by_x(
    points: Sequence[Point], lower: float, upper: float
) -> List[Point]:
    """
    Return the contiguous slice of sorted points with lower <= x <= upper.

    Args:
        points: Points sorted by ascending x
        lower: Inclusive lower x bound
        upper: Inclusive upper x bound

    Returns:
        List of points within the bounds, empty if none or if lower > upper
    """
    if not points or lower > upper:
        return []

    count = len(points)

    start = x_bound_index(points, lower, upper=False)
    while start < count and points[start].x < lower:
        start += 1

    end = x_bound_index(points, upper, upper=True)
    while end >= 0 and points[end].x > upper:
        end -= 1

    if start > end:
        return []
    return list(points[start : end + 1])
