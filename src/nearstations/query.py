#!/usr/bin/env python3
"""
Proximity queries: find stations within a distance threshold of a path.

Two strategies are provided. brute_force_query tests every station against
every segment and serves as the reference. optimized_query sorts the
stations by x once and, per segment, only tests stations whose x lies within
the segment's x-span widened by the threshold. A station within the
threshold of a segment is never further than the threshold from the
segment's x-span horizontally, so the pruning cannot drop a true match.
"""

from numbers import Real
from typing import Iterable, List, Set, Tuple, Union
import logging
import math
import sys

from .geometry import Point, path_segments, point_segment_distance
from .sorted_index import build_sorted_index, points_bound_by_x

logger = logging.getLogger(__name__)

PointLike = Union[Point, Tuple[float, float]]

# Relative rounding allowance for the pruning window. Covers the error of the
# clamped projection and of the distance computed by the exact test.
WINDOW_ROUNDING = 64 * sys.float_info.epsilon
# Horizontal gaps below this can vanish when squared in the exact test.
WINDOW_UNDERFLOW = 4 * math.sqrt(sys.float_info.min)


class InvalidArgumentError(ValueError):
    """Raised when query inputs are rejected before any geometry is computed."""


def _finite_float(value: object, description: str) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidArgumentError(f"{description} is not a real number: {value!r}")
    try:
        converted = float(value)
    except OverflowError:
        raise InvalidArgumentError(f"{description} is too large: {value!r}")
    if not math.isfinite(converted):
        raise InvalidArgumentError(f"{description} is not finite: {value!r}")
    return converted


def _coerce_point(value: object, name: str, index: int) -> Point:
    if isinstance(value, (str, bytes)):
        raise InvalidArgumentError(f"{name}[{index}] is not a point: {value!r}")
    try:
        x, y = value  # type: ignore[misc]
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"{name}[{index}] is not a point: {value!r}")

    return Point(
        _finite_float(x, f"{name}[{index}].x"),
        _finite_float(y, f"{name}[{index}].y"),
    )


def _coerce_points(values: Iterable[PointLike], name: str) -> Tuple[Point, ...]:
    if isinstance(values, (str, bytes)):
        raise InvalidArgumentError(f"{name} must be a collection of points")
    try:
        items = list(values)
    except TypeError:
        raise InvalidArgumentError(f"{name} must be a collection of points")
    return tuple(_coerce_point(item, name, i) for i, item in enumerate(items))


def validate_query_inputs(
    path: Iterable[PointLike], stations: Iterable[PointLike], threshold: float
) -> Tuple[Tuple[Point, ...], Tuple[Point, ...], float]:
    """
    Validate and normalize the inputs shared by both query strategies.

    Args:
        path: Ordered path points
        stations: Station points
        threshold: Inclusive distance cutoff

    Returns:
        Tuple of (path, stations, threshold) as tuples of Point and a float

    Raises:
        InvalidArgumentError: If the threshold is negative, not a finite real
            number, or any point is malformed or has a non-finite coordinate
    """
    threshold = _finite_float(threshold, "Threshold")
    if threshold < 0:
        raise InvalidArgumentError(f"Threshold cannot be negative: {threshold!r}")

    return (
        _coerce_points(path, "path"),
        _coerce_points(stations, "stations"),
        threshold,
    )


def brute_force_query(
    path: Iterable[PointLike], stations: Iterable[PointLike], threshold: float
) -> Set[Point]:
    """
    Find stations within threshold of any path segment by exhaustive search.

    Args:
        path: Ordered path points
        stations: Station points
        threshold: Inclusive distance cutoff

    Returns:
        Set of stations within threshold of at least one segment

    Raises:
        InvalidArgumentError: If the inputs fail validation
    """
    path_points, station_points, threshold = validate_query_inputs(
        path, stations, threshold
    )
    result: Set[Point] = set()

    segments = path_segments(path_points)
    for segment in segments:
        for station in station_points:
            if point_segment_distance(segment, station) <= threshold:
                result.add(station)

    logger.debug(
        f"Brute-force query: {len(segments)} segments x {len(station_points)} stations, "
        f"{len(result)} near"
    )
    return result


def segment_window(a: Point, b: Point, threshold: float) -> Tuple[float, float]:
    """
    Return the x-interval that can hold stations within threshold of segment ab.

    The segment's x-span is widened by the threshold plus a rounding
    allowance, so that every station the exact test accepts lies inside the
    window even when the window edges and the distance are rounded.
    """
    low_x = min(a.x, b.x)
    high_x = max(a.x, b.x)
    slack = (
        WINDOW_ROUNDING * (abs(low_x) + abs(high_x) + threshold) + WINDOW_UNDERFLOW
    )
    return (low_x - threshold) - slack, (high_x + threshold) + slack


def segment_candidates(
    sorted_stations: List[Point], a: Point, b: Point, threshold: float
) -> List[Point]:
    """Return sorted stations whose x lies in the window of segment ab."""
    lower, upper = segment_window(a, b, threshold)
    return points_bound_by_x(sorted_stations, lower, upper)


def optimized_query_with_stats(
    path: Iterable[PointLike], stations: Iterable[PointLike], threshold: float
) -> Tuple[Set[Point], int]:
    """
    Run optimized_query and also report how many exact distance tests it made.

    Returns:
        Tuple of (near stations, number of candidate tests)

    Raises:
        InvalidArgumentError: If the inputs fail validation
    """
    path_points, station_points, threshold = validate_query_inputs(
        path, stations, threshold
    )
    result: Set[Point] = set()

    sorted_stations = build_sorted_index(station_points)
    candidate_tests = 0

    for segment in path_segments(path_points):
        candidates = segment_candidates(sorted_stations, segment.a, segment.b, threshold)
        candidate_tests += len(candidates)
        for station in candidates:
            if point_segment_distance(segment, station) <= threshold:
                result.add(station)

    logger.debug(
        f"Optimized query: {candidate_tests} candidate tests over "
        f"{len(station_points)} stations, {len(result)} near"
    )
    return result, candidate_tests


def optimized_query(
    path: Iterable[PointLike], stations: Iterable[PointLike], threshold: float
) -> Set[Point]:
    """
    Find stations within threshold of any path segment using x-sorted pruning.

    Produces the same set as brute_force_query.

    Args:
        path: Ordered path points
        stations: Station points
        threshold: Inclusive distance cutoff

    Returns:
        Set of stations within threshold of at least one segment

    Raises:
        InvalidArgumentError: If the inputs fail validation
    """
    result, _ = optimized_query_with_stats(path, stations, threshold)
    return result
