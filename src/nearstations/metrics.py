"""
Module for collecting and logging metrics about proximity queries.
"""

import collections
import logging
from typing import AbstractSet, Dict, Mapping, NamedTuple

from .config import NearStationsConfig
from .geometry import Point, path_segments
from .highlight import HighlightState
from .scene import Scene

logger = logging.getLogger(__name__)


class QueryMetrics(NamedTuple):
    """Container for query metrics data."""

    segment_count: int
    station_count: int
    brute_force_tests: int
    optimized_tests: int
    brute_force_near: int
    optimized_near: int
    results_match: bool
    highlight_counts: Dict[HighlightState, int]


def collect_metrics(
    scene: Scene,
    brute_force: AbstractSet[Point],
    optimized: AbstractSet[Point],
    highlights: Mapping[Point, HighlightState],
    optimized_tests: int,
) -> QueryMetrics:
    """
    Collect metrics for one scene after both queries have run.

    Args:
        scene: Scene the queries ran against
        brute_force: Result of brute_force_query
        optimized: Result of optimized_query
        highlights: Highlight state per station
        optimized_tests: Exact distance tests made by the optimized query

    Returns:
        QueryMetrics containing all collected metrics
    """
    segment_count = len(path_segments(scene.path))
    station_count = len(scene.stations)

    highlight_counts: Dict[HighlightState, int] = collections.defaultdict(int)
    for state in highlights.values():
        highlight_counts[state] += 1

    return QueryMetrics(
        segment_count=segment_count,
        station_count=station_count,
        brute_force_tests=segment_count * station_count,
        optimized_tests=optimized_tests,
        brute_force_near=len(brute_force),
        optimized_near=len(optimized),
        results_match=set(brute_force) == set(optimized),
        highlight_counts=dict(highlight_counts),
    )


def log_metrics(metrics: QueryMetrics, config: NearStationsConfig) -> None:
    """
    Log detailed metrics.

    Args:
        metrics: QueryMetrics containing collected metrics
        config: Configuration holding the metrics flag
    """
    if not config.metrics:
        return

    logger.debug("=== NEARSTATIONS_METRICS ===")
    logger.debug(f"segments={metrics.segment_count}")
    logger.debug(f"stations={metrics.station_count}")
    logger.debug(f"brute_force_tests={metrics.brute_force_tests}")
    logger.debug(f"optimized_tests={metrics.optimized_tests}")
    if metrics.brute_force_tests > 0:
        ratio = metrics.optimized_tests / metrics.brute_force_tests
        logger.debug(f"optimized_test_ratio={ratio:.4f}")
    logger.debug(f"brute_force_near={metrics.brute_force_near}")
    logger.debug(f"optimized_near={metrics.optimized_near}")
    logger.debug(f"results_match={metrics.results_match}")

    for state in HighlightState:
        count = metrics.highlight_counts.get(state, 0)
        if count > 0:
            logger.debug(f"highlight[{state}]={count}")
    logger.debug("=== END_NEARSTATIONS_METRICS ===")
