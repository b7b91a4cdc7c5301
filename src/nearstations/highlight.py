#!/usr/bin/env python3
"""Highlight states derived from comparing the two query strategies."""

from typing import AbstractSet, Dict, Iterable
from enum import Enum
import logging

from .geometry import Point

logger = logging.getLogger(__name__)


class HighlightState(Enum):
    """How a station relates to the brute-force and optimized result sets."""

    NOT_NEAR = "not_near"
    ONLY_OPTIMIZED = "only_optimized"
    ONLY_BRUTE_FORCE = "only_brute_force"
    NEAR_BOTH = "near_both"

    def __str__(self) -> str:
        return self.value

    @property
    def color(self) -> str:
        return _COLORS[self]

    @property
    def filled(self) -> bool:
        """Whether the station marker is drawn filled rather than outlined."""
        return self is not HighlightState.NOT_NEAR

    @property
    def is_mismatch(self) -> bool:
        return self in (HighlightState.ONLY_OPTIMIZED, HighlightState.ONLY_BRUTE_FORCE)


_COLORS = {
    HighlightState.NOT_NEAR: "black",
    HighlightState.ONLY_OPTIMIZED: "green",
    HighlightState.ONLY_BRUTE_FORCE: "blue",
    HighlightState.NEAR_BOTH: "black",
}


def classify_station(
    station: Point, brute_force: AbstractSet[Point], optimized: AbstractSet[Point]
) -> HighlightState:
    in_brute = station in brute_force
    in_optimized = station in optimized

    if in_brute and in_optimized:
        return HighlightState.NEAR_BOTH
    if in_brute:
        return HighlightState.ONLY_BRUTE_FORCE
    if in_optimized:
        return HighlightState.ONLY_OPTIMIZED
    return HighlightState.NOT_NEAR


def classify_stations(
    stations: Iterable[Point],
    brute_force: AbstractSet[Point],
    optimized: AbstractSet[Point],
) -> Dict[Point, HighlightState]:
    """
    Classify every station against both result sets.

    Args:
        stations: All stations in the scene
        brute_force: Result of brute_force_query
        optimized: Result of optimized_query

    Returns:
        Dictionary mapping each distinct station to its highlight state
    """
    highlights = {
        station: classify_station(station, brute_force, optimized)
        for station in stations
    }
    mismatches = sum(1 for state in highlights.values() if state.is_mismatch)
    if mismatches:
        logger.warning(f"{mismatches} stations differ between query strategies")
    return highlights
