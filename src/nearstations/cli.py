#!/usr/bin/env python3
"""
Station proximity tool.

Generates a random scene, finds the stations near its path with both the
brute-force and the optimized query, reports whether the two agree and
optionally renders the scene as an interactive HTML map.
"""

from typing import List, Optional
import webbrowser
import argparse
import logging
import sys
import os

from . import __version__
from . import visualization
from .config import NearStationsConfig
from .file_utils import generate_output_filename
from .highlight import classify_stations
from .metrics import collect_metrics, log_metrics
from .query import (
    InvalidArgumentError,
    brute_force_query,
    optimized_query_with_stats,
)
from .scene import create_rng, generate_scene

# Configure logging
logger = logging.getLogger("nearstations")


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command-line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    defaults = NearStationsConfig()
    parser = argparse.ArgumentParser(
        description="Find stations near a path with brute-force and optimized search",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--stations",
        type=int,
        default=defaults.station_count,
        help=f"Number of random stations (default: {defaults.station_count})",
    )
    parser.add_argument(
        "--path-points",
        type=int,
        default=defaults.path_point_count,
        help=f"Number of random path points (default: {defaults.path_point_count})",
    )
    parser.add_argument(
        "--width",
        type=float,
        default=defaults.width,
        help=f"Scene width (default: {defaults.width})",
    )
    parser.add_argument(
        "--height",
        type=float,
        default=defaults.height,
        help=f"Scene height (default: {defaults.height})",
    )
    parser.add_argument(
        "--margin",
        type=float,
        default=defaults.margin,
        help=f"Inset from the scene edges for generated points (default: {defaults.margin})",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=defaults.threshold,
        help=f"Inclusive distance threshold (default: {defaults.threshold})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for a reproducible scene",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output HTML map file (default: auto-generated from the seed)",
    )
    parser.add_argument(
        "--no-render",
        action="store_true",
        help="Don't write an HTML map",
    )
    parser.add_argument(
        "--no-open",
        action="store_true",
        help="Don't automatically open the HTML file in browser",
    )
    parser.add_argument(
        "--metrics",
        action="store_true",
        help="Output structured metrics after processing",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=defaults.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=f"Set logging level (default: {defaults.log_level})",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"nearstations {__version__}",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> NearStationsConfig:
    """Build a NearStationsConfig from parsed command-line arguments."""
    return NearStationsConfig(
        station_count=args.stations,
        path_point_count=args.path_points,
        width=args.width,
        height=args.height,
        margin=args.margin,
        threshold=args.threshold,
        seed=args.seed,
        output=args.output,
        render=not args.no_render,
        open_browser=not args.no_open,
        log_level=args.log_level,
        metrics=args.metrics,
    )


def determine_output_filename(config: NearStationsConfig) -> str:
    """
    Determine the output filename to use.

    Raises:
        RuntimeError: If auto-generation fails
        ValueError: If a filename cannot be created
    """
    if config.output is not None:
        return config.output

    base_name = "scene" if config.seed is None else f"scene {config.seed}"
    try:
        return generate_output_filename(base_name)
    except (RuntimeError, ValueError) as e:
        logger.error(f"Failed to generate output filename: {e}")
        raise


def open_file_in_browser(filename: str) -> None:
    """
    Open the specified file in the default browser.

    Args:
        filename: Path to the file to open
    """
    abs_path = os.path.abspath(filename)
    try:
        webbrowser.open(f"file://{abs_path}")
        logger.debug(f"Opening {abs_path} in your default browser...")
    except webbrowser.Error as e:
        logger.warning(f"Could not automatically open browser: {e}")
        logger.warning(f"Please manually open {abs_path}")


def setup_logging(config: NearStationsConfig) -> None:
    """Setup logging configuration."""
    level = getattr(logging, config.log_level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    # Configure the root logger so all modules inherit the configuration
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parses command-line arguments, generates a scene, runs both queries
    and optionally renders the result.

    Returns:
        Process exit status: 0 when both queries agree, 1 otherwise
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)
    config = config_from_args(args)

    setup_logging(config)

    try:
        scene = generate_scene(
            create_rng(config.seed),
            station_count=config.station_count,
            path_point_count=config.path_point_count,
            width=config.width,
            height=config.height,
            margin=config.margin,
        )
    except ValueError as e:
        logger.error(f"Invalid scene parameters: {e}")
        return 1
    logger.info(
        f"Generated scene with {len(scene.stations)} stations and {len(scene.path)} path points"
    )

    try:
        nearest = brute_force_query(scene.path, scene.stations, config.threshold)
        nearest_opt, optimized_tests = optimized_query_with_stats(
            scene.path, scene.stations, config.threshold
        )
    except InvalidArgumentError as e:
        logger.error(f"Invalid query arguments: {e}")
        return 1

    same = nearest == nearest_opt
    print(f"same result from both methods: {same}")
    print(
        f"Near stations within {config.threshold:g}: "
        f"{len(nearest)} brute force, {len(nearest_opt)} optimized "
        f"(of {len(scene.stations)})"
    )

    highlights = classify_stations(scene.stations, nearest, nearest_opt)
    metrics = collect_metrics(scene, nearest, nearest_opt, highlights, optimized_tests)

    if config.render:
        try:
            output_filename = determine_output_filename(config)
            logger.debug(f"Output filename: {output_filename}")
            visualization.create_scene_map(scene, highlights, output_filename, config)
        except (RuntimeError, ValueError, OSError) as e:
            logger.error(f"Failed to create map: {e}")
            return 1

        if config.open_browser:
            open_file_in_browser(output_filename)

    log_metrics(metrics, config)

    if not same:
        logger.error("Brute-force and optimized queries disagree")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
