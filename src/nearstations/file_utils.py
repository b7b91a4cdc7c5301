#!/usr/bin/env python3
"""
Filename utilities for generating output filenames.
"""

import os
import logging

logger = logging.getLogger(__name__)

MAX_FILENAME_ATTEMPTS = 100


def _reserve(candidate: str) -> bool:
    """Create candidate exclusively. Returns False if it already exists."""
    try:
        with open(candidate, "x"):
            pass
        return True
    except FileExistsError:
        return False
    except (PermissionError, OSError) as e:
        logger.error(f"Cannot create file {candidate}: {e}")
        raise ValueError(f"Cannot create file: {e}")


def generate_output_filename(base_name: str, directory: str = "") -> str:
    """
    Generates an output HTML filename and reserves it by creating an empty file.

    Tries "<base_name> map.html" first, then "<base_name> map (1).html",
    "<base_name> map (2).html" and so on. Exclusive creation avoids races
    with other processes picking the same name.

    Args:
        base_name: Name stem for the map file
        directory: Directory to place the file in (default: current directory)

    Returns:
        Filename that has been created as an empty file to reserve its name

    Raises:
        RuntimeError: If no available filename is found
        ValueError: If a filename cannot be created
    """
    base_output = base_name + " map"

    candidate = os.path.join(directory, base_output + ".html")
    if _reserve(candidate):
        return candidate

    for i in range(1, MAX_FILENAME_ATTEMPTS):
        candidate = os.path.join(directory, f"{base_output} ({i}).html")
        if _reserve(candidate):
            return candidate

    logger.error(
        f"Could not find an available filename after {MAX_FILENAME_ATTEMPTS} attempts. "
        f"Please clean up your output directory or specify --output explicitly."
    )
    raise RuntimeError(
        f"No available filename found after {MAX_FILENAME_ATTEMPTS} attempts"
    )
