# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
General utility functions for the vh library.

This module provides helpers for YAML output, job-directory naming, lenient
number parsing, file copying and panel sizing.
"""

import re
import shutil
from functools import lru_cache
from pathlib import Path

import yaml
from rich.console import Console

from .config import CFG
from .logger import get_logger

logger = get_logger(__name__)

# Leading numeric token of a value, e.g. '2' in '2;' or '-1.5' in '-1.5 ! comment'.
_LEADING_NUMBER = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")

# Integer charge suffix of a job directory name.
_CHARGE_SUFFIX = re.compile(r"^[-+]?\d+$")


@lru_cache(maxsize=1)
def load_yaml_dumper() -> type[yaml.Dumper]:
    """Return the fastest available YAML dumper (CDumper if possible)."""
    try:
        from yaml import CDumper as Dumper  # type: ignore[attr-defined]

        logger.debug("Loaded YAML CDumper.")
    except ImportError:
        from yaml import Dumper

        logger.debug("Loaded default YAML dumper.")
    return Dumper


def parse_leading_number(value: str | None) -> float | None:
    """
    Parse the leading numeric token of a string.

    Args:
        value (str | None): The string to parse.

    Returns:
        float | None: The parsed number or None if the string does not start with a number.
    """
    if value is None or not (match := _LEADING_NUMBER.match(value)):
        return None

    return float(match.group(1))


def get_charge(name: str) -> int | None:
    """
    Extract the charge encoded in a job directory name `<species>_<site>_<charge>`.

    Args:
        name (str): Name of the job directory.

    Returns:
        int | None: The charge or None if the name does not end with an integer suffix.
    """
    if "_" not in name:
        return None

    suffix = name.rsplit("_", 1)[1]
    if not _CHARGE_SUFFIX.match(suffix):
        return None

    return int(suffix)


def get_base_name(name: str) -> str:
    """
    Strip the charge suffix from a job directory name.

    Args:
        name (str): Name of the job directory, e.g. 'Cd_i_-1'.

    Returns:
        str: Name without the charge suffix, e.g. 'Cd_i'.
    """
    return name.rsplit("_", 1)[0]


def construct_job_name(base: str, charge: int) -> str:
    """
    Construct a job directory name from its base and charge.

    Args:
        base (str): Name without the charge suffix.
        charge (int): Charge of the job.

    Returns:
        str: The job directory name, e.g. 'Cd_i_-1'.
    """
    return f"{base}_{charge}"


def format_nelect(nelect: float) -> str:
    """Format an electron count the way it is written into INCAR."""
    return f"{nelect:.{CFG.tags.nelect_decimals}f}"


def list_subdirectories(directory: Path) -> list[Path]:
    """
    List directories located directly inside a directory.

    Args:
        directory (Path): The directory to search in.

    Returns:
        list[Path]: Subdirectories sorted by name.
    """
    return sorted((d for d in directory.iterdir() if d.is_dir()), key=lambda d: d.name)


def copy_file(source: Path, destination: Path) -> None:
    """
    Copy a file, overwriting the destination.

    Copying a file onto itself is skipped.

    Args:
        source (Path): File to copy.
        destination (Path): Target path of the copy.
    """
    if destination.exists() and source.resolve() == destination.resolve():
        logger.debug(f"Skipping copy of '{source}' onto itself.")
        return

    shutil.copy(source, destination)


def get_panel_width(
    console: Console, factor: int, min_width: int | None, max_width: int | None
) -> int:
    """
    Calculate the width of a panel relative to the console width, constrained by
    optional minimum and maximum width values.

    Args:
        console (Console): A rich Console-like object that provides terminal size.
        factor (int): A divisor used to scale down the terminal width.
        min_width (int): The minimum allowable panel width. If None, no lower bound is applied.
        max_width (int): The maximum allowable panel width. If None, no upper bound is applied.

    Returns:
        int: The computed panel width after applying scaling and bounds.
    """
    panel_width = console.size.width // factor
    if min_width is not None:
        panel_width = max(panel_width, min_width)
    if max_width is not None:
        panel_width = min(panel_width, max_width)

    return panel_width


def is_nonempty_file(path: Path) -> bool:
    """Check whether a path is an existing file with nonzero size."""
    return path.is_file() and path.stat().st_size > 0
