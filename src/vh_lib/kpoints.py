# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Counting of k-points requested by a KPOINTS file.
"""

import re
from pathlib import Path

# Plain (optionally signed, fractional or exponential) number.
_NUMBER = re.compile(r"^-?\d+(\.\d+)?([eE][+-]?\d+)?$")

# Positive count on the second line of an explicit KPOINTS file.
_COUNT = re.compile(r"^\s*\d+(\.\d+)?\s*$")


def _is_number(token: str) -> bool:
    return bool(_NUMBER.match(token))


def _is_kpoint(line: str) -> bool:
    """Check whether a line starts with three numeric coordinates."""
    tokens = line.split()
    return len(tokens) >= 3 and all(_is_number(t) for t in tokens[:3])


def count_kpoints(kpoints: Path) -> int:
    """
    Count the k-points requested by a KPOINTS file.

    Supports an explicit count on the second line, automatic Monkhorst-Pack and
    Gamma-centered grids (product of the subdivisions on the fourth line) and
    explicit lists of k-points. Blank lines and lines starting with '#' are ignored.

    Args:
        kpoints (Path): Path to the KPOINTS file.

    Returns:
        int: Number of k-points, 0 if the file is missing or unrecognized.
    """
    if not kpoints.is_file():
        return 0

    lines = [
        line
        for line in kpoints.read_text(errors="replace").replace("\r", "").splitlines()
        if line.strip() and not line.lstrip().startswith("#")
    ]
    if len(lines) < 2:
        return 0

    # explicit count
    if _COUNT.match(lines[1]) and (count := int(float(lines[1]))) > 0:
        return count

    # automatic grid
    if len(lines) >= 4:
        scheme = lines[2].lower()
        if ("monkhorst" in scheme or "gamma" in scheme) and _is_kpoint(lines[3]):
            subdivisions = [int(float(t)) for t in lines[3].split()[:3]]
            if (product := subdivisions[0] * subdivisions[1] * subdivisions[2]) > 0:
                return product

    # explicit list of k-points
    return sum(1 for line in lines[2:] if _is_kpoint(line))
