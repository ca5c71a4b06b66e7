# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from dataclasses import dataclass
from pathlib import Path
from typing import Self

# 0-based indices of the species and atom-count lines of a POSCAR.
SPECIES_LINE = 5
COUNTS_LINE = 6


def read_lines(path: Path, limit: int) -> list[str] | None:
    """
    Read the first lines of a text file without their line terminators.

    Carriage returns are kept so that the lines are compared verbatim.

    Args:
        path (Path): File to read.
        limit (int): Maximal number of lines to read.

    Returns:
        list[str] | None: The lines or None if the file cannot be read.
    """
    lines = []
    try:
        with path.open(newline="", errors="replace") as file:
            for line in file:
                lines.append(line.rstrip("\n"))
                if len(lines) == limit:
                    break
    except OSError:
        return None

    return lines


@dataclass(frozen=True)
class StructureSignature:
    """
    Fingerprint of the atomic composition of a structure file.

    Consists of the verbatim species line (line 6) and atom-count line (line 7).
    """

    species: str
    counts: str

    @classmethod
    def fromFile(cls, path: Path) -> Self:
        """
        Read the signature of a structure file.

        A missing file or a file with fewer than 7 lines yields an empty signature.
        """
        lines = read_lines(path, COUNTS_LINE + 1)
        if not lines or len(lines) <= COUNTS_LINE:
            return cls("", "")

        return cls(lines[SPECIES_LINE], lines[COUNTS_LINE])

    def isCompatible(self, other: "StructureSignature") -> bool:
        """Check whether both structures list the same species with the same counts."""
        return self.species == other.species and self.counts == other.counts

    def __str__(self) -> str:
        return f"{self.species}|{self.counts}"


def signature(path: Path) -> StructureSignature:
    """Read the structural signature of a structure file."""
    return StructureSignature.fromFile(path)


def compatible(a: StructureSignature, b: StructureSignature) -> bool:
    """Check whether two signatures are identical."""
    return a.isCompatible(b)
