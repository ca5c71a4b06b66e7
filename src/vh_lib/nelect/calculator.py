# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import re
from dataclasses import dataclass
from pathlib import Path

from vh_lib.core.config import CFG
from vh_lib.core.logger import get_logger
from vh_lib.files import resolve, resolve_structure
from vh_lib.structure import read_lines
from vh_lib.structure.signature import COUNTS_LINE, SPECIES_LINE

logger = get_logger(__name__)

# Line opening a new POTCAR block.
_TITEL = re.compile(r"^ *TITEL", re.IGNORECASE)

# Valence of the species described by a POTCAR block.
_ZVAL = re.compile(r"ZVAL\s*=\s*(\d+\.?\d*|\.\d+)", re.IGNORECASE)

# Total number of electrons reported in OUTCAR.
_OUTCAR_NELECT = re.compile(r"NELECT\s*=\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")


@dataclass(frozen=True)
class PotcarBlock:
    """Pseudopotential of one species as listed in a POTCAR file."""

    # Value of the TITEL field, e.g. 'PAW_PBE Cd 06Sep2000'.
    title: str
    # Valence (ZVAL) or None if the block does not report it.
    zval: float | None

    @property
    def element(self) -> str:
        """Element symbol extracted from the title, e.g. 'Cd' for 'PAW_PBE Cd_sv 06Sep2000'."""
        tokens = self.title.split()
        if not tokens:
            return ""

        return _strip_label(tokens[1] if len(tokens) > 1 else tokens[0])


def _strip_label(label: str) -> str:
    """Remove POTCAR-style suffixes ('Cd_sv', 'Cd/hash') from a species label."""
    return label.split("/")[0].split("_")[0]


def read_potcar(potcar: Path) -> list[PotcarBlock]:
    """
    Split a POTCAR file into per-species blocks.

    Each block starts at a TITEL line. If a block reports ZVAL several times,
    the last value is used. ZVAL fields appearing before the first TITEL are ignored.

    Args:
        potcar (Path): Path to the POTCAR file.

    Returns:
        list[PotcarBlock]: Blocks in the order of the file.
    """
    blocks: list[PotcarBlock] = []
    with potcar.open(errors="replace") as file:
        for line in file:
            if _TITEL.match(line):
                title = line.split("=", 1)[1].strip() if "=" in line else ""
                blocks.append(PotcarBlock(title, None))
            elif blocks and (match := _ZVAL.search(line)):
                blocks[-1] = PotcarBlock(blocks[-1].title, float(match.group(1)))

    return blocks


def read_atom_counts(poscar: Path) -> list[int] | None:
    """
    Read the per-species atom counts from line 7 of a POSCAR file.

    Returns:
        list[int] | None: Atom counts or None if the file is missing, shorter than
            7 lines, or its 7th line is empty or not a list of integers.
    """
    lines = read_lines(poscar, COUNTS_LINE + 1)
    if not lines or len(lines) <= COUNTS_LINE:
        return None

    try:
        counts = [int(token) for token in lines[COUNTS_LINE].split()]
    except ValueError:
        logger.debug(f"Line 7 of '{poscar}' does not contain atom counts.")
        return None

    return counts or None


def read_species(poscar: Path) -> list[str] | None:
    """Read the species labels from line 6 of a POSCAR file."""
    lines = read_lines(poscar, SPECIES_LINE + 1)
    if not lines or len(lines) <= SPECIES_LINE:
        return None

    return [_strip_label(label) for label in lines[SPECIES_LINE].split()]


def compute(potcar: Path | None, poscar: Path | None, strict: bool = False) -> float | None:
    """
    Compute the number of valence electrons of a structure.

    The counts of POSCAR line 7 are paired order-for-order with the ZVAL values
    of the POTCAR blocks. The species labels are not compared unless `strict`
    is set.

    Args:
        potcar (Path | None): Path to the POTCAR file.
        poscar (Path | None): Path to the POSCAR/CONTCAR file.
        strict (bool): Additionally require the POTCAR elements to match
            the species labels on POSCAR line 6.

    Returns:
        float | None: Sum of atom count times ZVAL over all species, or None if
            an input is missing or the number of ZVAL values differs from the
            number of atom counts.
    """
    if not potcar or not poscar or not potcar.is_file() or not poscar.is_file():
        return None

    if not (counts := read_atom_counts(poscar)):
        return None

    blocks = [block for block in read_potcar(potcar) if block.zval is not None]
    if len(blocks) != len(counts):
        logger.debug(
            f"Number of ZVAL entries in '{potcar}' ({len(blocks)}) does not match "
            f"the number of atom counts in '{poscar}' ({len(counts)})."
        )
        return None

    if strict:
        elements = [block.element for block in blocks]
        if (species := read_species(poscar)) != elements:
            logger.warning(
                f"Species in '{poscar}' ({species}) do not match POTCAR '{potcar}' ({elements})."
            )
            return None

    return float(sum(count * block.zval for count, block in zip(counts, blocks)))


def last_outcar_nelect(outcar: Path) -> float | None:
    """
    Get the last number of electrons reported in an OUTCAR file.

    Returns:
        float | None: The value of the last 'NELECT =' field or None
            if the file does not exist or does not report it.
    """
    if not outcar.is_file():
        return None

    nelect = None
    with outcar.open(errors="replace") as file:
        for line in file:
            if "NELECT" in line and (match := _OUTCAR_NELECT.search(line)):
                nelect = float(match.group(1))

    return nelect


def compute_for_directory(
    directory: Path, override_dir: Path, strict: bool = False
) -> float | None:
    """
    Compute the number of valence electrons of a job directory.

    Uses the job's CONTCAR (or POSCAR) and the POTCAR selected with the run-wide
    override in place.

    Args:
        directory (Path): The job directory.
        override_dir (Path): Directory with run-wide overrides.
        strict (bool): Require POTCAR elements to match POSCAR species labels.

    Returns:
        float | None: The number of electrons or None if it cannot be computed.
    """
    return compute(
        resolve(CFG.files.potcar, directory, override_dir),
        resolve_structure(directory),
        strict,
    )
