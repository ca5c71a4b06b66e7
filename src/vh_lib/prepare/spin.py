# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from pathlib import Path

from vh_lib.core.config import CFG
from vh_lib.core.logger import get_logger
from vh_lib.incar import IncarFile, delete_key

logger = get_logger(__name__)


def round_nelect(nelect: float) -> int:
    """Round a number of electrons half up to an integer."""
    return int(nelect + 0.5)


def apply_spin_parity(destination: Path, nelect: float | None, enabled: bool) -> None:
    """
    Drop spin polarization from jobs with an even number of electrons.

    If enabled and the job's INCAR sets ISPIN = 2, the ISPIN line is removed
    for an even (rounded) number of electrons and kept for an odd one.

    Args:
        destination (Path): Directory of the prepared job.
        nelect (float | None): Number of electrons of the job. Nothing is done if unknown.
        enabled (bool): Whether spin handling is enabled for the run.
    """
    if not enabled or nelect is None:
        return

    incar_path = destination / CFG.files.incar
    ispin = CFG.tags.ispin
    if IncarFile.fromFile(incar_path).getInt(ispin) != CFG.tags.ispin_polarized:
        return

    if (rounded := round_nelect(nelect)) % 2 == 0:
        delete_key(ispin, incar_path)
        logger.info(
            f"Removed {ispin}={CFG.tags.ispin_polarized} (even NELECT={rounded}) in '{incar_path}'."
        )
    else:
        logger.info(
            f"Retained {ispin}={CFG.tags.ispin_polarized} (odd NELECT={rounded}) in '{incar_path}'."
        )
