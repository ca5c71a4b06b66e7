# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from pathlib import Path

from vh_lib.core.common import copy_file, is_nonempty_file
from vh_lib.core.config import CFG
from vh_lib.core.logger import get_logger
from vh_lib.files import resolve_structure
from vh_lib.incar import IncarFile, set_or_append
from vh_lib.properties import SafetyLevel
from vh_lib.structure import StructureSignature, compatible, signature

logger = get_logger(__name__)


def transfer_artifacts(source_dir: Path, destination: Path, safety: SafetyLevel) -> None:
    """
    Decide whether CHGCAR and WAVECAR of a source job are reused by a prepared job.

    With safety checks ignored, both files are copied whenever they exist.
    Otherwise the files are only reused when the destination INCAR requests them
    and the source and destination structures have the same signature:

    - ICHARG = 1: CHGCAR is copied if it is non-empty, otherwise ICHARG is
      changed to 2 on its own line.
    - ISTART in {1, 2, 3}: WAVECAR is copied if it exists, otherwise nothing is changed.

    Mismatching structures skip both files without editing INCAR.

    Args:
        source_dir (Path): Directory of the job the artifacts come from.
        destination (Path): Directory of the prepared job (containing INCAR and POSCAR).
        safety (SafetyLevel): Submission strictness of the run.
    """
    chgcar, wavecar = CFG.files.chgcar, CFG.files.wavecar

    if safety == SafetyLevel.IGNORE:
        for name in (chgcar, wavecar):
            if (source_dir / name).is_file():
                copy_file(source_dir / name, destination / name)
        logger.info(
            f"Force-copied {chgcar}/{wavecar} (safety={safety}) from '{source_dir}' to '{destination}'."
        )
        return

    incar_path = destination / CFG.files.incar
    incar = IncarFile.fromFile(incar_path)
    tags = CFG.tags

    source_structure = resolve_structure(source_dir)
    same_structure = compatible(
        signature(source_structure) if source_structure else StructureSignature("", ""),
        signature(destination / CFG.files.poscar),
    )
    logger.debug(f"Structures of '{source_dir}' and '{destination}' match: {same_structure}.")

    if incar.getInt(tags.icharg) == tags.icharg_read and same_structure:
        if is_nonempty_file(source_dir / chgcar):
            copy_file(source_dir / chgcar, destination / chgcar)
            logger.info(f"Copied {chgcar} '{source_dir}' -> '{destination}'.")
        else:
            set_or_append(tags.icharg, str(tags.icharg_fallback), incar_path)
            logger.info(
                f"{chgcar} empty/missing; set {tags.icharg}={tags.icharg_fallback} in '{incar_path}'."
            )

    if incar.getInt(tags.istart) in tags.istart_restart and same_structure:
        if (source_dir / wavecar).is_file():
            copy_file(source_dir / wavecar, destination / wavecar)
            logger.info(f"Copied {wavecar} '{source_dir}' -> '{destination}'.")
        else:
            logger.info(f"No {wavecar} copied for '{destination}'.")
