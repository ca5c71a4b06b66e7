# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from pathlib import Path

from vh_lib.core.common import copy_file
from vh_lib.core.config import CFG
from vh_lib.core.error import VHError
from vh_lib.core.logger import get_logger

logger = get_logger(__name__)


def resolve(name: str, source_dir: Path, override_dir: Path) -> Path | None:
    """
    Select the file supplying an input for a job.

    A file in the override directory (the working directory of the run) takes
    precedence over the file of the same name in the job's source directory.

    Args:
        name (str): Name of the file, e.g. 'INCAR'.
        source_dir (Path): Directory of the job the input is taken from.
        override_dir (Path): Directory with run-wide overrides.

    Returns:
        Path | None: Path to the selected file or None if neither exists.
    """
    for candidate in (override_dir / name, source_dir / name):
        if candidate.is_file():
            return candidate

    return None


def resolve_structure(directory: Path) -> Path | None:
    """
    Select the structure file describing the current atomic coordinates.

    The final structure (CONTCAR) is preferred over the initial one (POSCAR).

    Returns:
        Path | None: Path to the structure file or None if neither exists.
    """
    for name in (CFG.files.contcar, CFG.files.poscar):
        if (candidate := directory / name).is_file():
            return candidate

    return None


def copy_inputs(source_dir: Path, destination: Path, override_dir: Path) -> None:
    """
    Copy all required inputs of a job into a destination directory.

    The structure is always stored as POSCAR. INCAR, KPOINTS, POTCAR and the
    job script honor the run-wide overrides.

    Args:
        source_dir (Path): Directory of the job the inputs are taken from.
        destination (Path): Directory of the prepared job. Created if missing.
        override_dir (Path): Directory with run-wide overrides.

    Raises:
        VHError: If any required input cannot be found.
    """
    destination.mkdir(parents=True, exist_ok=True)

    if not (structure := resolve_structure(source_dir)):
        raise VHError(
            f"Missing {CFG.files.poscar}/{CFG.files.contcar} in '{source_dir}'."
        )
    copy_file(structure, destination / CFG.files.poscar)

    # resolve everything first so that a missing input is reported before copying
    sources = {}
    for name in CFG.files.required_inputs:
        if not (path := resolve(name, source_dir, override_dir)):
            raise VHError(f"Missing {name} (global or in '{source_dir}').")
        sources[name] = path

    for name, path in sources.items():
        logger.debug(f"Copying '{path}' to '{destination / name}'.")
        copy_file(path, destination / name)
