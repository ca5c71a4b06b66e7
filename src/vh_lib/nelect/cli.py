# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import sys
from pathlib import Path
from typing import NoReturn

import click

from vh_lib.core.click_format import GNUHelpColorsCommand
from vh_lib.core.common import format_nelect
from vh_lib.core.config import CFG
from vh_lib.core.error import VHError
from vh_lib.core.logger import get_logger
from vh_lib.nelect.calculator import compute_for_directory

logger = get_logger(__name__)


@click.command(
    short_help="Compute the number of electrons of a job directory.",
    help=f"""Compute the number of valence electrons of a VASP job directory.

{click.style("DIRECTORY", fg="green")}   The job directory containing {CFG.files.potcar} and {CFG.files.contcar} or {CFG.files.poscar}.

A {CFG.files.potcar} placed in the current directory is used instead of the one in DIRECTORY.""",
    cls=GNUHelpColorsCommand,
    help_options_color="bright_blue",
)
@click.argument(
    "directory",
    type=click.Path(path_type=Path, file_okay=False),
    metavar=click.style("DIRECTORY", fg="green"),
)
@click.option(
    "--charge",
    type=int,
    default=0,
    help="Charge of the system. The printed value is NELECT minus the charge.",
)
@click.option(
    "--strict-species",
    is_flag=True,
    help="Require POTCAR elements to match the POSCAR species.",
)
def nelect(directory: Path, charge: int, strict_species: bool) -> NoReturn:
    """
    Compute the number of valence electrons of a job directory.
    """
    try:
        if not directory.is_dir():
            raise VHError(f"Directory '{directory}' does not exist.")

        value = compute_for_directory(directory, Path.cwd(), strict_species)
        if value is None:
            raise VHError(f"Failed to compute NELECT for '{directory}'.")

        print(format_nelect(value - charge))
        sys.exit(0)
    except VHError as e:
        logger.error(e)
        sys.exit(CFG.exit_codes.default)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)
