# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import re
import sys
from pathlib import Path
from typing import NoReturn

import click
from click_option_group import optgroup
from rich.console import Console

from vh_lib.core.click_format import GNUHelpColorsCommand
from vh_lib.core.config import CFG
from vh_lib.core.error import VHError
from vh_lib.core.logger import get_logger, set_verbose
from vh_lib.pipeline import Pipeline
from vh_lib.properties import Mode, RunSettings, SafetyLevel, Stage
from vh_lib.summary import SummaryPresenter

logger = get_logger(__name__)


def _parse_charges(
    ctx: click.Context, param: click.Parameter, value: str | None
) -> list[int] | None:
    """
    Parse a space- or comma-separated list of integer charges.
    """
    if value is None:
        return None

    try:
        return [int(token) for token in re.split(r"[\s,]+", value.strip()) if token]
    except ValueError:
        raise click.BadParameter(f"'{value}' is not a list of integers.")


@click.command(
    short_help="Prepare and submit VASP jobs.",
    help=f"""
Prepare VASP job directories in the current directory and submit them.

With `--mode relax --stage initial`, charged variants are created from the neutral
reference directories (`*_0`) found in the neutral root. Otherwise, the job
directories of the source root are continued.

{CFG.files.incar}, {CFG.files.kpoints}, {CFG.files.potcar} and {CFG.files.job_script} placed in the current directory
override the files of every job. The run is logged into `{CFG.files.log_file}`.
""",
    cls=GNUHelpColorsCommand,
    help_options_color="bright_blue",
)
@optgroup.group(f"{click.style('Workflow', fg='yellow')}")
@optgroup.option(
    "--mode",
    type=click.Choice(["relax", "static"], case_sensitive=False),
    required=True,
    help="Type of the calculation to prepare.",
)
@optgroup.option(
    "--stage",
    type=click.Choice(["initial", "final"], case_sensitive=False),
    default=None,
    help="Stage of the relaxation. Required for `--mode relax`, not allowed for `--mode static`.",
)
@optgroup.option(
    "--source-root",
    type=click.Path(path_type=Path, file_okay=False),
    required=True,
    help="Directory containing the job directories to continue (searched one level deep).",
)
@optgroup.option(
    "--neutral-root",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory containing the neutral reference directories. Defaults to the source root.",
)
@optgroup.group(f"{click.style('Selection', fg='yellow')}")
@optgroup.option(
    "-Q",
    "--charged-only",
    is_flag=True,
    help="Only handle charged job directories.",
)
@optgroup.option(
    "-N",
    "--neutral-only",
    is_flag=True,
    help="Only handle neutral job directories.",
)
@optgroup.option(
    "--charges",
    type=str,
    default=None,
    callback=_parse_charges,
    help=f"Charges to create from neutral references, e.g. '-1 1'. Defaults to '{' '.join(str(q) for q in CFG.defaults.charges)}'.",
)
@optgroup.group(f"{click.style('Preparation', fg='yellow')}")
@optgroup.option(
    "--spin",
    is_flag=True,
    help="Remove ISPIN = 2 from jobs with an even number of electrons.",
)
@optgroup.option(
    "--strict-species",
    is_flag=True,
    help="Require POTCAR elements to match the POSCAR species when computing NELECT.",
)
@optgroup.group(f"{click.style('Submission', fg='yellow')}")
@optgroup.option(
    "--safety",
    type=click.IntRange(0, 2),
    default=None,
    help=(
        "Submission strictness. 0 = submit all jobs, 1 = submit only safe jobs, "
        f"2 = submit nothing if any job is unsafe. Defaults to {CFG.defaults.safety}."
    ),
)
@optgroup.option(
    "-q",
    "--dry-run",
    is_flag=True,
    help="Prepare the jobs but do not submit them.",
)
@optgroup.option(
    "--batch-system",
    type=str,
    default=None,
    help=f"Name of the batch system to submit to. If not specified, the environment variable '{CFG.env_vars.batch_system}' is used or the system is auto-detected.",
)
@optgroup.group(f"{click.style('Output', fg='yellow')}")
@optgroup.option(
    "-v", "--verbose", is_flag=True, help="Print debug messages to the terminal."
)
@optgroup.option(
    "--yaml", is_flag=True, help="Print the run summary in YAML format."
)
def prepare(
    mode: str,
    stage: str | None,
    source_root: Path,
    neutral_root: Path | None,
    charged_only: bool,
    neutral_only: bool,
    charges: list[int] | None,
    spin: bool,
    strict_species: bool,
    safety: int | None,
    dry_run: bool,
    batch_system: str | None,
    verbose: bool,
    yaml: bool,
) -> NoReturn:
    """
    Prepare VASP job directories and submit them.
    """
    if verbose:
        set_verbose(True)

    try:
        settings = RunSettings(
            Mode.fromStr(mode),
            Stage.fromStr(stage) if stage else None,
            source_root,
            neutral_root=neutral_root,
            charged_only=charged_only,
            neutral_only=neutral_only,
            charges=charges,
            spin=spin,
            safety=SafetyLevel.fromInt(safety) if safety is not None else None,
            submit=not dry_run,
            strict_species=strict_species,
            batch_system=batch_system,
        )

        result = Pipeline(settings).run()

        presenter = SummaryPresenter(result)
        if yaml:
            presenter.dumpYaml()
        else:
            console = Console()
            console.print(presenter.createSummaryPanel(console))
        sys.exit(0)
    except VHError as e:
        logger.error(e)
        sys.exit(CFG.exit_codes.default)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)
