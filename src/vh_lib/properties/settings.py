# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from dataclasses import dataclass
from pathlib import Path

from vh_lib.core.config import CFG
from vh_lib.core.error import VHError
from vh_lib.core.logger import get_logger

from .enums import Mode, SafetyLevel, Selection, Stage, Workflow

logger = get_logger(__name__)


@dataclass(init=False)
class RunSettings:
    """
    Dataclass containing validated settings of a single vh run.
    """

    mode: Mode
    stage: Stage | None
    source_root: Path
    neutral_root: Path
    selection: Selection
    charges: list[int]
    spin: bool
    safety: SafetyLevel
    submit: bool
    strict_species: bool
    batch_system: str | None
    work_dir: Path

    def __init__(
        self,
        mode: Mode,
        stage: Stage | None,
        source_root: Path,
        neutral_root: Path | None = None,
        charged_only: bool = False,
        neutral_only: bool = False,
        charges: list[int] | None = None,
        spin: bool = False,
        safety: SafetyLevel | None = None,
        submit: bool = True,
        strict_species: bool = False,
        batch_system: str | None = None,
        work_dir: Path | None = None,
    ):
        """
        Initialize run settings with validation checks.

        Args:
            mode (Mode): Type of the calculation to prepare.
            stage (Stage | None): Stage of a relaxation. Required for RELAX, forbidden for STATIC.
            source_root (Path): Directory containing the job directories (one level deep).
            neutral_root (Path | None): Directory containing the neutral reference
                directories. Defaults to `source_root`.
            charged_only (bool): Only handle charged job directories.
            neutral_only (bool): Only handle neutral job directories.
            charges (list[int] | None): Charges to create from neutral references.
                Defaults to the configured charges.
            spin (bool): Remove ISPIN = 2 from jobs with an even number of electrons.
            safety (SafetyLevel | None): Submission strictness. Defaults to the configured level.
            submit (bool): Submit the prepared jobs. False means dry run.
            strict_species (bool): Require POTCAR elements to match POSCAR species
                when computing the number of electrons.
            batch_system (str | None): Name of the batch system to submit to.
                If None, it is taken from the environment or guessed.
            work_dir (Path | None): Directory in which jobs are prepared and which
                holds run-wide input overrides. Defaults to the current directory.

        Raises:
            VHError: If the combination of settings is invalid or a root directory does not exist.
        """
        self.mode = mode
        self.stage = stage
        self.source_root = source_root
        self.neutral_root = neutral_root or source_root
        self.charges = list(CFG.defaults.charges if charges is None else charges)
        self.spin = spin
        self.safety = (
            safety if safety is not None else SafetyLevel.fromInt(CFG.defaults.safety)
        )
        self.submit = submit
        self.strict_species = strict_species
        self.batch_system = batch_system
        self.work_dir = work_dir or Path.cwd()

        if self.mode == Mode.RELAX and self.stage is None:
            raise VHError("Stage is required for mode 'relax' (initial or final).")

        if self.mode == Mode.STATIC and self.stage is not None:
            raise VHError("Stage is not allowed for mode 'static'.")

        if not self.source_root.is_dir():
            raise VHError(f"Source root not found: '{self.source_root}'.")

        if charged_only and neutral_only:
            raise VHError(
                "Cannot select both charged-only and neutral-only directories."
            )

        if charged_only:
            self.selection = Selection.CHARGED
        elif neutral_only:
            self.selection = Selection.NEUTRAL
        else:
            self.selection = Selection.ALL

        if self.workflow == Workflow.CREATE_CHARGED:
            if self.selection != Selection.CHARGED:
                raise VHError(
                    "Initial relaxation creates charged states only and requires charged-only selection."
                )
            if not self.neutral_root.is_dir():
                raise VHError(f"Neutral root not found: '{self.neutral_root}'.")

    @property
    def workflow(self) -> Workflow:
        """Workflow used to produce the job directories."""
        if self.mode == Mode.RELAX and self.stage == Stage.INITIAL:
            return Workflow.CREATE_CHARGED

        return Workflow.CONTINUE

    def describe(self) -> str:
        """One-line description of the settings for the run log."""
        return (
            f"Mode={self.mode} Stage={self.stage or 'none'} Safety={self.safety} "
            f"Submit={self.submit} Spin={self.spin} Selection={self.selection} "
            f"Charges={' '.join(str(q) for q in self.charges)}"
        )
