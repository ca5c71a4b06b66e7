# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from pathlib import Path

from vh_lib.core.common import (
    construct_job_name,
    format_nelect,
    get_base_name,
    get_charge,
    list_subdirectories,
)
from vh_lib.core.config import CFG
from vh_lib.core.error import VHError
from vh_lib.core.logger import get_logger
from vh_lib.files import copy_inputs
from vh_lib.incar import IncarFile, set_or_append
from vh_lib.nelect import compute_for_directory, last_outcar_nelect
from vh_lib.properties import PreparedBatch, PreparedJob, RunSettings, Workflow

from .artifacts import transfer_artifacts
from .spin import apply_spin_parity

logger = get_logger(__name__)


class Preparer:
    """
    Materializes the job directories of a run inside its working directory.

    Responsibilities:
        - Discover neutral references or existing jobs to continue.
        - Copy the required inputs honoring run-wide overrides.
        - Set NELECT of charged jobs.
        - Reuse CHGCAR/WAVECAR where safe and apply spin-parity handling.

    No job is submitted during preparation.
    """

    def __init__(self, settings: RunSettings):
        """
        Initialize a Preparer.

        Args:
            settings (RunSettings): Validated settings of the run.
        """
        self._settings = settings
        self._work_dir = settings.work_dir

    def prepare(self) -> PreparedBatch:
        """
        Prepare all job directories of the run.

        Returns:
            PreparedBatch: The prepared jobs in the order they were prepared.

        Raises:
            VHError: If no directory to prepare is found, a required input is missing,
                or the number of electrons of a job cannot be derived. Directories
                prepared before the failure are left in place.
        """
        if self._settings.workflow == Workflow.CREATE_CHARGED:
            logger.info("Workflow: Create charged states from neutrals")
            jobs = self._createCharged()
        else:
            logger.info("Workflow: Continue existing runs (final/static)")
            jobs = self._continueExisting()

        return PreparedBatch(tuple(jobs))

    def _createCharged(self) -> list[PreparedJob]:
        """
        Create charged variants of all neutral reference directories.
        """
        neutral_root = self._settings.neutral_root
        neutrals = self._discoverNeutrals()
        if not neutrals:
            raise VHError(f"No *_0 neutral directories found under '{neutral_root}'.")
        logger.info(
            f"Discovered neutral bases: {' '.join(get_base_name(n.name) for n in neutrals)}"
        )

        jobs = []
        for neutral_dir in neutrals:
            base = get_base_name(neutral_dir.name)
            neutral_nelect = self._baselineNelect(neutral_dir)
            logger.info(f"Base {base}: NELECT(neutral)={format_nelect(neutral_nelect)}")

            for charge in self._settings.charges:
                if charge == CFG.defaults.neutral_charge:
                    continue
                jobs.append(self._createVariant(neutral_dir, base, charge, neutral_nelect))

        return jobs

    def _createVariant(
        self, neutral_dir: Path, base: str, charge: int, neutral_nelect: float
    ) -> PreparedJob:
        """
        Create a single charged variant of a neutral reference.
        """
        name = construct_job_name(base, charge)
        destination = self._work_dir / name
        logger.info(f"Creating {name} from '{neutral_dir}'")
        copy_inputs(neutral_dir, destination, self._work_dir)

        nelect = neutral_nelect - charge
        set_or_append(CFG.tags.nelect, format_nelect(nelect), destination / CFG.files.incar)
        logger.info(f"Set NELECT={format_nelect(nelect)} for {name}")

        transfer_artifacts(neutral_dir, destination, self._settings.safety)
        apply_spin_parity(destination, nelect, self._settings.spin)

        return PreparedJob(name, destination, charge, nelect)

    def _continueExisting(self) -> list[PreparedJob]:
        """
        Continue all selected job directories of the source root in the working directory.
        """
        sources = self._discoverSources()
        if not sources:
            raise VHError(f"No matching directories under '{self._settings.source_root}'.")
        logger.info(f"Discovered sources: {' '.join(s.name for s, _ in sources)}")

        return [self._continueJob(source, charge) for source, charge in sources]

    def _continueJob(self, source: Path, charge: int) -> PreparedJob:
        """
        Prepare the continuation of a single job.

        Charged jobs take NELECT from the last value reported in the source OUTCAR.
        If there is none, it is derived from the neutral reference of the job.
        Neutral jobs keep their INCAR but still get spin-parity handling
        if it sets NELECT.
        """
        name = source.name
        destination = self._work_dir / name
        incar_path = destination / CFG.files.incar
        logger.info(f"Preparing continuation: {name}")

        copy_inputs(source, destination, self._work_dir)
        transfer_artifacts(source, destination, self._settings.safety)

        if charge != CFG.defaults.neutral_charge:
            nelect = last_outcar_nelect(source / CFG.files.outcar)
            if nelect is None:
                nelect = self._neutralReferenceNelect(name) - charge

            set_or_append(CFG.tags.nelect, format_nelect(nelect), incar_path)
            logger.info(
                f"Set/confirmed NELECT={format_nelect(nelect)} for '{destination}' (charge={charge})"
            )
            apply_spin_parity(destination, nelect, self._settings.spin)
            return PreparedJob(name, destination, charge, nelect)

        incar = IncarFile.fromFile(incar_path)
        if not incar.hasKey(CFG.tags.nelect):
            return PreparedJob(name, destination, charge)

        if (nelect := incar.getFloat(CFG.tags.nelect)) is None:
            logger.warning(
                f"NELECT in '{incar_path}' is not a number; skipping spin handling."
            )
        apply_spin_parity(destination, nelect, self._settings.spin)
        return PreparedJob(name, destination, charge, nelect)

    def _neutralReferenceNelect(self, name: str) -> float:
        """
        Number of electrons of the neutral reference of a charged job.

        Raises:
            VHError: If the neutral reference directory does not exist
                or its number of electrons cannot be computed.
        """
        neutral_dir = self._settings.neutral_root / construct_job_name(
            get_base_name(name), CFG.defaults.neutral_charge
        )
        if not neutral_dir.is_dir():
            raise VHError(
                f"Cannot derive NELECT for {name}: neutral reference '{neutral_dir}' not found."
            )

        return self._baselineNelect(neutral_dir)

    def _baselineNelect(self, neutral_dir: Path) -> float:
        """
        Number of electrons of a neutral reference computed from its POSCAR and POTCAR.

        Raises:
            VHError: If the number of electrons cannot be computed.
        """
        nelect = compute_for_directory(
            neutral_dir, self._work_dir, self._settings.strict_species
        )
        if nelect is None:
            raise VHError(f"Failed to compute NELECT(neutral) for '{neutral_dir}'.")

        return nelect

    def _discoverNeutrals(self) -> list[Path]:
        """
        Find all neutral reference directories directly inside the neutral root.
        """
        suffix = f"_{CFG.defaults.neutral_charge}"
        return [
            d
            for d in list_subdirectories(self._settings.neutral_root)
            if d.name.endswith(suffix)
        ]

    def _discoverSources(self) -> list[tuple[Path, int]]:
        """
        Find all job directories directly inside the source root matching the selection.

        Returns:
            list[tuple[Path, int]]: Selected directories with their charges.
        """
        selection = self._settings.selection
        logger.info(f"Scanning '{self._settings.source_root}' for subdirectories (one level)")

        sources = []
        for directory in list_subdirectories(self._settings.source_root):
            if (charge := get_charge(directory.name)) is None:
                logger.debug(f"Skip (not matching pattern): {directory.name}")
            elif not selection.includes(charge):
                logger.debug(f"Skip ({selection}): {directory.name}")
            else:
                logger.debug(f"Include ({selection}): {directory.name}")
                sources.append((directory, charge))

        return sources
