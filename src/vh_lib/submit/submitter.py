# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from vh_lib.batch import BatchMeta
from vh_lib.core.config import CFG
from vh_lib.core.logger import get_logger
from vh_lib.properties import SubmissionPlan

logger = get_logger(__name__)


class Submitter:
    """
    Hands the jobs of a submission plan over to a batch system.
    """

    def __init__(self, batch_system: str | None = None):
        """
        Initialize a Submitter.

        Args:
            batch_system (str | None): Name of the batch system to use.
                If None, it is taken from the environment or guessed
                once there is something to submit.
        """
        self._batch_system_name = batch_system

    def submit(self, plan: SubmissionPlan) -> dict[str, str]:
        """
        Submit all jobs of the plan in order.

        Each job is submitted from inside its directory using the configured job script.

        Args:
            plan (SubmissionPlan): Jobs selected for submission.

        Returns:
            dict[str, str]: Output of the submit command (job ID) for each submitted job.

        Raises:
            VHError: If the batch system cannot be determined or a submission fails.
                Jobs submitted before the failure stay submitted.
        """
        if plan.dry_run:
            logger.info("Dry-run: submission disabled.")
            return {}

        if not plan.jobs:
            logger.info("Nothing to submit.")
            return {}

        BatchSystem = BatchMeta.obtain(self._batch_system_name)
        logger.debug(f"Submitting using batch system '{str(BatchSystem)}'.")

        submitted = {}
        for job in plan.jobs:
            logger.info(f"Submitting: {job.name}")
            submitted[job.name] = BatchSystem.jobSubmit(job.directory, CFG.files.job_script)
            logger.debug(f"Submitted {job.name}: {submitted[job.name]}")

        return submitted
