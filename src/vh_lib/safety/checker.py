# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from vh_lib.core.common import is_nonempty_file
from vh_lib.core.config import CFG
from vh_lib.core.error import VHError
from vh_lib.core.logger import get_logger
from vh_lib.incar import IncarFile
from vh_lib.properties import (
    PreparedBatch,
    PreparedJob,
    SafetyReport,
    SafetyVerdict,
)

logger = get_logger(__name__)


class SafetyChecker:
    """
    Inspects prepared jobs for restart requests that cannot be honored.

    The checker never modifies a job and never raises: missing files are
    reported as reasons of an unsafe verdict.
    """

    def check(self, job: PreparedJob) -> SafetyVerdict:
        """
        Check a single prepared job.

        A job is unsafe if its INCAR is missing, if it sets ICHARG = 1 without
        a non-empty CHGCAR, or if it sets ISTART to 1, 2 or 3 without a WAVECAR.

        Args:
            job (PreparedJob): The job to check.

        Returns:
            SafetyVerdict: The verdict with all detected reasons.
        """
        tags, files = CFG.tags, CFG.files
        try:
            incar = IncarFile.fromFile(job.directory / files.incar)
        except VHError:
            reason = f"{files.incar} missing"
            logger.info(f"Unsafe ({job.name}): {reason}")
            return SafetyVerdict(job, (reason,))

        reasons = []

        if incar.getInt(tags.icharg) == tags.icharg_read and not is_nonempty_file(
            job.directory / files.chgcar
        ):
            reasons.append(
                f"{tags.icharg}={tags.icharg_read} but {files.chgcar} missing or empty"
            )

        istart = incar.getInt(tags.istart)
        if istart in tags.istart_restart and not (job.directory / files.wavecar).is_file():
            reasons.append(f"{tags.istart}={istart} but {files.wavecar} missing")

        for reason in reasons:
            logger.debug(f"Unsafe ({job.name}): {reason}")

        return SafetyVerdict(job, tuple(reasons))

    def checkAll(self, batch: PreparedBatch) -> SafetyReport:
        """
        Check all jobs of a prepared batch.

        Checks are always performed, even if safety checks are ignored for
        submission, so that problems are reported.

        Returns:
            SafetyReport: Verdicts of all jobs in the order of the batch.
        """
        verdicts = []
        for job in batch:
            verdict = self.check(job)
            if verdict.is_safe:
                logger.info(f"Safe: {job.name}")
            else:
                logger.info(f"Unsafe: {job.name} :: {verdict.reason}")
            verdicts.append(verdict)

        return SafetyReport(batch, tuple(verdicts))
