# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from vh_lib.core.logger import get_logger
from vh_lib.properties import SafetyLevel, SafetyReport, SubmissionPlan

logger = get_logger(__name__)


def decide(report: SafetyReport, safety: SafetyLevel, dry_run: bool) -> SubmissionPlan:
    """
    Select the jobs of a checked batch that are to be submitted.

    - IGNORE: every prepared job is submitted.
    - SAFE_ONLY: only the jobs that passed their safety check are submitted.
    - ALL_OR_NOTHING: all jobs are submitted if every job is safe, otherwise none is.

    A dry run never submits anything. The prepared order of jobs is preserved.

    Args:
        report (SafetyReport): Safety verdicts of the prepared batch.
        safety (SafetyLevel): Submission strictness of the run.
        dry_run (bool): True if submission is disabled.

    Returns:
        SubmissionPlan: The jobs to submit.
    """
    if dry_run:
        logger.debug("Dry run: no job selected for submission.")
        return SubmissionPlan(safety, True)

    jobs = report.batch.jobs
    match safety:
        case SafetyLevel.IGNORE:
            selected = jobs
        case SafetyLevel.SAFE_ONLY:
            selected = tuple(job for job in jobs if report.isSafe(job))
        case SafetyLevel.ALL_OR_NOTHING:
            if report.hasUnsafe():
                logger.warning(
                    f"Aborting submission (safety={safety}): unsafe jobs detected."
                )
                selected = ()
            else:
                selected = jobs

    logger.debug(f"Selected for submission: {' '.join(job.name for job in selected)}")
    return SubmissionPlan(safety, False, tuple(selected))
