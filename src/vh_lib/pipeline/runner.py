# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from dataclasses import dataclass, field
from pathlib import Path

from vh_lib.core.config import CFG
from vh_lib.core.logger import attach_log_file, detach_log_file, get_logger
from vh_lib.prepare import Preparer
from vh_lib.properties import PreparedBatch, RunSettings, SafetyReport, SubmissionPlan
from vh_lib.safety import SafetyChecker
from vh_lib.submit import Submitter, decide

logger = get_logger(__name__)


@dataclass(frozen=True)
class RunResult:
    """
    Outcome of a complete vh run.
    """

    settings: RunSettings
    batch: PreparedBatch
    report: SafetyReport
    plan: SubmissionPlan
    # Path to the run log file.
    log_file: Path
    # Output of the submit command for each submitted job.
    submitted: dict[str, str] = field(default_factory=dict)


class Pipeline:
    """
    Runs the three stages of a vh run one after another.

    All jobs are prepared first, then all of them are safety-checked, and only
    then is the submission decided and performed. Each stage consumes the
    complete output of the previous one.
    """

    def __init__(self, settings: RunSettings):
        self._settings = settings
        self._log_file = settings.work_dir / CFG.files.log_file

    def run(self) -> RunResult:
        """
        Execute the run and write its log file.

        Returns:
            RunResult: Everything the run produced.

        Raises:
            VHError: If the run log cannot be opened, a fatal precondition fails
                during preparation or a submission fails.
        """
        handler = attach_log_file(self._log_file)
        try:
            logger.info("=== Starting ===")
            logger.info(self._settings.describe())

            batch = Preparer(self._settings).prepare()
            report = SafetyChecker().checkAll(batch)
            plan = decide(report, self._settings.safety, not self._settings.submit)
            submitted = Submitter(self._settings.batch_system).submit(plan)

            result = RunResult(
                self._settings, batch, report, plan, self._log_file, submitted
            )
            self._logSummary(result)
            return result
        finally:
            detach_log_file(handler)

    @staticmethod
    def _logSummary(result: RunResult) -> None:
        """
        Write the outcome of the run into the log at debug level.
        """
        logger.debug("=== Summary ===")
        logger.debug(f"Created jobs ({len(result.batch)}): {' '.join(result.batch.names())}")

        if reasons := result.report.unsafe_reasons:
            logger.debug(f"Unsafe jobs ({len(reasons)}):")
            for name, reason in reasons.items():
                logger.debug(f"  - {name}: {reason}")

        if result.plan.dry_run:
            logger.debug("Dry-run: no jobs submitted.")
        else:
            logger.debug(f"Submission policy: safety={result.plan.safety}")
            logger.debug(
                f"Submitted ({len(result.submitted)}): {' '.join(result.submitted)}"
            )
