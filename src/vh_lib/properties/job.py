# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Records handed from one stage of a vh run to the next.

Preparation produces a `PreparedBatch`, safety checking turns it into a
`SafetyReport`, and the submission decision produces a `SubmissionPlan`.
All of them are immutable; each stage consumes the complete output of the
previous one.
"""

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from .enums import SafetyLevel


@dataclass(frozen=True)
class PreparedJob:
    """
    Job directory produced by the preparation stage.
    """

    # Name of the job directory, e.g. 'Cd_i_-1'. Unique within a run.
    name: str
    # Path to the job directory.
    directory: Path
    # Charge encoded in the directory name.
    charge: int
    # Number of electrons written into or found in INCAR, if known.
    nelect: float | None = None


@dataclass(frozen=True)
class PreparedBatch:
    """
    All jobs prepared during a run in the order they were prepared.
    """

    jobs: tuple[PreparedJob, ...] = ()

    def __len__(self) -> int:
        return len(self.jobs)

    def __iter__(self):
        return iter(self.jobs)

    def names(self) -> list[str]:
        """Names of the prepared jobs."""
        return [job.name for job in self.jobs]


@dataclass(frozen=True)
class SafetyVerdict:
    """
    Outcome of the safety check of a single job.
    """

    job: PreparedJob
    # Human-readable reasons why the job is unsafe. Empty for safe jobs.
    reasons: tuple[str, ...] = ()

    @property
    def is_safe(self) -> bool:
        """Check whether no problem was detected."""
        return not self.reasons

    @property
    def reason(self) -> str | None:
        """All reasons joined into one string or None for safe jobs."""
        return "; ".join(self.reasons) if self.reasons else None


@dataclass(frozen=True)
class SafetyReport:
    """
    Safety verdicts of all jobs of a batch.
    """

    batch: PreparedBatch
    verdicts: tuple[SafetyVerdict, ...] = ()

    @property
    def unsafe_reasons(self) -> MappingProxyType[str, str]:
        """Read-only mapping of unsafe job names to their reasons."""
        return MappingProxyType(
            {v.job.name: v.reason for v in self.verdicts if v.reason is not None}
        )

    def isSafe(self, job: PreparedJob) -> bool:
        """Check whether the job passed its safety check."""
        return job.name not in self.unsafe_reasons

    def hasUnsafe(self) -> bool:
        """Check whether any job of the batch failed its safety check."""
        return any(not v.is_safe for v in self.verdicts)


@dataclass(frozen=True)
class SubmissionPlan:
    """
    Jobs selected for submission by the submission policy.
    """

    safety: SafetyLevel
    # True if submission was disabled for the run.
    dry_run: bool
    jobs: tuple[PreparedJob, ...] = field(default_factory=tuple)

    def names(self) -> list[str]:
        """Names of the jobs selected for submission."""
        return [job.name for job in self.jobs]
