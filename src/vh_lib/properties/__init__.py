# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Structured data types describing a vh run.

This package contains the enumerations selecting a run's behavior
(`Mode`, `Stage`, `Workflow`, `Selection`, `SafetyLevel`), the validated
`RunSettings`, and the immutable records passed between the stages of the
pipeline (`PreparedJob`, `PreparedBatch`, `SafetyVerdict`, `SafetyReport`,
`SubmissionPlan`).
"""

from .enums import Mode, SafetyLevel, Selection, Stage, Workflow
from .job import (
    PreparedBatch,
    PreparedJob,
    SafetyReport,
    SafetyVerdict,
    SubmissionPlan,
)
from .settings import RunSettings

__all__ = [
    "Mode",
    "PreparedBatch",
    "PreparedJob",
    "RunSettings",
    "SafetyLevel",
    "SafetyReport",
    "SafetyVerdict",
    "Selection",
    "Stage",
    "SubmissionPlan",
    "Workflow",
]
