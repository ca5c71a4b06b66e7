# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Submission of prepared jobs.

`decide` turns a safety report into a `SubmissionPlan` according to the
run's safety level; `Submitter` hands the planned jobs to the batch system.
"""

from .decider import decide
from .submitter import Submitter

__all__ = ["Submitter", "decide"]
