# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Safety checks of prepared jobs.

A prepared job is unsafe when its INCAR requests a restart from a charge
density (ICHARG = 1) or from wavefunctions (ISTART = 1, 2, 3) that is not
available in the job directory. Unsafe jobs are not errors; their reasons are
recorded and the submission policy decides what happens to them.
"""

from .checker import SafetyChecker

__all__ = ["SafetyChecker"]
