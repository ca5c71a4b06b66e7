# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Orchestration of a complete vh run: prepare, check, decide, submit.
"""

from .runner import Pipeline, RunResult

__all__ = ["Pipeline", "RunResult"]
