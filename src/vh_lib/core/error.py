# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Exception types used throughout vh.

Unsafe jobs are not errors: they are recorded as safety verdicts and reported
in the run summary. `VHError` signals a precondition the pipeline cannot
reason about (missing input, underivable NELECT, nothing to prepare, failed
submission) and aborts the whole run.
"""

from vh_lib.core.config import CFG


class VHError(Exception):
    """Common exception type for all vh errors that abort a run."""

    exit_code = CFG.exit_codes.default
