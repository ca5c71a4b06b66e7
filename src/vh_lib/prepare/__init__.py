# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Preparation of VASP job directories.

`Preparer` implements both workflows of a run: creating charged variants of
neutral reference directories (initial relaxation) and continuing existing
jobs (final relaxation, static runs). For every job it copies the inputs,
sets NELECT, reuses CHGCAR/WAVECAR according to `transfer_artifacts`, and
applies `apply_spin_parity`.
"""

from .artifacts import transfer_artifacts
from .preparer import Preparer
from .spin import apply_spin_parity

__all__ = ["Preparer", "apply_spin_parity", "transfer_artifacts"]
