# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core implementation of the vh command-line tool.

This package prepares VASP job directories for charged-defect calculations
and submits them to a batch system. It provides an INCAR editor, resolution
of input files with run-wide overrides, derivation of the number of electrons
from POSCAR and POTCAR, structure-signature comparison, reuse of CHGCAR and
WAVECAR, spin-parity handling, per-job safety checks and the submission policy.
"""

from .vh import __version__, cli

__all__ = [
    "__version__",
    "cli",
    "batch",
    "core",
    "files",
    "incar",
    "nelect",
    "pipeline",
    "prepare",
    "properties",
    "safety",
    "structure",
    "submit",
    "summary",
]
