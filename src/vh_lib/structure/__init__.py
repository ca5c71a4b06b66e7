# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Structural signatures of POSCAR/CONTCAR files.

Charge densities and wavefunctions of a previous run are only reused when the
source and the destination structure list the same species with the same atom
counts in the same order.
"""

from .signature import StructureSignature, compatible, read_lines, signature

__all__ = ["StructureSignature", "compatible", "read_lines", "signature"]
