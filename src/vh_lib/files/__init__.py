# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Selection and copying of job input files.

Inputs placed in the working directory of a run override the inputs of the
individual source jobs. The relaxed structure (CONTCAR) is preferred over the
initial one (POSCAR).
"""

from .resolver import copy_inputs, resolve, resolve_structure

__all__ = ["copy_inputs", "resolve", "resolve_structure"]
