# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Batch-system support for vh.

This module defines the abstract `BatchInterface`, the `BatchMeta` registry
used to select a batch system by name, environment variable or availability,
and the PBS and Slurm backends. PBS is registered first and is therefore
preferred when guessing.
"""

from .interface import BatchInterface
from .meta import BatchMeta
from .pbs import PBS
from .slurm import Slurm

__all__ = ["BatchInterface", "BatchMeta", "PBS", "Slurm"]
