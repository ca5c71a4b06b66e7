# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Derivation of the number of electrons (NELECT) of a VASP job.

The number of valence electrons is the sum of the atom counts listed on line 7
of POSCAR multiplied by the ZVAL values of the corresponding POTCAR blocks.
Counts and valences are paired by position; `compute` returns None rather
than a wrong number whenever their lengths differ. An opt-in strict mode also
compares the POTCAR elements with the POSCAR species labels.

For continued jobs, the last NELECT reported in a previous OUTCAR can be read
with `last_outcar_nelect`.
"""

from .calculator import (
    PotcarBlock,
    compute,
    compute_for_directory,
    last_outcar_nelect,
    read_atom_counts,
    read_potcar,
    read_species,
)

__all__ = [
    "PotcarBlock",
    "compute",
    "compute_for_directory",
    "last_outcar_nelect",
    "read_atom_counts",
    "read_potcar",
    "read_species",
]
