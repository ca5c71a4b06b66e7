# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from pathlib import Path

import pytest


def poscar_text(species: str = "Cd Te", counts: str = "8 7") -> str:
    return (
        "test structure\n"
        "1.0\n"
        "  6.5 0.0 0.0\n"
        "  0.0 6.5 0.0\n"
        "  0.0 0.0 6.5\n"
        f"  {species}\n"
        f"  {counts}\n"
        "Direct\n"
    )


def potcar_text(*blocks: tuple[str, float]) -> str:
    text = ""
    for element, zval in blocks:
        text += (
            f"  PAW_PBE {element} 06Sep2000\n"
            f"   VRHFIN ={element}: s p\n"
            f"   TITEL  = PAW_PBE {element} 06Sep2000\n"
            f"   POMASS =  100.000; ZVAL   =    {zval:.3f}    mass and valenz\n"
            " End of Dataset\n"
        )
    return text


KPOINTS = "Automatic mesh\n0\nGamma\n  2 2 2\n  0 0 0\n"


@pytest.fixture
def make_job():
    """
    Factory creating a VASP job directory with all required inputs.

    POSCAR has species 'Cd Te' with counts '8 7' and POTCAR valences 4 and 6
    by default, giving 74 valence electrons.
    """

    def _make_job(
        directory: Path,
        incar: str = "ENCUT = 400\n",
        species: str = "Cd Te",
        counts: str = "8 7",
        potcar: list[tuple[str, float]] | None = None,
        structure: str | None = "POSCAR",
        extra: dict[str, str] | None = None,
    ) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        if structure:
            (directory / structure).write_text(poscar_text(species, counts))
        (directory / "INCAR").write_text(incar)
        (directory / "KPOINTS").write_text(KPOINTS)
        (directory / "POTCAR").write_text(
            potcar_text(*(potcar or [("Cd", 4.0), ("Te", 6.0)]))
        )
        (directory / "job.vasp6").write_text("#!/bin/bash\nvasp_std\n")
        for name, content in (extra or {}).items():
            (directory / name).write_text(content)
        return directory

    return _make_job
