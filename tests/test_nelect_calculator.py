# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from unittest.mock import patch

import pytest

from vh_lib.nelect import (
    PotcarBlock,
    compute,
    compute_for_directory,
    last_outcar_nelect,
    read_atom_counts,
    read_potcar,
    read_species,
)

HEADER = "title\n1.0\n5 0 0\n0 5 0\n0 0 5\n"


def _potcar(*blocks):
    text = ""
    for element, zval in blocks:
        text += (
            f"  PAW_PBE {element} 06Sep2000\n"
            f"   TITEL  = PAW_PBE {element} 06Sep2000\n"
            f"   POMASS =  100.000; ZVAL   =    {zval}    mass and valenz\n"
        )
    return text


@pytest.fixture
def job(tmp_path):
    (tmp_path / "POSCAR").write_text(HEADER + "Cd Te\n8 7\nDirect\n")
    (tmp_path / "POTCAR").write_text(_potcar(("Cd", "4.000"), ("Te", "6.000")))
    return tmp_path


def test_read_potcar_blocks(job):
    assert read_potcar(job / "POTCAR") == [
        PotcarBlock("PAW_PBE Cd 06Sep2000", 4.0),
        PotcarBlock("PAW_PBE Te 06Sep2000", 6.0),
    ]


def test_read_potcar_last_zval_in_block_wins(tmp_path):
    path = tmp_path / "POTCAR"
    path.write_text(
        "ZVAL = 99.0\n"
        "   TITEL  = PAW_PBE Cd 06Sep2000\n"
        "   ZVAL   =    2.000\n"
        "   zval   =    12.000\n"
    )

    assert [block.zval for block in read_potcar(path)] == [12.0]


def test_read_potcar_block_without_zval(tmp_path):
    path = tmp_path / "POTCAR"
    path.write_text("   TITEL  = PAW_PBE Cd 06Sep2000\n   TITEL  = PAW_PBE Te 06Sep2000\n ZVAL = 6\n")

    assert [block.zval for block in read_potcar(path)] == [None, 6.0]


@pytest.mark.parametrize(
    "title,element",
    [
        ("PAW_PBE Cd 06Sep2000", "Cd"),
        ("PAW_PBE Cd_sv 06Sep2000", "Cd"),
        ("PAW_PBE Te_GW/abc 06Sep2000", "Te"),
        ("", ""),
    ],
)
def test_potcar_block_element(title, element):
    assert PotcarBlock(title, 1.0).element == element


def test_read_atom_counts(job):
    assert read_atom_counts(job / "POSCAR") == [8, 7]


def test_read_atom_counts_invalid(tmp_path):
    path = tmp_path / "POSCAR"
    path.write_text(HEADER + "Cd Te\n8 x\n")

    assert read_atom_counts(path) is None


def test_read_atom_counts_empty_line(tmp_path):
    path = tmp_path / "POSCAR"
    path.write_text(HEADER + "Cd Te\n\n")

    assert read_atom_counts(path) is None


def test_read_atom_counts_short_file(tmp_path):
    path = tmp_path / "POSCAR"
    path.write_text(HEADER)

    assert read_atom_counts(path) is None


def test_read_species(job):
    assert read_species(job / "POSCAR") == ["Cd", "Te"]


def test_compute_sums_counts_times_valence(job):
    assert compute(job / "POTCAR", job / "POSCAR") == 74.0


def test_compute_is_independent_of_species_order(tmp_path):
    (tmp_path / "POSCAR").write_text(HEADER + "Te Cd\n7 8\n")
    (tmp_path / "POTCAR").write_text(_potcar(("Te", "6.0"), ("Cd", "4.0")))

    assert compute(tmp_path / "POTCAR", tmp_path / "POSCAR") == 74.0


def test_compute_length_mismatch_returns_none(tmp_path):
    (tmp_path / "POSCAR").write_text(HEADER + "Cd Te S\n8 7 1\n")
    (tmp_path / "POTCAR").write_text(_potcar(("Cd", "4.0"), ("Te", "6.0")))

    assert compute(tmp_path / "POTCAR", tmp_path / "POSCAR") is None


def test_compute_missing_files(job):
    assert compute(None, job / "POSCAR") is None
    assert compute(job / "POTCAR", None) is None
    assert compute(job / "missing", job / "POSCAR") is None


def test_compute_does_not_compare_species_by_default(tmp_path):
    (tmp_path / "POSCAR").write_text(HEADER + "Zn Se\n8 7\n")
    (tmp_path / "POTCAR").write_text(_potcar(("Cd", "4.0"), ("Te", "6.0")))

    assert compute(tmp_path / "POTCAR", tmp_path / "POSCAR") == 74.0


def test_compute_strict_species_mismatch(tmp_path):
    (tmp_path / "POSCAR").write_text(HEADER + "Zn Se\n8 7\n")
    (tmp_path / "POTCAR").write_text(_potcar(("Cd", "4.0"), ("Te", "6.0")))

    with patch("vh_lib.nelect.calculator.logger.warning") as mock_warning:
        assert compute(tmp_path / "POTCAR", tmp_path / "POSCAR", strict=True) is None

    mock_warning.assert_called_once()


def test_compute_strict_species_match(job):
    assert compute(job / "POTCAR", job / "POSCAR", strict=True) == 74.0


def test_last_outcar_nelect(tmp_path):
    outcar = tmp_path / "OUTCAR"
    outcar.write_text(
        "   NELECT =      74.0000    total number of electrons\n"
        "   some other line\n"
        "   NELECT =      75.0000    total number of electrons\n"
    )

    assert last_outcar_nelect(outcar) == 75.0


def test_last_outcar_nelect_missing(tmp_path):
    assert last_outcar_nelect(tmp_path / "OUTCAR") is None

    (tmp_path / "OUTCAR").write_text("no electrons here\n")
    assert last_outcar_nelect(tmp_path / "OUTCAR") is None


def test_compute_for_directory_uses_contcar_and_override(tmp_path, job):
    (job / "CONTCAR").write_text(HEADER + "Cd Te\n8 6\n")
    work = tmp_path / "work"
    work.mkdir()
    (work / "POTCAR").write_text(_potcar(("Cd", "2.0"), ("Te", "6.0")))

    assert compute_for_directory(job, work) == 8 * 2.0 + 6 * 6.0


def test_compute_for_directory_without_override(tmp_path, job):
    assert compute_for_directory(job, tmp_path / "nonexistent") == 74.0
