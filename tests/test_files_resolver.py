# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import pytest

from vh_lib.core.error import VHError
from vh_lib.files import copy_inputs, resolve, resolve_structure


def test_resolve_prefers_override(tmp_path):
    source = tmp_path / "Cd_i_0"
    source.mkdir()
    (source / "INCAR").write_text("local")
    (tmp_path / "INCAR").write_text("global")

    assert resolve("INCAR", source, tmp_path) == tmp_path / "INCAR"


def test_resolve_falls_back_to_source(tmp_path):
    source = tmp_path / "Cd_i_0"
    source.mkdir()
    (source / "INCAR").write_text("local")

    assert resolve("INCAR", source, tmp_path) == source / "INCAR"


def test_resolve_missing_returns_none(tmp_path):
    source = tmp_path / "Cd_i_0"
    source.mkdir()

    assert resolve("INCAR", source, tmp_path) is None


def test_resolve_ignores_directory_in_override(tmp_path):
    source = tmp_path / "Cd_i_0"
    source.mkdir()
    (source / "INCAR").write_text("local")
    (tmp_path / "INCAR").mkdir()

    assert resolve("INCAR", source, tmp_path) == source / "INCAR"


def test_resolve_structure_prefers_contcar(tmp_path):
    (tmp_path / "POSCAR").write_text("p")
    (tmp_path / "CONTCAR").write_text("c")

    assert resolve_structure(tmp_path) == tmp_path / "CONTCAR"


def test_resolve_structure_falls_back_to_poscar(tmp_path):
    (tmp_path / "POSCAR").write_text("p")

    assert resolve_structure(tmp_path) == tmp_path / "POSCAR"


def test_resolve_structure_none(tmp_path):
    assert resolve_structure(tmp_path) is None


def test_copy_inputs_copies_all_files(tmp_path, make_job):
    source = make_job(tmp_path / "src" / "Cd_i_0", structure="CONTCAR")
    destination = tmp_path / "work" / "Cd_i_-1"
    (tmp_path / "work").mkdir()

    copy_inputs(source, destination, tmp_path / "work")

    assert sorted(p.name for p in destination.iterdir()) == [
        "INCAR",
        "KPOINTS",
        "POSCAR",
        "POTCAR",
        "job.vasp6",
    ]
    # CONTCAR is stored as POSCAR
    assert (destination / "POSCAR").read_text() == (source / "CONTCAR").read_text()


def test_copy_inputs_honors_overrides(tmp_path, make_job):
    source = make_job(tmp_path / "src" / "Cd_i_0")
    work = tmp_path / "work"
    work.mkdir()
    (work / "KPOINTS").write_text("override\n")

    copy_inputs(source, work / "Cd_i_1", work)

    assert (work / "Cd_i_1" / "KPOINTS").read_text() == "override\n"


def test_copy_inputs_missing_structure_raises(tmp_path, make_job):
    source = make_job(tmp_path / "src" / "Cd_i_0", structure=None)

    with pytest.raises(VHError, match="Missing POSCAR/CONTCAR"):
        copy_inputs(source, tmp_path / "dst", tmp_path / "work")


def test_copy_inputs_missing_input_raises_before_copying(tmp_path, make_job):
    source = make_job(tmp_path / "src" / "Cd_i_0")
    (source / "KPOINTS").unlink()
    destination = tmp_path / "dst"

    with pytest.raises(VHError, match=r"Missing KPOINTS \(global or in"):
        copy_inputs(source, destination, tmp_path / "work")

    assert not (destination / "INCAR").exists()


def test_copy_inputs_in_place(tmp_path, make_job):
    job = make_job(tmp_path / "Cd_i_1", incar="ISTART = 1\n")

    copy_inputs(job, job, tmp_path)

    assert (job / "INCAR").read_text() == "ISTART = 1\n"
