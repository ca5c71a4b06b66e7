# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import pytest

from vh_lib.structure import StructureSignature, compatible, read_lines, signature

HEADER = "title\n1.0\n5 0 0\n0 5 0\n0 0 5\n"


@pytest.fixture
def structures(tmp_path):
    paths = {}
    for name, body in {
        "a": "Cd Te\n8 7\nDirect\n",
        "a_copy": "Cd Te\n8 7\nCartesian\n",
        "b": "Cd Te\n8 8\nDirect\n",
        "spaced": "Cd  Te\n8 7\nDirect\n",
    }.items():
        path = tmp_path / name
        path.write_text(HEADER + body)
        paths[name] = path
    return paths


def test_read_lines_limit(tmp_path):
    path = tmp_path / "file"
    path.write_text("1\n2\n3\n")

    assert read_lines(path, 2) == ["1", "2"]
    assert read_lines(path, 10) == ["1", "2", "3"]


def test_read_lines_missing_file(tmp_path):
    assert read_lines(tmp_path / "missing", 7) is None


def test_signature_reads_lines_six_and_seven(structures):
    sig = signature(structures["a"])

    assert sig == StructureSignature("Cd Te", "8 7")
    assert str(sig) == "Cd Te|8 7"


def test_signature_short_file_is_empty(tmp_path):
    path = tmp_path / "POSCAR"
    path.write_text("title\n1.0\n")

    assert signature(path) == StructureSignature("", "")


def test_signature_missing_file_is_empty(tmp_path):
    assert signature(tmp_path / "POSCAR") == StructureSignature("", "")


def test_compatible_reflexive(structures):
    for path in structures.values():
        assert compatible(signature(path), signature(path))


def test_compatible_symmetric(structures):
    paths = list(structures.values())
    for a in paths:
        for b in paths:
            assert compatible(signature(a), signature(b)) == compatible(
                signature(b), signature(a)
            )


def test_compatible_ignores_lines_after_counts(structures):
    assert compatible(signature(structures["a"]), signature(structures["a_copy"]))


def test_incompatible_counts(structures):
    assert not compatible(signature(structures["a"]), signature(structures["b"]))


def test_comparison_is_verbatim(structures):
    assert not compatible(signature(structures["a"]), signature(structures["spaced"]))


def test_carriage_returns_are_kept(tmp_path):
    unix = tmp_path / "unix"
    unix.write_text(HEADER + "Cd Te\n8 7\n")
    dos = tmp_path / "dos"
    dos.write_bytes((HEADER + "Cd Te\n8 7\n").replace("\n", "\r\n").encode())

    assert not compatible(signature(unix), signature(dos))
