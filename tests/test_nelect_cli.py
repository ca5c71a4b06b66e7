# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from unittest.mock import patch

from click.testing import CliRunner

from vh_lib.core.config import CFG
from vh_lib.nelect.cli import nelect


def test_nelect_prints_value(tmp_path, make_job, monkeypatch):
    job = make_job(tmp_path / "Cd_i_0")
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(nelect, [str(job)])

    assert result.exit_code == 0
    assert result.output.strip() == "74.000000"


def test_nelect_with_charge(tmp_path, make_job, monkeypatch):
    job = make_job(tmp_path / "Cd_i_0")
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(nelect, [str(job), "--charge", "-1"])

    assert result.exit_code == 0
    assert result.output.strip() == "75.000000"


def test_nelect_strict_species_mismatch(tmp_path, make_job, monkeypatch):
    job = make_job(tmp_path / "Cd_i_0", species="Zn Se")
    monkeypatch.chdir(tmp_path)

    with patch("vh_lib.nelect.cli.logger") as mock_logger:
        result = CliRunner().invoke(nelect, [str(job), "--strict-species"])

    assert result.exit_code == CFG.exit_codes.default
    mock_logger.error.assert_called_once()


def test_nelect_missing_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    with patch("vh_lib.nelect.cli.logger") as mock_logger:
        result = CliRunner().invoke(nelect, [str(tmp_path / "missing")])

    assert result.exit_code == CFG.exit_codes.default
    assert "does not exist" in str(mock_logger.error.call_args.args[0])
