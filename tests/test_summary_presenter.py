# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import io

import pytest
import yaml
from rich.console import Console

from vh_lib.pipeline import RunResult
from vh_lib.properties import (
    Mode,
    PreparedBatch,
    PreparedJob,
    RunSettings,
    SafetyLevel,
    SafetyReport,
    SafetyVerdict,
    SubmissionPlan,
)
from vh_lib.summary import SummaryPresenter


@pytest.fixture
def jobs(tmp_path):
    result = []
    for name, charge, nelect in [("Cd_i_-1", -1, 75.0), ("Cd_i_1", 1, 73.0), ("Cd_i_2", 2, 72.0)]:
        directory = tmp_path / name
        directory.mkdir()
        (directory / "KPOINTS").write_text("Automatic\n0\nGamma\n2 2 2\n")
        result.append(PreparedJob(name, directory, charge, nelect))
    return tuple(result)


def _result(tmp_path, jobs, dry_run=False):
    report = SafetyReport(
        PreparedBatch(jobs),
        (
            SafetyVerdict(jobs[0]),
            SafetyVerdict(jobs[1], ("ISTART=1 but WAVECAR missing",)),
            SafetyVerdict(jobs[2]),
        ),
    )
    submitted = {} if dry_run else {"Cd_i_-1": "1.server", "Cd_i_2": "2.server"}
    plan = SubmissionPlan(
        SafetyLevel.SAFE_ONLY, dry_run, () if dry_run else (jobs[0], jobs[2])
    )
    return RunResult(
        RunSettings(Mode.STATIC, None, tmp_path, work_dir=tmp_path),
        report.batch,
        report,
        plan,
        tmp_path / "helper.log",
        submitted,
    )


def _render(presenter: SummaryPresenter) -> str:
    buffer = io.StringIO()
    console = Console(file=buffer, width=120, force_terminal=False)
    console.print(presenter.createSummaryPanel(console))
    return buffer.getvalue()


def test_summary_panel_lists_jobs_and_reasons(tmp_path, jobs):
    output = _render(SummaryPresenter(_result(tmp_path, jobs)))

    assert "RUN SUMMARY" in output
    assert "Created jobs (3)" in output
    assert "75.000000" in output
    assert "Unsafe jobs (1)" in output
    assert "Cd_i_1: ISTART=1 but WAVECAR missing" in output
    assert "Submission policy: safety=1" in output
    assert "Submitted (2): Cd_i_-1 Cd_i_2" in output
    assert "helper.log" in output


def test_summary_panel_dry_run(tmp_path, jobs):
    output = _render(SummaryPresenter(_result(tmp_path, jobs, dry_run=True)))

    assert "Dry-run: no jobs submitted." in output
    assert "Submission policy" not in output


def test_status(tmp_path, jobs):
    presenter = SummaryPresenter(_result(tmp_path, jobs))

    assert presenter._getStatus(jobs[0]) == "submitted"
    assert presenter._getStatus(jobs[1]) == "unsafe"

    dry = SummaryPresenter(_result(tmp_path, jobs, dry_run=True))
    assert dry._getStatus(jobs[0]) == "prepared"


def test_dump_yaml(tmp_path, jobs, capsys):
    SummaryPresenter(_result(tmp_path, jobs)).dumpYaml()

    data = yaml.safe_load(capsys.readouterr().out)

    assert [job["name"] for job in data["jobs"]] == ["Cd_i_-1", "Cd_i_1", "Cd_i_2"]
    assert data["jobs"][0]["kpoints"] == 8
    assert data["jobs"][1]["status"] == "unsafe"
    assert data["unsafe"] == {"Cd_i_1": "ISTART=1 but WAVECAR missing"}
    assert data["safety"] == 1
    assert data["dry_run"] is False
    assert data["submitted"] == {"Cd_i_-1": "1.server", "Cd_i_2": "2.server"}
