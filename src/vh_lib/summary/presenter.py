# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import yaml
from rich.console import Console, Group
from rich.panel import Panel
from rich.style import Style
from rich.text import Text
from tabulate import Line, TableFormat, tabulate

from vh_lib.core.common import format_nelect, get_panel_width, load_yaml_dumper
from vh_lib.core.config import CFG
from vh_lib.kpoints import count_kpoints
from vh_lib.pipeline import RunResult
from vh_lib.properties import PreparedJob

Dumper: type[yaml.Dumper] = load_yaml_dumper()


class SummaryPresenter:
    """
    Presents the outcome of a vh run.
    """

    # Table formatting configuration for `tabulate`.
    _COMPACT_TABLE = TableFormat(
        lineabove=Line("", "", "", ""),
        linebelowheader="",
        linebetweenrows="",
        linebelow=Line("", "", "", ""),
        headerrow=("", "  ", ""),
        datarow=("", "  ", ""),
        padding=0,
        with_header_hide=["lineabove", "linebelow"],
    )

    _HEADERS = ["Job", "Charge", "NELECT", "K-points", "Status"]

    def __init__(self, result: RunResult):
        """
        Initialize the presenter with the result of a run.

        Args:
            result (RunResult): The result to present.
        """
        self._result = result

    def createSummaryPanel(self, console: Console | None = None) -> Group:
        """
        Create a Rich panel summarizing the run.

        Args:
            console (Console | None): Optional Rich Console instance.
                If None, a new Console will be created.

        Returns:
            Group: Rich Group containing the summary panel.
        """
        console = console or Console()
        settings = CFG.summary_presenter

        content = [
            self._createSection(f"Created jobs ({len(self._result.batch)})"),
            Text.from_ansi(self._createJobsTable()),
            Text(""),
        ]

        if reasons := self._result.report.unsafe_reasons:
            content.append(self._createSection(f"Unsafe jobs ({len(reasons)})"))
            for name, reason in reasons.items():
                content.append(
                    Text(f"  - {name}: ", style=settings.unsafe_style).append(
                        reason, style=settings.main_style
                    )
                )
            content.append(Text(""))

        content.append(self._createSubmissionInfo())
        content.append(Text(""))
        content.append(
            Text(f"Log: {self._result.log_file}", style=settings.notes_style)
        )

        panel = Panel(
            Group(*content),
            title=Text("RUN SUMMARY", style=settings.title_style, justify="center"),
            border_style=settings.border_style,
            padding=(1, 1),
            width=get_panel_width(console, 1, settings.min_width, settings.max_width),
            expand=False,
        )

        return Group(Text(""), panel, Text(""))

    def dumpYaml(self) -> None:
        """
        Print the YAML representation of the run summary to stdout.
        """
        print(
            yaml.dump(
                self._toDict(), default_flow_style=False, sort_keys=False, Dumper=Dumper
            ),
            end="",
        )

    def _toDict(self) -> dict[str, object]:
        """
        Convert the run summary into a dictionary.
        """
        plan = self._result.plan
        return {
            "jobs": [
                {
                    "name": job.name,
                    "directory": str(job.directory),
                    "charge": job.charge,
                    "nelect": job.nelect,
                    "kpoints": count_kpoints(job.directory / CFG.files.kpoints),
                    "status": self._getStatus(job),
                }
                for job in self._result.batch
            ],
            "unsafe": dict(self._result.report.unsafe_reasons),
            "safety": plan.safety.value,
            "dry_run": plan.dry_run,
            "submitted": dict(self._result.submitted),
            "log_file": str(self._result.log_file),
        }

    def _createJobsTable(self) -> str:
        """
        Build a compact tabulated string representation of the prepared jobs.

        Returns:
            str: Tabulated job information with ANSI color codes applied.
        """
        rows = [self._createJobRow(job) for job in self._result.batch]

        return tabulate(
            rows,
            headers=[
                SummaryPresenter._color(h, CFG.summary_presenter.headers_style)
                for h in SummaryPresenter._HEADERS
            ],
            tablefmt=SummaryPresenter._COMPACT_TABLE,
            stralign="center",
            numalign="center",
        )

    def _createJobRow(self, job: PreparedJob) -> list[str]:
        settings = CFG.summary_presenter
        status = self._getStatus(job)
        match status:
            case "submitted":
                status_style = settings.submitted_style
            case "unsafe":
                status_style = settings.unsafe_style
            case _:
                status_style = settings.prepared_style

        return [
            SummaryPresenter._color(job.name, settings.main_style),
            SummaryPresenter._color(str(job.charge), settings.main_style),
            SummaryPresenter._color(
                format_nelect(job.nelect) if job.nelect is not None else "-",
                settings.main_style,
            ),
            SummaryPresenter._color(
                str(count_kpoints(job.directory / CFG.files.kpoints)),
                settings.main_style,
            ),
            SummaryPresenter._color(status, status_style),
        ]

    def _createSubmissionInfo(self) -> Text:
        """
        Describe the submission policy and the submitted jobs.
        """
        settings = CFG.summary_presenter
        plan = self._result.plan

        if plan.dry_run:
            return Text("Dry-run: no jobs submitted.", style=settings.prepared_style)

        text = Text("Submission policy: ", style=settings.headers_style).append(
            f"safety={plan.safety}", style=settings.main_style
        )
        text.append("\n")
        text.append(
            f"Submitted ({len(self._result.submitted)}): ",
            style=settings.headers_style,
        )
        text.append(
            " ".join(self._result.submitted) or "none", style=settings.submitted_style
        )
        return text

    def _getStatus(self, job: PreparedJob) -> str:
        """
        Status of a job after the run: 'submitted', 'unsafe' or 'prepared'.
        """
        if job.name in self._result.submitted:
            return "submitted"
        if not self._result.report.isSafe(job):
            return "unsafe"
        return "prepared"

    @staticmethod
    def _createSection(title: str) -> Text:
        return Text(title, style=CFG.summary_presenter.headers_style)

    @staticmethod
    def _color(string: str, style: str | None = None) -> str:
        """
        Apply the ANSI codes of a Rich style to a string.

        Args:
            string (str): The string to style.
            style (str | None): Rich style definition, e.g. 'bright_green bold'.

        Returns:
            str: ANSI-styled string.
        """
        if not style:
            return string
        return Style.parse(style).render(string)
