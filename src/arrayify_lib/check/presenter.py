# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import yaml
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from arrayify_lib.core.common import get_panel_width, load_yaml_dumper
from arrayify_lib.core.config import CFG
from arrayify_lib.properties.states import JobState
from arrayify_lib.properties.status import JobStatus

Dumper: type[yaml.Dumper] = load_yaml_dumper()


class StatusPresenter:
    """
    Presentation layer for the status of a job array.
    """

    def __init__(self, status: JobStatus):
        """
        Initialize the presenter.

        Args:
            status (JobStatus): The status to present.
        """
        self._status = status

    def createStatusPanel(self, console: Console | None = None) -> Group:
        """
        Create a panel summarizing the state of the job array.

        Args:
            console (Console | None): Optional Rich console.
                If not provided, a new Console is created.

        Returns:
            Group: A Rich Group containing the status panel.
        """
        console = console or Console()
        settings = CFG.status_panel

        content: list = [self._createSummaryTable()]
        if failed := self._createFailedTable():
            content += [Text(""), failed]

        panel = Panel(
            Group(*content),
            title=Text(
                f"JOB: {self._status.job_id}",
                style=settings.title_style,
                justify="center",
            ),
            border_style=settings.border_style,
            padding=(1, 2),
            width=get_panel_width(console, 2, settings.min_width, settings.max_width),
        )

        return Group(Text(""), panel, Text(""))

    def getMessage(self) -> str:
        """
        Return a one-line description of the state of the job array.
        """
        counts = self._status.counts()
        job_id = self._status.job_id

        match self._status.state:
            case JobState.DONE:
                return f"All {counts[JobState.DONE]} jobs in array {job_id} completed successfully."
            case JobState.FAILED:
                return f"{counts[JobState.FAILED]} jobs in array {job_id} failed."
            case JobState.RUNNING:
                return f"Jobs in array {job_id} are running."
            case JobState.PENDING:
                return f"Jobs in array {job_id} are pending."
            case _:
                return f"State of job array {job_id} is unknown."

    def dumpYaml(self) -> None:
        """
        Print the YAML representation of the status to stdout.
        """
        print(
            yaml.dump(
                self._status.toDict(),
                Dumper=Dumper,
                default_flow_style=False,
                sort_keys=False,
            ),
            end="",
        )

    def _createSummaryTable(self) -> Table:
        """
        Create a table with the overall state and the number of jobs in each state.

        Returns:
            Table: A Rich table with key-value pairs.
        """
        settings = CFG.status_panel
        state = self._status.state

        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column(justify="right", style=settings.key_style)
        table.add_column(justify="left", overflow="fold", style=settings.value_style)

        table.add_row("Job state:", Text(str(state), style=f"{state.color} bold"))
        table.add_row("", Text(self.getMessage()))

        for job_state, count in self._status.counts().items():
            # unknown states are only worth mentioning when present
            if job_state == JobState.UNKNOWN and count == 0:
                continue
            table.add_row(
                f"{str(job_state).capitalize()}:",
                Text(str(count), style=job_state.color),
            )

        if not self._status.elements:
            table.add_row(
                "",
                Text(
                    "The batch system reported no recognizable jobs.",
                    style=settings.notes_style,
                ),
            )

        return table

    def _createFailedTable(self) -> Table | None:
        """
        Create a table listing failed jobs with their exit codes and likely reasons.

        Returns:
            Table | None: The table or None if no job failed.
        """
        if not (failed := self._status.failed()):
            return None

        settings = CFG.status_panel
        table = Table(
            title=Text("Failed jobs", style=f"{JobState.FAILED.color} bold"),
            box=None,
            padding=(0, 1),
            header_style=settings.key_style,
        )
        table.add_column("Job")
        table.add_column("State")
        table.add_column("Exit code", justify="right")
        table.add_column("Reason")

        for element in failed[: settings.max_failed_listed]:
            table.add_row(
                element.name,
                element.raw_state,
                "-" if element.exit_code is None else str(element.exit_code),
                element.reason,
            )

        if (hidden := len(failed) - settings.max_failed_listed) > 0:
            table.caption = f"... and {hidden} more"

        return table
