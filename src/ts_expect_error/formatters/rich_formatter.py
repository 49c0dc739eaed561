"""Rich terminal reporter for ts-expect-error."""

from typing import Optional

from rich.console import Console
from rich.markup import escape

from ..exceptions import AnnotationError
from ..models import FileSummary, RunSummary, StatusCounts
from .base import BaseReporter

PASS_MARK = "✔︎"
FAIL_MARK = "×"


class RichReporter(BaseReporter):
    """Summary line per file, then the failures, then a total line."""

    def __init__(
        self,
        report_unexpected_errors: bool = False,
        single_file_mode: bool = False,
        console: Optional[Console] = None,
    ):
        super().__init__(report_unexpected_errors, single_file_mode)
        self.console = console or Console(highlight=False, soft_wrap=True)

    def _status(self, counts: StatusCounts) -> str:
        if counts.passed(self.report_unexpected_errors):
            return f"[green]{PASS_MARK}[/green]"
        return f"[red]{FAIL_MARK}[/red]"

    def end_file(self, summary: FileSummary) -> None:
        out = self.console
        if not self.single_file_mode:
            out.print(
                f"[bold]:::::[/bold] {escape(summary.path)} "
                f"({summary.counts.describe(self.report_unexpected_errors)}) "
                f"{self._status(summary.counts)}"
            )

        for outcome in summary.failures:
            out.print(f"• LINE {outcome.line + 1}:")
            out.print(f"  EXPECTED ERROR: {escape(outcome.expected_display)}")
            out.print(f"  ACTUAL ERROR:   {escape(outcome.actual_display)}")

        if self.report_unexpected_errors:
            for diagnostic in summary.leftovers:
                out.print(f"• LINE {diagnostic.line + 1}: {escape(str(diagnostic))}")

        # Empty lines separate the files
        if not self.single_file_mode:
            out.print()

    def abort_file(self, path: str, error: AnnotationError) -> None:
        self.console.print(
            f"[bold]:::::[/bold] {escape(path)} [red]{FAIL_MARK} aborted:[/red] {escape(str(error))}"
        )
        if not self.single_file_mode:
            self.console.print()

    def end_run(self, summary: RunSummary) -> None:
        mark = f"[green]{PASS_MARK}[/green]" if summary.passed else f"[red]{FAIL_MARK}[/red]"
        line = f"{mark} DONE ({summary.totals.describe(self.report_unexpected_errors)})"
        if summary.aborted_files:
            line += f" [red]aborted files: {len(summary.aborted_files)}[/red]"
        self.console.print(line)
