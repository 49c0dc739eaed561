"""GitHub Actions reporter - one ``::error`` annotation per failed check."""

from typing import List

from ..exceptions import AnnotationError
from ..models import FileSummary, RunSummary
from .base import BaseReporter


def _escape_data(text: str) -> str:
    return text.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_property(text: str) -> str:
    return _escape_data(text).replace(":", "%3A").replace(",", "%2C")


class GithubReporter(BaseReporter):
    """Output GitHub Actions workflow commands pointing at the failing lines."""

    def __init__(self, report_unexpected_errors: bool = False, single_file_mode: bool = False):
        super().__init__(report_unexpected_errors, single_file_mode)
        self.lines: List[str] = []

    def end_file(self, summary: FileSummary) -> None:
        file_prop = _escape_property(summary.path)
        for outcome in summary.failures:
            msg = f"Expected: {outcome.expected_display} / Actual: {outcome.actual_display}"
            self.lines.append(f"::error file={file_prop},line={outcome.line + 1}::{_escape_data(msg)}")
        if self.report_unexpected_errors:
            for d in summary.leftovers:
                msg = f"Unexpected error: {d}"
                self.lines.append(f"::error file={file_prop},line={d.line + 1}::{_escape_data(msg)}")

    def abort_file(self, path: str, error: AnnotationError) -> None:
        self.lines.append(f"::error file={_escape_property(path)}::{_escape_data(str(error))}")

    def end_run(self, summary: RunSummary) -> None:
        print(self.format(summary))

    def format(self, summary: RunSummary) -> str:
        status = "notice" if summary.passed else "error"
        totals = summary.totals.describe(self.report_unexpected_errors)
        return "\n".join(self.lines + [f"::{status}::ts-expect-error DONE ({totals})"])
