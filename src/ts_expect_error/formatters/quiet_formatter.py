"""Quiet reporter - the final summary line only."""

from ..exceptions import AnnotationError
from ..models import FileSummary, RunSummary
from .base import BaseReporter
from .rich_formatter import FAIL_MARK, PASS_MARK


class QuietReporter(BaseReporter):
    """Print nothing but the DONE line."""

    def end_file(self, summary: FileSummary) -> None:
        pass

    def abort_file(self, path: str, error: AnnotationError) -> None:
        pass

    def end_run(self, summary: RunSummary) -> None:
        print(self.format(summary))

    def format(self, summary: RunSummary) -> str:
        mark = PASS_MARK if summary.passed else FAIL_MARK
        return f"{mark} DONE ({summary.totals.describe(self.report_unexpected_errors)})"
