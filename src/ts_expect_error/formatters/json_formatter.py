"""JSON reporter for ts-expect-error."""

import json
from dataclasses import asdict
from typing import Any, Dict, List

from ..exceptions import AnnotationError
from ..models import FileSummary, RunSummary
from .base import BaseReporter


class JsonReporter(BaseReporter):
    """Collect every file and print a single JSON document at the end."""

    def __init__(self, report_unexpected_errors: bool = False, single_file_mode: bool = False):
        super().__init__(report_unexpected_errors, single_file_mode)
        self.files: List[Dict[str, Any]] = []

    def end_file(self, summary: FileSummary) -> None:
        self.files.append(
            {
                "file": summary.path,
                "passed": summary.passed,
                "counts": asdict(summary.counts),
                "failures": [
                    {
                        "line": outcome.line + 1,
                        "expected": outcome.expected_display,
                        "actual": outcome.actual_display,
                    }
                    for outcome in summary.failures
                ],
                "unexpected": [
                    {"line": d.line + 1, "message": d.flat_message, "code": d.code}
                    for d in summary.leftovers
                ],
            }
        )

    def abort_file(self, path: str, error: AnnotationError) -> None:
        self.files.append({"file": path, "passed": False, "error": str(error)})

    def end_run(self, summary: RunSummary) -> None:
        print(self.format(summary))

    def format(self, summary: RunSummary) -> str:
        data = {
            "passed": summary.passed,
            "report_unexpected_errors": self.report_unexpected_errors,
            "totals": asdict(summary.totals),
            "file_count": summary.file_count,
            "aborted_files": summary.aborted_files,
            "files": self.files,
        }
        return json.dumps(data, indent=2)
