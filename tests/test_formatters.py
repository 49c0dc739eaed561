"""Tests for the reporters package."""

import io
import json

import pytest
from rich.console import Console

from ts_expect_error.exceptions import AnnotationParseError
from ts_expect_error.formatters import (
    GithubReporter,
    JsonReporter,
    QuietReporter,
    RichReporter,
    get_reporter,
)
from ts_expect_error.models import Diagnostic, FileSummary, MatchOutcome, RunSummary, StatusCounts


def _make_summary(path="src/demo.ts", failures=True, leftovers=True):
    failure_list = []
    if failures:
        failure_list.append(MatchOutcome(4, "Foo is missing (1002)", "no diagnostic on this line", False))
    leftover_list = []
    if leftovers:
        leftover_list.append(Diagnostic(file=path, line=9, message="Cannot find name '[x]'.", code=2304))
    counts = StatusCounts(success_count=2, failure_count=len(failure_list), leftover_count=len(leftover_list))
    return FileSummary(path=path, counts=counts, failures=failure_list, leftovers=leftover_list, passed=not failures)


def _make_run(passed=False, aborted=()):
    return RunSummary(
        totals=StatusCounts(success_count=2, failure_count=1, leftover_count=1),
        file_count=1,
        aborted_files=list(aborted),
        passed=passed,
    )


def _rich(report_unexpected_errors=False, single_file_mode=False):
    buf = io.StringIO()
    console = Console(file=buf, width=200, color_system=None, highlight=False)
    reporter = RichReporter(report_unexpected_errors, single_file_mode, console=console)
    return reporter, buf


class TestGetReporter:
    def test_known_reporters(self):
        for name in ("rich", "json", "github", "quiet"):
            assert get_reporter(name) is not None

    def test_flags_are_passed_on(self):
        reporter = get_reporter("json", report_unexpected_errors=True, single_file_mode=True)
        assert reporter.report_unexpected_errors
        assert reporter.single_file_mode

    def test_unknown_reporter(self):
        with pytest.raises(ValueError, match="Unknown reporter"):
            get_reporter("xml")


class TestRichReporter:
    def test_file_header_and_failures(self):
        reporter, buf = _rich()
        reporter.end_file(_make_summary())
        out = buf.getvalue()
        assert "::::: src/demo.ts (successes: 2, failures: 1) ×" in out
        assert "• LINE 5:" in out
        assert "  EXPECTED ERROR: Foo is missing (1002)" in out
        assert "  ACTUAL ERROR:   no diagnostic on this line" in out
        assert "Cannot find name" not in out

    def test_unexpected_errors_listed_when_enabled(self):
        reporter, buf = _rich(report_unexpected_errors=True)
        reporter.end_file(_make_summary())
        out = buf.getvalue()
        assert "(successes: 2, failures: 1, errors: 1)" in out
        # square brackets in messages must survive markup
        assert "• LINE 10: Cannot find name '[x]'. (2304)" in out

    def test_single_file_mode_omits_header(self):
        reporter, buf = _rich(single_file_mode=True)
        reporter.end_file(_make_summary())
        assert ":::::" not in buf.getvalue()

    def test_passing_file(self):
        reporter, buf = _rich()
        reporter.end_file(_make_summary(failures=False, leftovers=False))
        assert "(successes: 2, failures: 0) ✔︎" in buf.getvalue()

    def test_abort(self):
        reporter, buf = _rich()
        reporter.abort_file("bad.ts", AnnotationParseError("", line=3))
        out = buf.getvalue()
        assert "bad.ts" in out
        assert "aborted" in out
        assert "Neither message nor code was provided" in out

    def test_done_line(self):
        reporter, buf = _rich()
        reporter.end_run(_make_run(passed=False))
        assert "× DONE (successes: 2, failures: 1)" in buf.getvalue()

    def test_done_line_with_aborted_files(self):
        reporter, buf = _rich(report_unexpected_errors=True)
        reporter.end_run(_make_run(passed=False, aborted=["bad.ts"]))
        out = buf.getvalue()
        assert "DONE (successes: 2, failures: 1, errors: 1)" in out
        assert "aborted files: 1" in out


class TestJsonReporter:
    def test_format_returns_valid_json(self):
        reporter = JsonReporter(report_unexpected_errors=True)
        reporter.end_file(_make_summary())
        reporter.abort_file("bad.ts", AnnotationParseError(""))
        data = json.loads(reporter.format(_make_run(aborted=["bad.ts"])))

        assert data["passed"] is False
        assert data["totals"] == {"success_count": 2, "failure_count": 1, "leftover_count": 1}
        first, second = data["files"]
        assert first["failures"] == [
            {"line": 5, "expected": "Foo is missing (1002)", "actual": "no diagnostic on this line"}
        ]
        assert first["unexpected"][0]["code"] == 2304
        assert second == {
            "file": "bad.ts",
            "passed": False,
            "error": "Neither message nor code was provided (text='')",
        }

    def test_end_run_prints(self, capsys):
        JsonReporter().end_run(_make_run(passed=True))
        assert json.loads(capsys.readouterr().out)["passed"] is True


class TestGithubReporter:
    def test_error_per_failure(self):
        reporter = GithubReporter()
        reporter.end_file(_make_summary())
        lines = reporter.format(_make_run()).splitlines()
        assert lines[0] == (
            "::error file=src/demo.ts,line=5::"
            "Expected: Foo is missing (1002) / Actual: no diagnostic on this line"
        )
        assert lines[-1] == "::error::ts-expect-error DONE (successes: 2, failures: 1)"

    def test_unexpected_errors(self):
        reporter = GithubReporter(report_unexpected_errors=True)
        reporter.end_file(_make_summary(failures=False))
        [line, _done] = reporter.format(_make_run(passed=True)).splitlines()
        assert line.startswith("::error file=src/demo.ts,line=10::Unexpected error: ")

    def test_escaping(self):
        reporter = GithubReporter()
        summary = _make_summary(path="a,b:c.ts", leftovers=False)
        summary.failures[0] = MatchOutcome(0, "50%\nx", "y", False)
        reporter.end_file(summary)
        first = reporter.format(_make_run()).splitlines()[0]
        assert first == "::error file=a%2Cb%3Ac.ts,line=1::Expected: 50%25%0Ax / Actual: y"

    def test_passing_run_is_a_notice(self):
        output = GithubReporter().format(_make_run(passed=True))
        assert output.startswith("::notice::")


class TestQuietReporter:
    def test_only_done_line(self, capsys):
        reporter = QuietReporter()
        reporter.end_file(_make_summary())
        reporter.end_run(_make_run(passed=False))
        assert capsys.readouterr().out == "× DONE (successes: 2, failures: 1)\n"
