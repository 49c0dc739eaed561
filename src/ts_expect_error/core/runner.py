"""Run driver: walk files, match annotations, aggregate the results."""

from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Sequence

from ..checker.base import BaseChecker
from ..diagnostic_index import FileDiagnosticIndex, ProgramDiagnosticIndex
from ..exceptions import AnnotationCountMismatchError, AnnotationParseError
from ..expectation import Expectation, count_markers, extract_comment_text
from ..formatters.base import BaseReporter
from ..logging_config import get_logger
from ..matching import match_annotation
from ..models import Diagnostic, FileSummary, MatchOutcome, RunSummary, StatusCounts
from ..source import SourceFile
from ..walker import CommentedNode, iter_commented_nodes

logger = get_logger(__name__)

Walker = Callable[[str, str], Iterable[CommentedNode]]


class StaticCheckRun:
    """Counts outcomes per file and for the whole run.

    Failing outcomes are buffered so a reporter can print the counts of a
    file before its failures.
    """

    def __init__(self, reporter: BaseReporter, report_unexpected_errors: bool = False):
        self.reporter = reporter
        self.report_unexpected_errors = report_unexpected_errors
        self.totals = StatusCounts()
        self.file_counts = StatusCounts()
        self.file_count = 0
        self.aborted_files: List[str] = []
        self._source: Optional[SourceFile] = None
        self._failures: List[MatchOutcome] = []

    @property
    def current_file(self) -> Optional[SourceFile]:
        return self._source

    def begin_file(self, source: SourceFile) -> None:
        if self._source is not None:
            raise RuntimeError(f"File {self._source.path} was not finished")
        self._source = source
        self.file_counts.reset()
        self._failures = []
        self.reporter.begin_file(str(source.path))

    def record(self, outcome: MatchOutcome) -> None:
        source = self._require_file()
        if outcome.succeeded:
            self.file_counts.success_count += 1
        else:
            self.file_counts.failure_count += 1
            self._failures.append(outcome)
        logger.debug(
            f"{source.path}:{outcome.line + 1} "
            f"{'ok' if outcome.succeeded else 'FAILED'}: {outcome.expected_display}"
        )
        self.reporter.record_outcome(outcome)

    def end_file(self, file_index: FileDiagnosticIndex) -> FileSummary:
        """Finish the current file.

        Raises:
            AnnotationCountMismatchError: If the file contains more or fewer
                markers than annotations were checked
        """
        source = self._require_file()
        counts = self.file_counts
        counts.leftover_count += file_index.leftover_count

        markers = count_markers(source.text)
        if markers != counts.check_count:
            raise AnnotationCountMismatchError(markers, counts.check_count, source.path)

        summary = FileSummary(
            path=str(source.path),
            counts=counts.copy(),
            failures=list(self._failures),
            leftovers=list(file_index.leftovers()),
            passed=counts.passed(self.report_unexpected_errors),
        )
        self.totals.add(counts)
        self.file_count += 1
        self._source = None
        self._failures = []
        self.reporter.end_file(summary)
        return summary

    def abort_file(self, error: AnnotationParseError) -> None:
        """Give up on the current file; its partial counts are discarded."""
        source = self._require_file()
        logger.error(f"{source.path}: {error}")
        self.aborted_files.append(str(source.path))
        self.file_count += 1
        self._source = None
        self._failures = []
        self.file_counts.reset()
        self.reporter.abort_file(str(source.path), error)

    def finish(self) -> RunSummary:
        if self._source is not None:
            raise RuntimeError(f"File {self._source.path} was not finished")
        summary = RunSummary(
            totals=self.totals.copy(),
            file_count=self.file_count,
            aborted_files=list(self.aborted_files),
            passed=self.totals.passed(self.report_unexpected_errors) and not self.aborted_files,
        )
        self.reporter.end_run(summary)
        return summary

    def _require_file(self) -> SourceFile:
        if self._source is None:
            raise RuntimeError("No file is being checked")
        return self._source


def iter_expectations(
    source: SourceFile, walker: Walker = iter_commented_nodes
) -> Iterator[tuple[int, Expectation]]:
    """Yield ``(line, expectation)`` for every annotation of a file, in source order.

    Raises:
        AnnotationParseError: If an annotation has neither message nor code
        MalformedCommentError: If the walker returned a broken comment group
    """
    for node in walker(source.text, source.dialect):
        text = extract_comment_text(node.comment_parts)
        if text is None:
            continue
        try:
            expectation = Expectation.parse(text)
        except AnnotationParseError as e:
            raise AnnotationParseError(e.text, e.reason, line=node.line) from e
        yield node.line, expectation


def check_file(
    source: SourceFile,
    file_index: FileDiagnosticIndex,
    run: StaticCheckRun,
    walker: Walker = iter_commented_nodes,
) -> Optional[FileSummary]:
    """Check every annotation of one file. Returns None if the file was aborted."""
    run.begin_file(source)
    try:
        for line, expectation in iter_expectations(source, walker):
            run.record(match_annotation(expectation, line, file_index))
    except AnnotationParseError as e:
        run.abort_file(e)
        return None
    return run.end_file(file_index)


def _log_global_diagnostics(diagnostics: Sequence[Diagnostic]) -> None:
    for diagnostic in diagnostics:
        if diagnostic.file is None:
            logger.warning(f"tsc: {diagnostic} [not attached to a file]")


def perform_static_checks(
    files: Sequence[Path],
    checker: BaseChecker,
    reporter: BaseReporter,
    report_unexpected_errors: bool = False,
    walker: Walker = iter_commented_nodes,
) -> int:
    """Check all files and return the process exit status (0 or 1).

    Raises:
        InternalError: If a file's annotations could not all be checked
    """
    sources = [SourceFile.load(Path(f)) for f in files]
    logger.info(f"Collecting diagnostics for {len(sources)} file(s)")
    diagnostics = checker.collect([s.path for s in sources])
    logger.info(f"Checker reported {len(diagnostics)} diagnostic(s)")
    _log_global_diagnostics(diagnostics)

    index = ProgramDiagnosticIndex.from_diagnostics(diagnostics)
    run = StaticCheckRun(reporter, report_unexpected_errors)
    for source in sources:
        logger.debug(f"Checking {source.path}")
        check_file(source, index.for_file(source.path), run, walker)

    summary = run.finish()
    return summary.exit_code
