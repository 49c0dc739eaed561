"""Base reporter interface for check results."""

from abc import ABC, abstractmethod

from ..exceptions import AnnotationError
from ..models import FileSummary, MatchOutcome, RunSummary


class BaseReporter(ABC):
    """Receives check results while a run progresses.

    The run aggregator calls ``begin_file``, ``record_outcome`` for every
    annotation, then ``end_file`` (or ``abort_file``) per file, and
    ``end_run`` once at the end.
    """

    def __init__(self, report_unexpected_errors: bool = False, single_file_mode: bool = False):
        self.report_unexpected_errors = report_unexpected_errors
        self.single_file_mode = single_file_mode

    def begin_file(self, path: str) -> None:
        """Called before the first annotation of a file is checked."""

    def record_outcome(self, outcome: MatchOutcome) -> None:
        """Called for every checked annotation, in source order."""

    @abstractmethod
    def end_file(self, summary: FileSummary) -> None:
        """Called once all annotations of a file have been checked."""

    @abstractmethod
    def abort_file(self, path: str, error: AnnotationError) -> None:
        """Called instead of ``end_file`` when an annotation cannot be parsed."""

    @abstractmethod
    def end_run(self, summary: RunSummary) -> None:
        """Called once after the last file."""
