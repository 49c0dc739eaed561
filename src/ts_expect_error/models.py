"""Data models for ts-expect-error"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

_WHITESPACE = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    """Collapse every run of whitespace into a single space."""
    return _WHITESPACE.sub(" ", text)


@dataclass(frozen=True)
class MessageChain:
    """A diagnostic message with nested follow-up messages, as tsc reports them."""

    message_text: str
    next: Tuple["MessageChain", ...] = ()


MessageText = Union[str, MessageChain]


def flatten_message_text(message: MessageText, new_line: str = "\n", indent: int = 0) -> str:
    """Flatten a message chain into one string.

    Each nested message goes on its own line, indented by two spaces per
    level, the same way tsc prints chains.
    """
    if isinstance(message, str):
        return message

    result = ""
    if indent:
        result += new_line + "  " * indent
    result += message.message_text
    indent += 1
    for chain in message.next:
        result += flatten_message_text(chain, new_line, indent)
    return result


@dataclass(frozen=True)
class Diagnostic:
    """One diagnostic reported by the type checker.

    ``line`` and ``column`` are 0-based. ``file`` is None for global
    diagnostics such as invalid compiler options.
    """

    file: Optional[str]
    line: int
    message: MessageText
    code: int
    column: int = 0
    category: str = "error"

    @property
    def flat_message(self) -> str:
        """Message flattened to plain text with collapsed whitespace."""
        return normalize_whitespace(flatten_message_text(self.message))

    def __str__(self) -> str:
        return f"{self.flat_message} ({self.code})"


@dataclass(frozen=True)
class MatchOutcome:
    """Result of checking one annotation against its line."""

    line: int  # 0-based
    expected_display: str
    actual_display: str
    succeeded: bool


@dataclass
class StatusCounts:
    """Success, failure and leftover counters for one file or a whole run."""

    success_count: int = 0
    failure_count: int = 0
    leftover_count: int = 0

    @property
    def check_count(self) -> int:
        return self.success_count + self.failure_count

    def problem_count(self, report_unexpected_errors: bool) -> int:
        """Number of problems that make the status fail."""
        return self.failure_count + (self.leftover_count if report_unexpected_errors else 0)

    def passed(self, report_unexpected_errors: bool) -> bool:
        return self.problem_count(report_unexpected_errors) == 0

    def add(self, other: "StatusCounts") -> None:
        self.success_count += other.success_count
        self.failure_count += other.failure_count
        self.leftover_count += other.leftover_count

    def reset(self) -> None:
        self.success_count = 0
        self.failure_count = 0
        self.leftover_count = 0

    def copy(self) -> "StatusCounts":
        return StatusCounts(self.success_count, self.failure_count, self.leftover_count)

    def describe(self, report_unexpected_errors: bool) -> str:
        text = f"successes: {self.success_count}, failures: {self.failure_count}"
        if report_unexpected_errors:
            text += f", errors: {self.leftover_count}"
        return text


@dataclass
class FileSummary:
    """What the run aggregator hands to a reporter when a file is done."""

    path: str
    counts: StatusCounts
    failures: List[MatchOutcome] = field(default_factory=list)
    leftovers: List[Diagnostic] = field(default_factory=list)
    passed: bool = True


@dataclass
class RunSummary:
    """Totals for a whole run."""

    totals: StatusCounts
    file_count: int = 0
    aborted_files: List[str] = field(default_factory=list)
    passed: bool = True

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1
