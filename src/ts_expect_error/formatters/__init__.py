"""Reporters for ts-expect-error check results."""

from .base import BaseReporter
from .github_formatter import GithubReporter
from .json_formatter import JsonReporter
from .quiet_formatter import QuietReporter
from .rich_formatter import RichReporter

REPORTERS = {
    "rich": RichReporter,
    "json": JsonReporter,
    "github": GithubReporter,
    "quiet": QuietReporter,
}


def get_reporter(
    name: str, report_unexpected_errors: bool = False, single_file_mode: bool = False
) -> BaseReporter:
    """Get a reporter instance by name.

    Args:
        name: One of "rich", "json", "github", "quiet"
        report_unexpected_errors: Count diagnostics no annotation claimed
        single_file_mode: Omit per-file headers

    Returns:
        Reporter instance

    Raises:
        ValueError: If name is not recognized
    """
    cls = REPORTERS.get(name)
    if cls is None:
        raise ValueError(f"Unknown reporter: {name!r}. Choose from: {', '.join(sorted(REPORTERS))}")
    return cls(report_unexpected_errors=report_unexpected_errors, single_file_mode=single_file_mode)


__all__ = [
    "BaseReporter",
    "RichReporter",
    "JsonReporter",
    "GithubReporter",
    "QuietReporter",
    "get_reporter",
]
