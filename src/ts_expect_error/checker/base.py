"""Checker interface and helpers shared by all diagnostic sources."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from ..models import Diagnostic


class BaseChecker(ABC):
    """A source of diagnostics for a set of files."""

    @abstractmethod
    def collect(self, files: Sequence[Path]) -> List[Diagnostic]:
        """Return the sorted, de-duplicated diagnostics for ``files``."""


def resolve_file(path: str, base_dir: Optional[Path] = None) -> str:
    """Absolute form of a path reported relative to ``base_dir``."""
    p = Path(path)
    if not p.is_absolute():
        p = (base_dir or Path.cwd()) / p
    return str(p.resolve())


def _sort_key(d: Diagnostic):
    return (d.file or "", d.line, d.column, d.code, d.flat_message)


def sort_and_deduplicate(diagnostics: Iterable[Diagnostic]) -> List[Diagnostic]:
    """Sort by position, code and message and drop exact duplicates."""
    result: List[Diagnostic] = []
    previous = None
    for diagnostic in sorted(diagnostics, key=_sort_key):
        key = (_sort_key(diagnostic), diagnostic.category)
        if key == previous:
            continue
        previous = key
        result.append(diagnostic)
    return result
