"""Diagnostics grouped by file and line, with single-use retrieval.

A diagnostic claimed by one annotation must never satisfy another one, so a
line's diagnostics can only be read through ``take_and_clear``. Whatever is
left once a file has been processed was never claimed by any annotation.
"""

from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Tuple, Union

from .models import Diagnostic


def normalize_file_key(path: Union[str, Path]) -> str:
    """Key under which a file's diagnostics are stored."""
    return str(Path(path).resolve())


class FileDiagnosticIndex:
    """Diagnostics of one file, keyed by 0-based line."""

    def __init__(self) -> None:
        self._by_line: Dict[int, List[Diagnostic]] = {}

    def add(self, line: int, diagnostic: Diagnostic) -> None:
        self._by_line.setdefault(line, []).append(diagnostic)

    def take_and_clear(self, line: int) -> Tuple[Diagnostic, ...]:
        """Return the diagnostics on ``line`` and forget them.

        A second call for the same line returns an empty tuple.
        """
        return tuple(self._by_line.pop(line, ()))

    @property
    def leftover_count(self) -> int:
        """Number of lines whose diagnostics were never taken."""
        return len(self._by_line)

    def leftovers(self) -> Iterator[Diagnostic]:
        """Unclaimed diagnostics, in line order."""
        for line in sorted(self._by_line):
            yield from self._by_line[line]

    def __len__(self) -> int:
        return sum(len(diagnostics) for diagnostics in self._by_line.values())


class ProgramDiagnosticIndex:
    """Per-file indexes for every diagnostic of a checker run."""

    def __init__(self) -> None:
        self._by_file: Dict[str, FileDiagnosticIndex] = {}

    @classmethod
    def from_diagnostics(cls, diagnostics: Iterable[Diagnostic]) -> "ProgramDiagnosticIndex":
        """Build the index from sorted, de-duplicated diagnostics.

        Diagnostics without a file cannot be claimed by an annotation and
        are skipped.
        """
        index = cls()
        for diagnostic in diagnostics:
            if diagnostic.file is None:
                continue
            index.add(diagnostic)
        return index

    def add(self, diagnostic: Diagnostic) -> None:
        if diagnostic.file is None:
            raise ValueError("Diagnostic has no file")
        key = normalize_file_key(diagnostic.file)
        file_index = self._by_file.get(key)
        if file_index is None:
            file_index = FileDiagnosticIndex()
            self._by_file[key] = file_index
        file_index.add(diagnostic.line, diagnostic)

    def for_file(self, path: Union[str, Path]) -> FileDiagnosticIndex:
        """Index of one file; empty if the checker reported nothing for it."""
        file_index = self._by_file.get(normalize_file_key(path))
        if file_index is None:
            return FileDiagnosticIndex()
        return file_index

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        return normalize_file_key(path) in self._by_file
