"""Expand file and directory arguments into the list of files to check."""

from pathlib import Path
from typing import Iterable, Iterator, Sequence

from .checker.tsc import STAGE_TAG
from .exceptions import InvalidPathError
from .logging_config import get_logger

logger = get_logger(__name__)


def _is_excluded(path: Path, root: Path, exclude_patterns: Sequence[str]) -> bool:
    relative = path.relative_to(root)
    return any(part in exclude_patterns for part in relative.parts[:-1])


def expand_paths(
    paths: Iterable[Path],
    extensions: Sequence[str] = (".ts", ".tsx", ".mts", ".cts"),
    exclude_patterns: Sequence[str] = ("node_modules",),
) -> Iterator[Path]:
    """Yield files as given and the matching files below directories.

    Files named explicitly are always yielded. Directory contents are
    filtered by extension, skip excluded directory names and come out sorted.
    Patched copies left behind by an interrupted tsc run are skipped.

    Raises:
        InvalidPathError: If a path does not exist
    """
    suffixes = {ext.lower() for ext in extensions}
    for path in paths:
        if path.is_dir():
            found = 0
            for candidate in sorted(path.rglob("*")):
                if not candidate.is_file() or candidate.suffix.lower() not in suffixes:
                    continue
                if _is_excluded(candidate, path, exclude_patterns):
                    continue
                if candidate.stem.endswith(f".{STAGE_TAG}"):
                    continue
                found += 1
                yield candidate
            logger.debug(f"{path}: {found} file(s)")
        elif path.is_file():
            yield path
        else:
            raise InvalidPathError(path, "no such file or directory")
