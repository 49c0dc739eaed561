"""Run the TypeScript compiler and collect its diagnostics."""

import json
import os
import shlex
import subprocess
import tempfile
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ..exceptions import CheckerError, CheckerNotFoundError
from ..expectation import patch_source_text
from ..logging_config import get_logger
from ..models import Diagnostic
from .base import BaseChecker, sort_and_deduplicate
from .tsc_output import parse_tsc_output

logger = get_logger(__name__)

STAGE_TAG = "ts-expect-error"

# tsc: 0 = no errors, 1 = errors and no output, 2 = errors and output
_TSC_OK_EXIT_CODES = (0, 1, 2)


def staged_path(path: Path) -> Path:
    """Sibling path for the patched copy of ``path``."""
    return path.with_name(f"{path.stem}.{STAGE_TAG}{path.suffix}")


class StagedSources:
    """Patched copies of annotated files, written next to the originals.

    tsc would treat ``// @ts-expect-error:`` as its own directive and hide
    the very errors we want to see, so files containing it are compiled from
    a patched sibling copy. Siblings keep relative imports resolvable.
    """

    def __init__(self, files: Sequence[Path]):
        self.files = [Path(f).resolve() for f in files]
        self._staged: Dict[str, Path] = {}
        self.paths: List[Path] = []

    def __enter__(self) -> "StagedSources":
        try:
            for original in self.files:
                text = original.read_text(encoding="utf-8")
                patched = patch_source_text(text)
                if patched == text:
                    self.paths.append(original)
                    continue
                copy = staged_path(original)
                if copy.exists():
                    raise CheckerError(f"refusing to overwrite existing file {copy}")
                copy.write_text(patched, encoding="utf-8")
                self._staged[str(copy)] = original
                self.paths.append(copy)
                logger.debug(f"Staged {original} as {copy.name}")
        except BaseException:
            self.cleanup()
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    def cleanup(self) -> None:
        for copy in self._staged:
            Path(copy).unlink(missing_ok=True)

    def map_back(self, diagnostics: Sequence[Diagnostic]) -> List[Diagnostic]:
        """Report diagnostics of staged copies against their originals.

        Diagnostics of an original file that was staged come from tsc
        reaching it through an import; they are dropped.
        """
        originals = {str(p) for p in self._staged.values()}
        result: List[Diagnostic] = []
        for diagnostic in diagnostics:
            if diagnostic.file is None:
                result.append(diagnostic)
                continue
            key = str(Path(diagnostic.file).resolve())
            if key in self._staged:
                result.append(replace(diagnostic, file=str(self._staged[key])))
            elif key not in originals:
                result.append(diagnostic)
        return result


class TscChecker(BaseChecker):
    """Collect diagnostics by running ``tsc --noEmit`` on the given files."""

    def __init__(
        self,
        tsc_command: str = "tsc",
        tsconfig: Optional[Path] = None,
        compiler_options: Optional[Dict[str, Any]] = None,
        cwd: Optional[Path] = None,
        timeout_seconds: Optional[int] = None,
    ):
        self.tsc_command = tsc_command
        self.tsconfig = tsconfig
        self.compiler_options = dict(compiler_options or {})
        self.cwd = cwd
        self.timeout_seconds = timeout_seconds

    def collect(self, files: Sequence[Path]) -> List[Diagnostic]:
        if not files:
            return []
        cwd = (self.cwd or Path.cwd()).resolve()
        with StagedSources(files) as staging:
            project = self._write_project(staging.paths, cwd)
            try:
                output = self._run(project, cwd)
            finally:
                project.unlink(missing_ok=True)
        diagnostics = parse_tsc_output(output, base_dir=cwd)
        return sort_and_deduplicate(staging.map_back(diagnostics))

    def project_config(self, paths: Sequence[Path]) -> Dict[str, Any]:
        """Contents of the temporary project file that lists ``paths``."""
        config: Dict[str, Any] = {"files": [str(p) for p in paths], "include": []}
        if self.tsconfig is not None:
            config["extends"] = str(self.tsconfig.resolve())
        else:
            config["compilerOptions"] = self.compiler_options
        return config

    def _write_project(self, paths: Sequence[Path], cwd: Path) -> Path:
        # Next to the user's tsconfig so that type roots resolve the same way
        project_dir = self.tsconfig.resolve().parent if self.tsconfig is not None else cwd
        fd, name = tempfile.mkstemp(prefix=f".{STAGE_TAG}-", suffix=".json", dir=project_dir)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(self.project_config(paths), f, indent=2)
        return Path(name)

    def _run(self, project: Path, cwd: Path) -> str:
        cmd = shlex.split(self.tsc_command) + [
            "--project",
            str(project),
            "--pretty",
            "false",
            "--noEmit",
        ]
        logger.info(f"Running {shlex.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds,
            )
        except FileNotFoundError as e:
            raise CheckerNotFoundError(cmd[0]) from e
        except subprocess.TimeoutExpired as e:
            raise CheckerError(
                f"timed out after {self.timeout_seconds}s", command=shlex.join(cmd)
            ) from e

        if result.returncode not in _TSC_OK_EXIT_CODES:
            reason = (result.stderr or result.stdout).strip() or f"exit status {result.returncode}"
            raise CheckerError(reason, command=shlex.join(cmd))
        logger.debug(f"tsc exited with status {result.returncode}")
        return result.stdout
