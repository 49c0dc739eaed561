"""Checker exceptions: running tsc and reading diagnostics."""

from pathlib import Path
from typing import Optional

from .base import TsExpectErrorError


class CheckerError(TsExpectErrorError):
    """Raised when the type checker cannot produce diagnostics."""

    def __init__(self, reason: str, command: Optional[str] = None):
        details = {"reason": reason}
        if command:
            details["command"] = command
        super().__init__("Type checker failed", details=details)
        self.reason = reason
        self.command = command


class CheckerNotFoundError(CheckerError):
    """Raised when the tsc executable cannot be located."""

    def __init__(self, command: str):
        super().__init__(f"executable not found: {command}", command=command)


class DiagnosticsFormatError(CheckerError):
    """Raised when a diagnostics file does not have the expected shape."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(f"{filepath}: {reason}")
        self.filepath = filepath
