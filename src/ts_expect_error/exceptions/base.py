"""Root of the ts-expect-error exception hierarchy.

Every error carries a short message plus optional details that are appended
when it is printed, and the exit status the command line ends with when the
error stops a run.
"""

from typing import Dict, Optional


class TsExpectErrorError(Exception):
    """Base exception for all ts-expect-error errors."""

    #: usage, configuration and checker problems
    exit_code = 2

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})

    def __str__(self) -> str:
        if not self.details:
            return self.message
        rendered = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({rendered})"
