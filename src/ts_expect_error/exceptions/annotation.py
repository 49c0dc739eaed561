"""Annotation exceptions: authoring mistakes and broken internal invariants.

``AnnotationError`` subclasses are the user's fault and abort one file.
``InternalError`` subclasses mean the comment extraction and the marker count
disagree; they abort the whole run.
"""

from pathlib import Path
from typing import List, Optional

from .base import TsExpectErrorError


class AnnotationError(TsExpectErrorError):
    """Base class for errors in how an annotation is written."""

    #: the file is aborted and the run fails
    exit_code = 1


class AnnotationParseError(AnnotationError):
    """Raised when an annotation carries neither a message nor a code."""

    def __init__(
        self,
        text: str,
        reason: str = "Neither message nor code was provided",
        line: Optional[int] = None,
    ):
        details = {"text": repr(text)}
        if line is not None:
            details["line"] = str(line + 1)
        super().__init__(reason, details=details)
        self.text = text
        self.reason = reason
        self.line = line


class InternalError(TsExpectErrorError):
    """Base class for violated internal invariants."""

    exit_code = 3


class MalformedCommentError(InternalError):
    """Raised when a continuation part of a comment group is not a line comment."""

    def __init__(self, comment_parts: List[str]):
        super().__init__(
            "Malformed comment group",
            details={"parts": repr(comment_parts)},
        )
        self.comment_parts = comment_parts


class AnnotationCountMismatchError(InternalError):
    """Raised when the textual marker count differs from the checks performed."""

    def __init__(self, expected: int, performed: int, filepath: Optional[Path] = None):
        details = {"markers": str(expected), "checks": str(performed)}
        if filepath:
            details["filepath"] = str(filepath)

        super().__init__(
            f"File contains {expected} check(s), we only found {performed} check(s)",
            details=details,
        )
        self.expected = expected
        self.performed = performed
        self.filepath = filepath
