"""Exception hierarchy for ts-expect-error."""

from .annotation import (
    AnnotationCountMismatchError,
    AnnotationError,
    AnnotationParseError,
    InternalError,
    MalformedCommentError,
)
from .base import TsExpectErrorError
from .checker import CheckerError, CheckerNotFoundError, DiagnosticsFormatError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
    MissingConfigFileError,
    UnknownConfigKeyError,
)

__all__ = [
    "TsExpectErrorError",
    "AnnotationError",
    "AnnotationParseError",
    "InternalError",
    "MalformedCommentError",
    "AnnotationCountMismatchError",
    "CheckerError",
    "CheckerNotFoundError",
    "DiagnosticsFormatError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
    "MissingConfigFileError",
    "UnknownConfigKeyError",
]
