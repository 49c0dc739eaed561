"""Errors in command-line arguments, settings files and environment variables."""

from pathlib import Path
from typing import Any, Iterable

from .base import TsExpectErrorError


class ConfigurationError(TsExpectErrorError):
    """Base class for configuration-related errors."""


class InvalidPathError(ConfigurationError):
    """A path argument that does not exist or cannot be read."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Invalid path: {path}", details={"reason": reason})
        self.path = path
        self.reason = reason


class MissingConfigFileError(ConfigurationError):
    """The settings file given with ``--config`` does not exist."""

    def __init__(self, path: Path):
        super().__init__(f"Config file not found: {path}")
        self.path = path


class UnknownConfigKeyError(ConfigurationError):
    """A settings source names keys that ``CheckSettings`` does not have."""

    def __init__(self, keys: Iterable[str]):
        self.keys = sorted(keys)
        super().__init__(f"Unknown configuration key(s): {', '.join(self.keys)}")


class InvalidConfigError(ConfigurationError):
    """A setting with a value of the wrong type or out of range."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(f"Invalid value for {key}: {value!r}", details={"reason": reason})
        self.key = key
        self.value = value
        self.reason = reason
