"""Configuration loading and management for ts-expect-error.

Configuration sources are merged in priority order:
    1. Defaults (defined in CheckSettings)
    2. Global config (~/.ts-expect-error.toml)
    3. Project config (./ts-expect-error.toml)
    4. Explicit config file (--config)
    5. Environment variables (TS_EXPECT_ERROR_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> settings = load_settings(report_unexpected_errors=True)
    >>> settings.report_unexpected_errors
    True
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Literal, Optional, get_args, get_type_hints

from .exceptions import (
    ConfigurationError,
    InvalidConfigError,
    MissingConfigFileError,
    UnknownConfigKeyError,
)

Verbosity = Literal["quiet", "normal", "verbose"]
OutputFormat = Literal["rich", "json", "github", "quiet"]

ENV_PREFIX = "TS_EXPECT_ERROR_"
CONFIG_FILE_NAME = "ts-expect-error.toml"


def _default_compiler_options() -> dict[str, Any]:
    """Compiler options used when no tsconfig.json is given (tsconfig.json spelling)."""
    return {
        "noEmit": True,
        "module": "NodeNext",
        "target": "ESNext",
        "resolveJsonModule": True,
        "strict": True,
        "exactOptionalPropertyTypes": True,
        "noFallthroughCasesInSwitch": True,
        "noImplicitOverride": True,
        "noImplicitReturns": True,
        "noPropertyAccessFromIndexSignature": True,
        "noUncheckedIndexedAccess": True,
    }


@dataclass(frozen=True)
class CheckSettings:
    """Settings for one ts-expect-error run.

    Attributes:
        tsconfig: tsconfig.json passed to tsc; None means compiler_options
        report_unexpected_errors: Fail on diagnostics no annotation claims
        output_format: Reporter name
        tsc_command: Command line that starts tsc
        tsc_timeout_seconds: Kill tsc after this long (None = wait forever)
        extensions: File extensions picked up when expanding directories
        exclude_patterns: Directory names skipped when expanding directories
        compiler_options: compilerOptions used without a tsconfig
        verbosity: Logging verbosity
    """

    tsconfig: Optional[str] = None
    report_unexpected_errors: bool = False
    output_format: OutputFormat = "rich"
    tsc_command: str = "tsc"
    tsc_timeout_seconds: Optional[int] = None
    extensions: list[str] = field(default_factory=lambda: [".ts", ".tsx", ".mts", ".cts"])
    exclude_patterns: list[str] = field(default_factory=lambda: ["node_modules"])
    compiler_options: dict[str, Any] = field(default_factory=_default_compiler_options)
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.output_format not in get_args(OutputFormat):
            raise InvalidConfigError(
                "output_format", self.output_format, f"must be one of {', '.join(get_args(OutputFormat))}"
            )
        if self.verbosity not in get_args(Verbosity):
            raise InvalidConfigError(
                "verbosity", self.verbosity, f"must be one of {', '.join(get_args(Verbosity))}"
            )
        if not self.tsc_command.strip():
            raise InvalidConfigError("tsc_command", self.tsc_command, "must not be empty")
        if self.tsc_timeout_seconds is not None and self.tsc_timeout_seconds < 1:
            raise InvalidConfigError("tsc_timeout_seconds", self.tsc_timeout_seconds, "must be at least 1")
        if not self.extensions:
            raise InvalidConfigError("extensions", self.extensions, "must not be empty")
        for ext in self.extensions:
            if not ext.startswith("."):
                raise InvalidConfigError("extensions", ext, "must start with '.'")

    @property
    def tsconfig_path(self) -> Optional[Path]:
        return Path(self.tsconfig) if self.tsconfig else None


def load_settings(config_file: Optional[Path] = None, **overrides) -> CheckSettings:
    """Load settings with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags); None values
            are ignored so unset CLI options do not mask file settings

    Returns:
        Validated CheckSettings instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / f".{CONFIG_FILE_NAME}"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / CONFIG_FILE_NAME
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise MissingConfigFileError(config_file)
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    # [compiler_options] replaces the defaults as a whole
    compiler_options = merged.get("compiler_options")
    if compiler_options is not None and not isinstance(compiler_options, dict):
        raise InvalidConfigError("compiler_options", compiler_options, "must be a table")

    known = {f.name for f in fields(CheckSettings)}
    unknown = set(merged) - known
    if unknown:
        raise UnknownConfigKeyError(unknown)

    try:
        return CheckSettings(**merged)
    except (TypeError, AttributeError) as e:
        # Wrongly typed value in a config file
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from TS_EXPECT_ERROR_* environment variables.

    Supported environment variables:
        TS_EXPECT_ERROR_TSCONFIG: path
        TS_EXPECT_ERROR_REPORT_UNEXPECTED_ERRORS: bool (true/false/1/0)
        TS_EXPECT_ERROR_OUTPUT_FORMAT: rich/json/github/quiet
        TS_EXPECT_ERROR_TSC_COMMAND: str
        TS_EXPECT_ERROR_TSC_TIMEOUT_SECONDS: int
        TS_EXPECT_ERROR_VERBOSITY: quiet/normal/verbose

    Returns:
        Dict of field_name -> parsed_value for any variables found.
    """
    type_hints = get_type_hints(CheckSettings)

    result: dict[str, Any] = {}

    for f in fields(CheckSettings):
        env_key = f"{ENV_PREFIX}{f.name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hints[f.name])
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[f.name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Returns None for types that cannot come from the environment (lists
    and tables).

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    args = get_args(type_hint)
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]

    origin = getattr(type_hint, "__origin__", None)

    if origin in (list, dict):
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If the file cannot be read or parsed
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}") from e
