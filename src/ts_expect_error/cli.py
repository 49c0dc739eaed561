"""Command-line interface for ts-expect-error

Exit status: 0 when every check passed, 1 when a check failed or a file was
aborted, 2 for usage, configuration and checker errors, 3 for internal errors.
"""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from . import __version__
from .checker import BaseChecker, JsonDiagnosticsChecker, TscChecker, TscOutputChecker
from .config import CheckSettings, load_settings
from .core.runner import perform_static_checks
from .discovery import expand_paths
from .exceptions import ConfigurationError, InternalError, TsExpectErrorError
from .formatters import get_reporter
from .logging_config import setup_logging

EXIT_OK = 0

app = typer.Typer(
    name="ts-expect-error",
    help="Check that // @ts-expect-error: annotations match the errors tsc reports",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

console = Console()
err_console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        console.print(__version__)
        raise typer.Exit()


def build_checker(
    settings: CheckSettings,
    diagnostics: Optional[Path] = None,
    tsc_output: Optional[str] = None,
) -> BaseChecker:
    """Pick the diagnostic source from the CLI options."""
    if diagnostics is not None and tsc_output is not None:
        raise ConfigurationError("--diagnostics and --tsc-output cannot be combined")
    if diagnostics is not None:
        return JsonDiagnosticsChecker(diagnostics)
    if tsc_output is not None:
        return TscOutputChecker(Path(tsc_output))
    return TscChecker(
        tsc_command=settings.tsc_command,
        tsconfig=settings.tsconfig_path,
        compiler_options=settings.compiler_options,
        timeout_seconds=settings.tsc_timeout_seconds,
    )


@app.command()
def main(
    ctx: typer.Context,
    paths: Optional[List[Path]] = typer.Argument(
        None,
        help="Files or directories to check (directories are searched recursively)",
        show_default=False,
    ),
    tsconfig: Optional[Path] = typer.Option(
        None,
        "--tsconfig",
        help="tsconfig.json to compile with (default: strict built-in options)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    unexpected_errors: bool = typer.Option(
        False,
        "--unexpected-errors",
        "-e",
        help="Also fail on errors that no annotation expects",
    ),
    diagnostics: Optional[Path] = typer.Option(
        None,
        "--diagnostics",
        help="Read diagnostics from a JSON file instead of running tsc",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    tsc_output: Optional[str] = typer.Option(
        None,
        "--tsc-output",
        help="Read captured `tsc --pretty false` output instead of running tsc ('-' = stdin)",
    ),
    tsc: Optional[str] = typer.Option(
        None,
        "--tsc",
        help="Command that runs the TypeScript compiler (default: tsc)",
    ),
    fmt: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format: rich (default), json, github, quiet",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file path (TOML format)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable verbose logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append log records to this file",
        dir_okay=False,
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Print the version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """
    Compile TypeScript files and verify every [bold]// @ts-expect-error:[/bold]
    annotation against the error reported on the line below it.

    [bold cyan]Examples:[/bold cyan]

      ts-expect-error src/

      ts-expect-error --tsconfig tsconfig.json -e test/types/

      ts-expect-error --diagnostics diagnostics.json demo.ts
    """
    if not paths:
        typer.echo(ctx.get_help())
        raise typer.Exit(EXIT_OK)

    try:
        settings = load_settings(
            config_file=config,
            tsconfig=str(tsconfig) if tsconfig else None,
            report_unexpected_errors=True if unexpected_errors else None,
            output_format=fmt,
            tsc_command=tsc,
            verbose=verbose,
            quiet=quiet,
        )
        setup_logging(settings.verbosity, log_file=str(log_file) if log_file else None)
        files = list(expand_paths(paths, settings.extensions, settings.exclude_patterns))
        checker = build_checker(settings, diagnostics, tsc_output)
        reporter = get_reporter(
            settings.output_format,
            report_unexpected_errors=settings.report_unexpected_errors,
            single_file_mode=len(files) == 1,
        )
        exit_code = perform_static_checks(
            files,
            checker,
            reporter,
            report_unexpected_errors=settings.report_unexpected_errors,
        )
    except InternalError as e:
        err_console.print(f"[red bold]Internal error:[/red bold] {escape(str(e))}")
        raise typer.Exit(e.exit_code)
    except TsExpectErrorError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(e.exit_code)

    raise typer.Exit(exit_code)
