"""
ts-expect-error - compile-time assertions for TypeScript diagnostics

Annotate a statement with ``// @ts-expect-error: <message> (<code>)`` and this
tool checks, after running the TypeScript compiler, that the annotated line
produced exactly that diagnostic and nothing else.
"""

__version__ = "0.3.0"

from .core.runner import StaticCheckRun, check_file, perform_static_checks
from .diagnostic_index import FileDiagnosticIndex, ProgramDiagnosticIndex
from .expectation import Expectation
from .matching import match_annotation
from .models import Diagnostic, MatchOutcome, MessageChain

__all__ = [
    "perform_static_checks",  # Main entry point
    "check_file",
    "StaticCheckRun",
    "Diagnostic",
    "MessageChain",
    "MatchOutcome",
    "Expectation",
    "FileDiagnosticIndex",
    "ProgramDiagnosticIndex",
    "match_annotation",
]
