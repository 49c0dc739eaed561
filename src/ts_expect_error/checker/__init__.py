"""Diagnostic sources: a live tsc run or diagnostics captured earlier."""

from .base import BaseChecker, sort_and_deduplicate
from .json_diagnostics import JsonDiagnosticsChecker, TscOutputChecker
from .tsc import TscChecker
from .tsc_output import parse_tsc_output

__all__ = [
    "BaseChecker",
    "TscChecker",
    "TscOutputChecker",
    "JsonDiagnosticsChecker",
    "parse_tsc_output",
    "sort_and_deduplicate",
]
