"""Read diagnostics that were produced ahead of time.

Two formats are supported: a JSON array of diagnostic objects, and the
captured output of ``tsc --pretty false``.

JSON entries look like::

    {"file": "src/demo.ts", "line": 11, "code": 2353,
     "message": {"messageText": "Argument of type ...", "next": [...]}}

``line`` and ``column`` are 0-based; ``message`` is a string or a chain.
"""

import json
import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence

from ..exceptions import DiagnosticsFormatError
from ..models import Diagnostic, MessageChain, MessageText
from .base import BaseChecker, resolve_file, sort_and_deduplicate
from .tsc_output import parse_tsc_output

STDIN = "-"


def parse_message(value: Any) -> MessageText:
    """Turn a JSON string or ``{"messageText", "next"}`` object into a message."""
    if isinstance(value, str):
        return value
    if isinstance(value, dict) and isinstance(value.get("messageText"), str):
        next_items = value.get("next") or []
        if not isinstance(next_items, list):
            raise ValueError("'next' must be a list")
        return MessageChain(value["messageText"], tuple(parse_message(n) for n in next_items))
    raise ValueError("message must be a string or an object with 'messageText'")


def _int_field(item: dict, key: str, default: Optional[int] = None) -> int:
    value = item.get(key, default)
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ValueError(f"'{key}' must be a non-negative integer")
    return value


def diagnostic_from_dict(item: Any, base_dir: Optional[Path] = None) -> Diagnostic:
    if not isinstance(item, dict):
        raise ValueError("entry must be an object")
    file = item.get("file")
    if file is not None and not isinstance(file, str):
        raise ValueError("'file' must be a string or null")
    message = parse_message(item.get("message"))
    # chains with a single link are reported as plain strings
    if isinstance(message, MessageChain) and not message.next:
        message = message.message_text
    return Diagnostic(
        file=resolve_file(file, base_dir) if file is not None else None,
        line=_int_field(item, "line", 0 if file is None else None),
        message=message,
        code=_int_field(item, "code"),
        column=_int_field(item, "column", 0),
        category=str(item.get("category", "error")),
    )


def _read(path: Path) -> str:
    if str(path) == STDIN:
        return sys.stdin.read()
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise DiagnosticsFormatError(path, str(e)) from e


class JsonDiagnosticsChecker(BaseChecker):
    """Diagnostics from a JSON file."""

    def __init__(self, path: Path, base_dir: Optional[Path] = None):
        self.path = path
        self.base_dir = base_dir

    def collect(self, files: Sequence[Path]) -> List[Diagnostic]:
        try:
            data = json.loads(_read(self.path))
        except json.JSONDecodeError as e:
            raise DiagnosticsFormatError(self.path, f"invalid JSON: {e}") from e
        if not isinstance(data, list):
            raise DiagnosticsFormatError(self.path, "expected a JSON array of diagnostics")

        diagnostics = []
        for i, item in enumerate(data):
            try:
                diagnostics.append(diagnostic_from_dict(item, self.base_dir))
            except ValueError as e:
                raise DiagnosticsFormatError(self.path, f"entry {i}: {e}") from e
        return sort_and_deduplicate(diagnostics)


class TscOutputChecker(BaseChecker):
    """Diagnostics from captured ``tsc --pretty false`` output."""

    def __init__(self, path: Path, base_dir: Optional[Path] = None):
        self.path = path
        self.base_dir = base_dir

    def collect(self, files: Sequence[Path]) -> List[Diagnostic]:
        return sort_and_deduplicate(parse_tsc_output(_read(self.path), base_dir=self.base_dir))
