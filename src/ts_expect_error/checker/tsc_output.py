"""Parse the plain-text diagnostics printed by ``tsc --pretty false``.

    src/demo.ts(12,1): error TS2345: Argument of type '{ x: number; }' is not ...
      Property 'y' is missing in type '{ x: number; }' but required in type 'Point'.
    error TS5023: Unknown compiler option 'foo'.

Indented lines continue the previous diagnostic as a message chain, two
spaces per level.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..models import Diagnostic, MessageChain, MessageText
from .base import resolve_file

_CATEGORIES = "error|warning|message|suggestion"
_RE_FILE_DIAGNOSTIC = re.compile(
    r"^(?P<file>.+?)\((?P<line>\d+),(?P<column>\d+)\): "
    rf"(?P<category>{_CATEGORIES}) TS(?P<code>\d+): (?P<message>.*)$"
)
_RE_GLOBAL_DIAGNOSTIC = re.compile(
    rf"^(?P<category>{_CATEGORIES}) TS(?P<code>\d+): (?P<message>.*)$"
)
_INDENT = "  "


@dataclass
class _ChainBuilder:
    text: str
    depth: int
    children: List["_ChainBuilder"] = field(default_factory=list)

    def build(self) -> MessageChain:
        return MessageChain(self.text, tuple(child.build() for child in self.children))


@dataclass
class _PendingDiagnostic:
    file: Optional[str]
    line: int
    column: int
    category: str
    code: int
    root: _ChainBuilder

    def build(self) -> Diagnostic:
        message: MessageText = self.root.text
        if self.root.children:
            message = self.root.build()
        return Diagnostic(
            file=self.file,
            line=self.line,
            message=message,
            code=self.code,
            column=self.column,
            category=self.category,
        )


def _continuation_depth(line: str) -> int:
    stripped = line.lstrip(" ")
    return (len(line) - len(stripped)) // len(_INDENT)


def parse_tsc_output(text: str, base_dir: Optional[Path] = None) -> List[Diagnostic]:
    """Parse tsc output into diagnostics with 0-based lines and columns.

    File paths are resolved against ``base_dir`` (the directory tsc ran in).
    Lines that are neither diagnostics nor continuations are ignored.
    """
    diagnostics: List[Diagnostic] = []
    pending: Optional[_PendingDiagnostic] = None
    chain: List[_ChainBuilder] = []

    def flush() -> None:
        nonlocal pending
        if pending is not None:
            diagnostics.append(pending.build())
        pending = None
        chain.clear()

    for raw_line in text.splitlines():
        line = raw_line.rstrip("\r")

        match = _RE_FILE_DIAGNOSTIC.match(line)
        if match:
            flush()
            root = _ChainBuilder(match.group("message"), depth=0)
            pending = _PendingDiagnostic(
                file=resolve_file(match.group("file"), base_dir),
                line=int(match.group("line")) - 1,
                column=int(match.group("column")) - 1,
                category=match.group("category"),
                code=int(match.group("code")),
                root=root,
            )
            chain.append(root)
            continue

        match = _RE_GLOBAL_DIAGNOSTIC.match(line)
        if match:
            flush()
            root = _ChainBuilder(match.group("message"), depth=0)
            pending = _PendingDiagnostic(
                file=None,
                line=0,
                column=0,
                category=match.group("category"),
                code=int(match.group("code")),
                root=root,
            )
            chain.append(root)
            continue

        if pending is not None and line.startswith(_INDENT) and line.strip():
            depth = max(1, _continuation_depth(line))
            while len(chain) > 1 and chain[-1].depth >= depth:
                chain.pop()
            node = _ChainBuilder(line.strip(), depth=depth)
            chain[-1].children.append(node)
            chain.append(node)
            continue

        flush()

    flush()
    return diagnostics
