"""Annotation markers and the expectations they declare.

An annotation is a line comment such as::

    // @ts-expect-error: Object literal may only specify known properties, and
    // 'z' does not exist in type 'Point'. (2353)

The text after the marker, including continuation comment lines, is parsed
into an ``Expectation``: an optional message and an optional numeric code.
A message ending in ``[...]`` only has to be a prefix of the actual message.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Pattern

from .exceptions import AnnotationParseError, MalformedCommentError
from .models import normalize_whitespace

MARKER_TOKEN = "ts-expect-error"

# The compiler treats `@ts-expect-error` as its own suppression directive,
# so sources are patched to the `%` spelling before anything else sees them.
_RE_COMPILER_DIRECTIVE = re.compile(r"(// *)@" + MARKER_TOKEN + ":")
RE_MARKER_PREFIX = re.compile(r"^// *%" + MARKER_TOKEN + ":")
RE_MARKER_ANYWHERE = re.compile(r"// *%" + MARKER_TOKEN + ":")

COMMENT_PREFIX = "//"
ELLIPSIS = "[...]"
_RE_ERROR_CODE = re.compile(r"\(([0-9]+)\)\s*$")


def patch_source_text(text: str) -> str:
    """Rewrite ``// @ts-expect-error:`` annotations to ``// %ts-expect-error:``."""
    return _RE_COMPILER_DIRECTIVE.sub(r"\1%" + MARKER_TOKEN + ":", text)


def count_markers(text: str) -> int:
    """Count annotation markers in (patched) source text."""
    return len(RE_MARKER_ANYWHERE.findall(text))


def extract_comment_text(
    comment_parts: List[str], prefix_re: Pattern[str] = RE_MARKER_PREFIX
) -> Optional[str]:
    """Return the annotation text of a comment group, or None if it has none.

    The first part carrying the marker starts the annotation; every part
    after it is a continuation line and must be a ``//`` comment.
    """
    for index, part in enumerate(comment_parts):
        match = prefix_re.match(part)
        if match:
            text = part[match.end():]
            return _join_continuation(text, comment_parts, index + 1)
    return None


def _join_continuation(start_text: str, comment_parts: List[str], start_index: int) -> str:
    text = start_text
    for part in comment_parts[start_index:]:
        if not part.startswith(COMMENT_PREFIX):
            raise MalformedCommentError(comment_parts)
        text += part[len(COMMENT_PREFIX):]
    return normalize_whitespace(text.strip())


@dataclass(frozen=True)
class Expectation:
    """The diagnostic an annotation expects. Absent fields match anything."""

    message: Optional[str] = None
    code: Optional[int] = None

    def __post_init__(self) -> None:
        if self.message is None and self.code is None:
            raise AnnotationParseError("")

    @classmethod
    def parse(cls, text: str) -> "Expectation":
        """Parse annotation text of the form ``[message] [(code)]``.

        Raises:
            AnnotationParseError: If neither a message nor a code is present
        """
        code: Optional[int] = None
        message = text
        code_match = _RE_ERROR_CODE.search(text)
        if code_match:
            code = int(code_match.group(1))
            message = text[: code_match.start()]

        message = normalize_whitespace(message.strip())
        if not message and code is None:
            raise AnnotationParseError(text)
        return cls(message=message or None, code=code)

    @property
    def is_prefix(self) -> bool:
        return self.message is not None and self.message.endswith(ELLIPSIS)

    @property
    def prefix(self) -> Optional[str]:
        """Message with the ellipsis sentinel and trailing whitespace removed."""
        if not self.is_prefix:
            return None
        return self.message[: -len(ELLIPSIS)].rstrip()

    def __str__(self) -> str:
        parts = []
        if self.message is not None:
            parts.append(self.message)
        if self.code is not None:
            parts.append(f"({self.code})")
        return " ".join(parts)
