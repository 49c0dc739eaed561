"""Match one annotation against the diagnostics reported on its line."""

from typing import Optional

from .diagnostic_index import FileDiagnosticIndex
from .expectation import Expectation
from .models import MatchOutcome

NO_DIAGNOSTIC = "no diagnostic on this line"
MORE_THAN_ONE_DIAGNOSTIC = "more than one diagnostic on this line"


def expectation_matches(expected: Expectation, actual_message: str, actual_code: Optional[int]) -> bool:
    """Compare an expectation with a flattened, normalized actual message and code."""
    if expected.code is not None and expected.code != actual_code:
        return False
    if expected.message is not None:
        prefix = expected.prefix
        if prefix is not None:
            if not actual_message.startswith(prefix):
                return False
        elif expected.message != actual_message:
            return False
    return True


def match_annotation(expected: Expectation, line: int, file_index: FileDiagnosticIndex) -> MatchOutcome:
    """Claim the diagnostics on ``line`` and decide whether ``expected`` holds.

    A line with several diagnostics always fails: there is no way to tell
    which of them the annotation is about.
    """
    diagnostics = file_index.take_and_clear(line)
    expected_display = str(expected)

    if not diagnostics:
        return MatchOutcome(line, expected_display, NO_DIAGNOSTIC, succeeded=False)
    if len(diagnostics) > 1:
        return MatchOutcome(line, expected_display, MORE_THAN_ONE_DIAGNOSTIC, succeeded=False)

    actual = diagnostics[0]
    return MatchOutcome(
        line,
        expected_display,
        str(actual),
        succeeded=expectation_matches(expected, actual.flat_message, actual.code),
    )
