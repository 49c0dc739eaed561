"""Tests for data models: message chains, diagnostics and counters."""

from ts_expect_error.models import (
    Diagnostic,
    MessageChain,
    StatusCounts,
    flatten_message_text,
    normalize_whitespace,
)


def _chain():
    return MessageChain(
        "Argument of type '{ x: number; }' is not assignable to parameter of type 'Point'.",
        (
            MessageChain(
                "Property 'y' is missing in type '{ x: number; }' but required in type 'Point'.",
                (MessageChain("Nested detail."),),
            ),
        ),
    )


class TestNormalizeWhitespace:
    def test_collapses_runs(self):
        assert normalize_whitespace("a  b\n\t c") == "a b c"

    def test_keeps_single_spaces(self):
        assert normalize_whitespace("a b c") == "a b c"


class TestFlattenMessageText:
    def test_plain_string(self):
        assert flatten_message_text("Cannot find name 'x'.") == "Cannot find name 'x'."

    def test_chain_is_indented_per_level(self):
        flat = flatten_message_text(_chain())
        lines = flat.split("\n")
        assert lines[0].startswith("Argument of type")
        assert lines[1].startswith("  Property 'y'")
        assert lines[2] == "    Nested detail."

    def test_custom_separator(self):
        flat = flatten_message_text(MessageChain("a", (MessageChain("b"),)), new_line=" | ")
        assert flat == "a |   b"


class TestDiagnostic:
    def test_flat_message_normalizes_chain(self):
        d = Diagnostic(file="a.ts", line=3, message=_chain(), code=2345)
        assert d.flat_message == (
            "Argument of type '{ x: number; }' is not assignable to parameter of type 'Point'. "
            "Property 'y' is missing in type '{ x: number; }' but required in type 'Point'. "
            "Nested detail."
        )

    def test_str_includes_code(self):
        d = Diagnostic(file="a.ts", line=0, message="Foo  is\nmissing", code=1002)
        assert str(d) == "Foo is missing (1002)"


class TestStatusCounts:
    def test_check_count(self):
        counts = StatusCounts(success_count=2, failure_count=1)
        assert counts.check_count == 3

    def test_leftovers_only_count_when_reported(self):
        counts = StatusCounts(success_count=1, leftover_count=2)
        assert counts.passed(report_unexpected_errors=False)
        assert not counts.passed(report_unexpected_errors=True)
        assert counts.problem_count(True) == 2

    def test_add_and_reset(self):
        total = StatusCounts()
        total.add(StatusCounts(1, 2, 3))
        total.add(StatusCounts(1, 0, 1))
        assert (total.success_count, total.failure_count, total.leftover_count) == (2, 2, 4)
        total.reset()
        assert total == StatusCounts()

    def test_describe(self):
        counts = StatusCounts(3, 1, 2)
        assert counts.describe(False) == "successes: 3, failures: 1"
        assert counts.describe(True) == "successes: 3, failures: 1, errors: 2"
