"""Tests for the exception hierarchy."""

from pathlib import Path

from ts_expect_error.exceptions import (
    AnnotationCountMismatchError,
    AnnotationError,
    AnnotationParseError,
    CheckerError,
    CheckerNotFoundError,
    ConfigurationError,
    DiagnosticsFormatError,
    InternalError,
    InvalidConfigError,
    InvalidPathError,
    MalformedCommentError,
    TsExpectErrorError,
)


class TestHierarchy:
    def test_everything_derives_from_base(self):
        for cls in (
            AnnotationError,
            InternalError,
            CheckerError,
            ConfigurationError,
        ):
            assert issubclass(cls, TsExpectErrorError)

    def test_internal_errors(self):
        assert issubclass(MalformedCommentError, InternalError)
        assert issubclass(AnnotationCountMismatchError, InternalError)
        assert not issubclass(AnnotationParseError, InternalError)

    def test_checker_errors(self):
        assert issubclass(CheckerNotFoundError, CheckerError)
        assert issubclass(DiagnosticsFormatError, CheckerError)

    def test_config_errors(self):
        assert issubclass(InvalidPathError, ConfigurationError)
        assert issubclass(InvalidConfigError, ConfigurationError)


class TestMessages:
    def test_base_without_details(self):
        assert str(TsExpectErrorError("boom")) == "boom"

    def test_base_with_details(self):
        assert str(TsExpectErrorError("boom", {"a": "1", "b": "2"})) == "boom (a=1, b=2)"

    def test_parse_error_line_is_one_based(self):
        e = AnnotationParseError("", line=9)
        assert e.line == 9
        assert e.details["line"] == "10"

    def test_count_mismatch(self):
        e = AnnotationCountMismatchError(3, 2, Path("a.ts"))
        assert e.message == "File contains 3 check(s), we only found 2 check(s)"
        assert e.details["filepath"] == "a.ts"

    def test_checker_not_found(self):
        e = CheckerNotFoundError("tsc")
        assert "executable not found: tsc" in str(e)
        assert e.command == "tsc"

    def test_invalid_config(self):
        e = InvalidConfigError("output_format", "xml", "must be one of rich")
        assert e.key == "output_format"
        assert "Invalid value for output_format: 'xml'" in str(e)


class TestExitCodes:
    def test_usage_errors(self):
        assert InvalidPathError(Path("x"), "missing").exit_code == 2
        assert CheckerNotFoundError("tsc").exit_code == 2

    def test_annotation_errors_fail_the_run(self):
        assert AnnotationParseError("").exit_code == 1

    def test_internal_errors(self):
        assert AnnotationCountMismatchError(1, 0).exit_code == 3
        assert MalformedCommentError(["/* x */"]).exit_code == 3
