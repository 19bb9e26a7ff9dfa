#!/usr/bin/env python3
"""
Tests for diagnostics: exception classes, error codes and the rustc-style
ErrorReporter rendering.
"""

import re
import pytest

from tsshape.shared.errors import (
    Error, ErrorReporter, TsShapeError, ParseError, DuplicateFieldError, UnsupportedConstruct,
    UnresolvedTypeQuery,
)
from tsshape.shared.source_location import SourceLocation

_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


def _strip_ansi(text: str) -> str:
    return _ANSI_ESCAPE.sub("", text)


@pytest.mark.unit
class TestErrorReporterProblematic:
    """Problematic/edge cases for the error reporter formatter."""

    def test_location_none(self):
        err = Error(message="something failed", location=None, code="E0001")
        reporter = ErrorReporter({})
        out = reporter.format_error(err, color=False)
        assert "error[E0001]" in out
        assert "something failed" in out
        assert "unknown location" in out

    def test_file_not_in_source_files(self):
        loc = SourceLocation(file="missing.ts", line=1, column=1)
        err = Error(message="oops", location=loc, code="E0201")
        out = ErrorReporter({}).format_error(err, color=False)
        assert "error[E0201]" in out
        assert "missing.ts:1:1" in out

    def test_line_beyond_source(self):
        loc = SourceLocation(file="x.ts", line=10, column=1)
        err = Error(message="bad", location=loc)
        reporter = ErrorReporter({"x.ts": "interface A { }\ninterface B { }\n"})
        out = reporter.format_error(err, color=False)
        assert " --> x.ts:10:1" in out
        assert " |" in out

    def test_caret_guess_stops_at_punctuation(self):
        loc = SourceLocation(file="f.ts", line=1, column=15)
        err = Error(message="duplicate", location=loc, label="here")
        reporter = ErrorReporter({"f.ts": "interface A { name: string }"})
        lines = reporter.format_error(err, color=False).split("\n")
        assert lines[3] == "1 | interface A { name: string }"
        assert lines[4] == "  | " + " " * 14 + "^^^^ here"

    def test_explicit_span(self):
        loc = SourceLocation(file="f.ts", line=1, column=1, end_line=1, end_column=10)
        err = Error(message="span", location=loc)
        out = ErrorReporter({"f.ts": "interface A { }"}).format_error(err, color=False)
        assert "^^^^^^^^^" in out

    def test_color_output_strips_to_plain(self):
        loc = SourceLocation(file="f.ts", line=1, column=1)
        err = Error(message="msg", location=loc, code="E0001", help="try again")
        reporter = ErrorReporter({"f.ts": "type = ;"})
        colored = reporter.format_error(err, color=True)
        assert "\x1b[" in colored
        assert _strip_ansi(colored) == reporter.format_error(err, color=False)

    def test_format_all_errors_summary(self):
        reporter = ErrorReporter({})
        reporter.report_error("first", None)
        reporter.report_error("second", None)
        out = reporter.format_all_errors(color=False)
        assert out.endswith("error: 2 declaration errors")
        single = ErrorReporter({})
        single.report_error("only", None)
        assert single.format_all_errors(color=False).endswith("error: 1 declaration error")

    def test_no_color_env(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")
        reporter = ErrorReporter({})
        reporter.report_error("plain", None, code="E0001")
        assert "\x1b[" not in reporter.format_all_errors()


@pytest.mark.unit
class TestExceptions:

    def test_codes(self):
        assert ParseError.error_code == "E0001"
        assert DuplicateFieldError.error_code == "E0101"
        assert UnsupportedConstruct.error_code == "E0201"
        assert issubclass(ParseError, TsShapeError)

    def test_parse_error_str(self):
        assert str(ParseError("Parse error: bad", "a.ts")) == "Parse error: bad in a.ts"
        loc = SourceLocation(file="a.ts", line=2, column=3)
        assert str(ParseError("Parse error: bad", "a.ts", loc)) == "error[E0001]: Parse error: bad\n --> a.ts:2:3"

    def test_duplicate_field_diagnostic(self):
        first = SourceLocation(file="m.ts", line=2, column=5)
        second = SourceLocation(file="m.ts", line=4, column=5)
        exc = DuplicateFieldError("name", "User", second, first)
        assert exc.message == "duplicate field `name` in declaration `User`"

        reporter = ErrorReporter({"m.ts": "interface User {\n    name: string;\n    id: number;\n    name: number;\n}"})
        reporter.report_exception(exc)
        out = reporter.format_all_errors(color=False)
        assert "error[E0101]: duplicate field `name` in declaration `User`" in out
        assert "4 |     name: number;" in out
        assert "^^^^ field already declared on line 2" in out
        assert "= help: remove or rename one of the declarations" in out

    def test_unsupported_construct_message(self):
        exc = UnsupportedConstruct("index signature", detail="in `Bag`")
        assert exc.message == "unsupported construct: index signature (in `Bag`)"
        assert exc.to_error().code == "E0201"
        assert UnsupportedConstruct("keyof").message == "unsupported construct: keyof"

    def test_unresolved_notice_is_not_an_exception(self):
        notice = UnresolvedTypeQuery("SomeType")
        assert not isinstance(notice, Exception)
        assert str(notice) == "note: `typeof SomeType` left unresolved"
