"""
Error Reporting

tsc Pattern: ts.Diagnostic
Rendering follows the rustc layout (header, arrow, gutter, carets).
"""

import os
import sys
from dataclasses import dataclass
from typing import Optional, List, Dict

from .source_location import SourceLocation
from ..utils.config import (
    PARSE_ERROR_CODE,
    DUPLICATE_FIELD_ERROR_CODE,
    UNSUPPORTED_CONSTRUCT_ERROR_CODE,
)


# ---------------------------------------------------------------------------
# ANSI color helpers (disabled when NO_COLOR is set)
# ---------------------------------------------------------------------------

def _use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    explicit = os.environ.get("TSSHAPE_COLOR", "").lower()
    if explicit in ("0", "false", "no", "never"):
        return False
    return True

_BOLD   = "\033[1m"
_RED    = "\033[31m"
_BLUE   = "\033[34m"
_CYAN   = "\033[36m"
_RESET  = "\033[0m"

def _style(text: str, *codes: str, color: bool = True) -> str:
    if not color:
        return text
    prefix = "".join(codes)
    return f"{prefix}{text}{_RESET}" if prefix else text


# ---------------------------------------------------------------------------
# Error dataclass
# ---------------------------------------------------------------------------

@dataclass
class Error:
    """
    A single diagnostic about one declaration.

    tsc Pattern: ts.Diagnostic
    """
    message: str
    location: Optional[SourceLocation]
    code: Optional[str] = None
    help: Optional[str] = None
    note: Optional[str] = None
    label: Optional[str] = None


# ---------------------------------------------------------------------------
# Formatting engine
# ---------------------------------------------------------------------------

def _format_diagnostic(
    error: Error,
    source_files: Dict[str, str],
    color: bool = False,
) -> str:
    """
    Render a single diagnostic.

    Example output (plain, no color)::

        error[E0101]: duplicate field `name` in declaration `User`
         --> models.ts:4:5
          |
        4 |     name: number;
          |     ^^^^ field already declared on line 2
          |
          = help: remove or rename one of the declarations
    """
    out: List[str] = []

    code_str = f"[{error.code}]" if error.code else ""
    out.append(
        _style(f"error{code_str}", _BOLD, _RED, color=color)
        + _style(f": {error.message}", _BOLD, color=color)
    )

    loc = error.location
    if loc is None:
        out.append(_style(" --> ", _BOLD, _BLUE, color=color) + "<unknown location>")
        _append_annotations(out, error, 1, color)
        return "\n".join(out)

    source = source_files.get(loc.file)
    if source is None:
        out.append(_style(" --> ", _BOLD, _BLUE, color=color) + str(loc))
        _append_annotations(out, error, 1, color)
        return "\n".join(out)

    src_lines = source.split("\n")
    gw = max(len(str(loc.line)), 1)

    out.append(_style(" " * gw + "--> ", _BOLD, _BLUE, color=color) + str(loc))
    out.append(_style(" " * (gw + 1) + "|", _BOLD, _BLUE, color=color))

    idx = loc.line - 1
    code_line = src_lines[idx] if 0 <= idx < len(src_lines) else ""
    out.append(_style(str(loc.line).rjust(gw) + " | ", _BOLD, _BLUE, color=color) + code_line)

    col_start = max(loc.column, 1) - 1
    if loc.end_line == loc.line and loc.end_column > loc.column:
        span_len = loc.end_column - loc.column
    else:
        span_len = _guess_span(code_line, col_start)
    carets = " " * col_start + "^" * max(1, span_len)
    label_suffix = f" {error.label}" if error.label else ""
    out.append(
        _style(" " * (gw + 1) + "| ", _BOLD, _BLUE, color=color)
        + _style(carets + label_suffix, _BOLD, _RED, color=color)
    )

    _append_annotations(out, error, gw, color)
    return "\n".join(out)


def _guess_span(code_line: str, col_start: int) -> int:
    """Guess token length when end_column is unavailable."""
    if col_start >= len(code_line):
        return 1
    length = 0
    for ch in code_line[col_start:]:
        if ch in (" ", "\t", ";", ",", ":", "?", ")", "]", "}"):
            break
        length += 1
    return max(1, length)


def _append_annotations(out: List[str], error: Error, gw: int, color: bool) -> None:
    if not (error.help or error.note):
        return
    out.append(_style(" " * (gw + 1) + "|", _BOLD, _BLUE, color=color))
    pad = " " * (gw + 1)
    for title, text in (("help", error.help), ("note", error.note)):
        if text:
            out.append(
                _style(f"{pad}= ", _BOLD, _CYAN, color=color)
                + _style(f"{title}: ", _BOLD, color=color)
                + text
            )


# ---------------------------------------------------------------------------
# ErrorReporter
# ---------------------------------------------------------------------------

class ErrorReporter:
    """
    Collects diagnostics for one extraction run and renders them.

    tsc Pattern: ts.formatDiagnosticsWithColorAndContext
    """

    def __init__(self, source_files: Dict[str, str]):
        self.source_files = source_files
        self.errors: List[Error] = []

    def report_error(
        self,
        message: str,
        location: Optional[SourceLocation],
        code: Optional[str] = None,
        help: Optional[str] = None,
        note: Optional[str] = None,
        label: Optional[str] = None,
    ) -> None:
        self.errors.append(Error(
            message=message,
            location=location,
            code=code,
            help=help,
            note=note,
            label=label,
        ))

    def report_exception(self, exc: "TsShapeError") -> None:
        """Record a tsshape exception as a diagnostic."""
        self.errors.append(exc.to_error())

    def format_error(self, error: Error, color: Optional[bool] = None) -> str:
        use_color = color if color is not None else _use_color()
        return _format_diagnostic(error, self.source_files, color=use_color)

    def format_all_errors(self, color: Optional[bool] = None) -> str:
        use_color = color if color is not None else _use_color()
        parts = [self.format_error(e, color=use_color) for e in self.errors]
        count = len(self.errors)
        summary = f"{count} declaration error{'s' if count != 1 else ''}"
        parts.append(
            _style("error", _BOLD, _RED, color=use_color)
            + _style(f": {summary}", _BOLD, color=use_color)
        )
        return "\n\n".join(parts)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def print_errors(self) -> None:
        if self.errors:
            print(self.format_all_errors(), file=sys.stderr)


# ============================================================================
# Exception Classes
# ============================================================================

class TsShapeError(Exception):
    """Base exception for all tsshape errors"""
    error_code = "E0000"

    def __init__(self, message: str, location: Optional[SourceLocation] = None):
        super().__init__(message)
        self.message = message
        self.location = location

    def to_error(self) -> Error:
        return Error(message=self.message, location=self.location, code=self.error_code)

    def __str__(self):
        if self.location:
            return f"error[{self.error_code}]: {self.message}\n --> {self.location}"
        return self.message


class ParseError(TsShapeError):
    """Source text is not valid in the supported declaration grammar."""
    error_code = PARSE_ERROR_CODE

    def __init__(self, message: str, source_file: str, location: Optional[SourceLocation] = None):
        super().__init__(message, location)
        self.source_file = source_file

    def __str__(self):
        if self.location:
            return super().__str__()
        return f"{self.message} in {self.source_file}"


class DuplicateFieldError(TsShapeError):
    """
    The same field name appears twice in one declaration.

    Fatal to building that one ShapeDescriptor; other declarations are
    unaffected.
    """
    error_code = DUPLICATE_FIELD_ERROR_CODE

    def __init__(self,
                 field_name: str,
                 declaration: str,
                 location: Optional[SourceLocation] = None,
                 first_location: Optional[SourceLocation] = None):
        super().__init__(f"duplicate field `{field_name}` in declaration `{declaration}`", location)
        self.field_name = field_name
        self.declaration = declaration
        self.first_location = first_location

    def to_error(self) -> Error:
        label = None
        if self.first_location is not None:
            label = f"field already declared on line {self.first_location.line}"
        return Error(
            message=self.message,
            location=self.location,
            code=self.error_code,
            label=label,
            help="remove or rename one of the declarations",
        )


class UnsupportedConstruct(TsShapeError):
    """
    Syntax outside the modeled vocabulary.

    Raised instead of silently coercing the construct to `any`, so gaps in
    the supported vocabulary stay visible.
    """
    error_code = UNSUPPORTED_CONSTRUCT_ERROR_CODE

    def __init__(self, construct: str, location: Optional[SourceLocation] = None, detail: str = ""):
        message = f"unsupported construct: {construct}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message, location)
        self.construct = construct
        self.detail = detail


@dataclass(frozen=True)
class UnresolvedTypeQuery:
    """
    Informational notice: a `typeof X` reference had no entry in the symbol
    table. Never raised; the query stays in the descriptor as an opaque
    named reference.
    """
    referenced_name: str
    location: Optional[SourceLocation] = None

    def __str__(self) -> str:
        where = f" at {self.location}" if self.location else ""
        return f"note: `typeof {self.referenced_name}` left unresolved{where}"
