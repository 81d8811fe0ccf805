"""Diagnostics and the error taxonomy of the lex/parse/lower pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from slgen.source import SourceFile

if TYPE_CHECKING:
    from slgen.source import Span
    from slgen.tokens import Token


class Severity(Enum):
    ERROR = "error"


# ANSI color codes
_COLORS = {
    Severity.ERROR: "\033[1;31m",  # bold red
}
_BOLD = "\033[1m"
_BLUE = "\033[1;34m"
_RESET = "\033[0m"


@dataclass(frozen=True)
class DiagnosticLabel:
    """Points to a specific source location."""

    span: Span
    message: str


@dataclass
class Diagnostic:
    """A single diagnostic message with optional labels and notes."""

    severity: Severity
    code: str
    message: str
    labels: list[DiagnosticLabel] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)


class DiagnosticRenderer:
    """Renders diagnostics in Rust-style format, optionally colored."""

    def __init__(self, *, color: bool = True) -> None:
        self.color = color
        self._file_cache: dict[str, SourceFile | None] = {}

    def _c(self, code: str) -> str:
        return code if self.color else ""

    def _get_source(self, filename: str) -> SourceFile | None:
        """Load and cache a source file; None when it cannot be read."""
        if filename not in self._file_cache:
            path = Path(filename)
            try:
                source = SourceFile(path) if path.is_file() else None
            except (OSError, UnicodeDecodeError):
                source = None
            self._file_cache[filename] = source
        return self._file_cache[filename]

    def render(self, diag: Diagnostic) -> str:
        lines: list[str] = []
        color = _COLORS[diag.severity]
        bar = f"  {self._c(_BLUE)}   |{self._c(_RESET)}"

        # Header: error[E200]: message
        lines.append(
            f"{self._c(color)}{diag.severity.value}[{diag.code}]{self._c(_RESET)}"
            f"{self._c(_BOLD)}: {diag.message}{self._c(_RESET)}"
        )

        for label in diag.labels:
            span = label.span
            lines.append(f"  {self._c(_BLUE)}-->{self._c(_RESET)} {span}")
            lines.append(bar)

            source = self._get_source(span.file)
            if source is not None and source.has_line(span.start_line):
                gutter = f"{span.start_line:>4}"
                lines.append(
                    f"  {self._c(_BLUE)}{gutter} |{self._c(_RESET)} "
                    f"{source.line_at(span.start_line)}"
                )
                lines.append(
                    f"{bar} {' ' * (span.start_col - 1)}"
                    f"{self._c(color)}{'^' * source.underline_width(span)}{self._c(_RESET)}"
                )

            if label.message:
                lines.append(
                    f"{bar}   {self._c(color)}{label.message}{self._c(_RESET)}"
                )

        for note in diag.notes:
            lines.append(f"  {self._c(_BLUE)}={self._c(_RESET)} note: {note}")

        return "\n".join(lines)


class CompileError(Exception):
    """Failure of one input unit, carrying its diagnostics."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        messages = [d.message for d in diagnostics]
        super().__init__(f"{len(diagnostics)} error(s): {'; '.join(messages)}")


def _error_diagnostic(code: str, message: str, span: Span | None) -> Diagnostic:
    labels = [DiagnosticLabel(span=span, message="")] if span is not None else []
    return Diagnostic(
        severity=Severity.ERROR,
        code=code,
        message=message,
        labels=labels,
    )


class LexError(CompileError):
    """A character that starts no token."""

    code = "E100"

    def __init__(self, message: str, span: Span) -> None:
        self.span = span
        super().__init__([_error_diagnostic(self.code, message, span)])


class SourceDecodeError(CompileError):
    """An input file whose bytes are not valid UTF-8."""

    code = "E101"

    def __init__(self, filename: str, error: UnicodeDecodeError) -> None:
        self.filename = filename
        message = f"{filename}: not valid UTF-8 (byte {error.start}: {error.reason})"
        super().__init__([_error_diagnostic(self.code, message, None)])


class ParseError(CompileError):
    """A structural or keyword mismatch; the whole parse is abandoned."""

    code = "E200"

    def __init__(
        self, expected: str, actual: Token, message: str | None = None,
    ) -> None:
        self.expected = expected
        self.actual = actual
        self.span = actual.span
        if message is None:
            message = f"expected {expected}, got {actual.describe()}"
        super().__init__([_error_diagnostic(self.code, message, actual.span)])


class LoweringError(CompileError):
    """Base for failures while lowering a document into declarations."""

    code = "E399"

    def __init__(self, message: str, span: Span | None = None) -> None:
        self.span = span
        self.definition: str | None = None
        super().__init__([_error_diagnostic(self.code, message, span)])

    def set_definition(self, name: str) -> None:
        """Record the function definition being lowered when this failed."""
        if self.definition is None:
            self.definition = name
            self.diagnostics[0].notes.append(f"while lowering definition '{name}'")


class UnsupportedTypeError(LoweringError):
    code = "E300"


class UnsupportedOperatorError(LoweringError):
    code = "E301"

    def __init__(self, operator: str, span: Span | None = None) -> None:
        self.operator = operator
        super().__init__(f"unsupported operator: {operator!r}", span)


class UnimplementedExpressionError(LoweringError):
    code = "E302"


class UnsupportedDefinitionError(LoweringError):
    code = "E303"


class EmitError(CompileError):
    """Declarations that cannot be rendered as Go text."""

    code = "E400"

    def __init__(self, message: str) -> None:
        super().__init__([_error_diagnostic(self.code, message, None)])
