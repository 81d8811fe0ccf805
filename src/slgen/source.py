"""Source text and span tracking for diagnostics."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Span:
    """A range within a source file."""

    file: str
    start_line: int
    start_col: int
    end_line: int
    end_col: int

    def __str__(self) -> str:
        return f"{self.file}:{self.start_line}:{self.start_col}"

    def to(self, end: Span) -> Span:
        """Span covering from the start of self to the end of *end*."""
        return Span(self.file, self.start_line, self.start_col,
                    end.end_line, end.end_col)


class SourceFile:
    """A loaded specification file, used for diagnostic excerpts."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.content = path.read_text(encoding="utf-8")
        self.lines = self.content.splitlines()

    def has_line(self, n: int) -> bool:
        return 1 <= n <= len(self.lines)

    def line_at(self, n: int) -> str:
        """Return the 1-indexed line, or empty string if out of range."""
        return self.lines[n - 1] if self.has_line(n) else ""

    def span_text(self, span: Span) -> str:
        """Extract the text covered by a span."""
        if span.start_line == span.end_line:
            line = self.line_at(span.start_line)
            return line[span.start_col - 1 : span.end_col]
        parts = [self.line_at(span.start_line)[span.start_col - 1 :]]
        for ln in range(span.start_line + 1, span.end_line):
            parts.append(self.line_at(ln))
        parts.append(self.line_at(span.end_line)[: span.end_col])
        return "\n".join(parts)

    def underline_width(self, span: Span) -> int:
        """Columns to mark under the first line of *span*, at least one."""
        return max(1, len(self.span_text(span).split("\n", 1)[0]))
