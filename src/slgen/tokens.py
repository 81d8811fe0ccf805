"""Token kinds and token representation for the specification lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from slgen.source import Span


class TokenKind(Enum):
    LPAREN = auto()
    RPAREN = auto()
    IDENTIFIER = auto()
    TERMINAL = auto()  # any other non-whitespace run: "=", ":", "and"...
    EOF = auto()


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str
    span: Span

    def describe(self) -> str:
        """Human-readable form used in syntax error messages."""
        if self.kind == TokenKind.EOF:
            return "end of input"
        return f"{self.kind.name} ({self.value!r})"


# Kinds that may stand for a literal keyword atom in the grammar.
ATOM_KINDS: frozenset[TokenKind] = frozenset({
    TokenKind.IDENTIFIER,
    TokenKind.TERMINAL,
})

WHITESPACE: frozenset[str] = frozenset({" ", "\t", "\r", "\n"})
