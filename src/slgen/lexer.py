"""Lexer for the S-expression specification format.

Produces parentheses, identifiers and terminal atoms; whitespace is
recognized and dropped. There are no comments, strings or escapes.
"""

from __future__ import annotations

from typing import TextIO

from slgen.errors import LexError
from slgen.source import Span
from slgen.tokens import WHITESPACE, Token, TokenKind


def _is_ident_start(ch: str) -> bool:
    return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_ident_char(ch: str) -> bool:
    return _is_ident_start(ch) or ("0" <= ch <= "9")


def _is_terminal_char(ch: str) -> bool:
    return ch not in WHITESPACE and ch not in "()"


class Lexer:
    """Tokenizes specification source text."""

    def __init__(self, source: str, filename: str = "<stdin>") -> None:
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.col = 1
        self.tokens: list[Token] = []

    @classmethod
    def from_stream(cls, stream: TextIO, filename: str = "<stdin>") -> Lexer:
        """Build a lexer over the full contents of an open text stream."""
        return cls(stream.read(), filename)

    def lex(self) -> list[Token]:
        """Tokenize the entire source and return the token list."""
        while self.pos < len(self.source):
            ch = self.source[self.pos]
            if ch in WHITESPACE:
                self._advance()
            elif ch == "(":
                self._lex_single(TokenKind.LPAREN)
            elif ch == ")":
                self._lex_single(TokenKind.RPAREN)
            elif _is_ident_start(ch):
                self._lex_run(TokenKind.IDENTIFIER, _is_ident_char)
            elif _is_terminal_char(ch):
                self._lex_run(TokenKind.TERMINAL, _is_terminal_char)
            else:
                span = Span(self.filename, self.line, self.col, self.line, self.col)
                raise LexError(f"unexpected character: {ch!r}", span)

        self._emit(TokenKind.EOF, "", self.line, self.col)
        return self.tokens

    # ── Helpers ───────────────────────────────────────────────────

    def _advance(self) -> str:
        ch = self.source[self.pos]
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.col = 1
        else:
            self.col += 1
        return ch

    def _emit(self, kind: TokenKind, value: str, start_line: int, start_col: int) -> Token:
        end_col = self.col - 1 if self.col > 1 else 1
        span = Span(self.filename, start_line, start_col, self.line, end_col)
        tok = Token(kind, value, span)
        self.tokens.append(tok)
        return tok

    def _lex_single(self, kind: TokenKind) -> None:
        start_line, start_col = self.line, self.col
        self._emit(kind, self._advance(), start_line, start_col)

    def _lex_run(self, kind: TokenKind, accept) -> None:
        start_line, start_col = self.line, self.col
        text = []
        while self.pos < len(self.source) and accept(self.source[self.pos]):
            text.append(self._advance())
        self._emit(kind, "".join(text), start_line, start_col)
