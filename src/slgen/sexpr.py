"""Keyword-agnostic S-expression tree for diagnostic dumps.

Unlike :mod:`slgen.parser`, this accepts any balanced form: every node is
either an atom or a parenthesized list of nodes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from slgen.errors import ParseError
from slgen.source import Span
from slgen.tokens import ATOM_KINDS, Token, TokenKind


@dataclass(frozen=True)
class Atom:
    value: str
    span: Span


@dataclass(frozen=True)
class SList:
    items: list[SExpr]
    span: Span


SExpr = Union[Atom, SList]


def parse_sexpr(tokens: list[Token]) -> SExpr:
    """Parse exactly one top-level form from *tokens*."""
    pos = 0

    def node() -> SExpr:
        nonlocal pos
        tok = tokens[pos]
        if tok.kind in ATOM_KINDS:
            pos += 1
            return Atom(tok.value, tok.span)
        if tok.kind != TokenKind.LPAREN:
            raise ParseError("an atom or '('", tok)
        pos += 1
        items: list[SExpr] = []
        while tokens[pos].kind != TokenKind.RPAREN:
            if tokens[pos].kind == TokenKind.EOF:
                raise ParseError("')'", tokens[pos])
            items.append(node())
        end = tokens[pos]
        pos += 1
        return SList(items, tok.span.to(end.span))

    try:
        tree = node()
    except RecursionError:
        raise ParseError(
            "a shallower form", tokens[pos], message="nesting too deep",
        ) from None
    if tokens[pos].kind != TokenKind.EOF:
        raise ParseError("end of input", tokens[pos])
    return tree


def format_sexpr(tree: SExpr) -> str:
    """Indented dump: atoms on one line, lists opening a nested block."""
    lines: list[str] = []
    # (node, depth, closing) entries; a list pushes its ")" below its items.
    stack: list[tuple[SExpr, int, bool]] = [(tree, 0, False)]
    while stack:
        node, depth, closing = stack.pop()
        indent = "  " * depth
        if closing:
            lines.append(f"{indent})")
        elif isinstance(node, Atom):
            lines.append(f"{indent}{node.value!r}")
        elif not node.items:
            lines.append(f"{indent}()")
        else:
            lines.append(f"{indent}(")
            stack.append((node, depth, True))
            stack.extend((item, depth + 1, False) for item in reversed(node.items))
    return "\n".join(lines)
