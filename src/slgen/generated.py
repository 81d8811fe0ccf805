"""Target model produced by lowering: Go-shaped declarations.

Values here carry no source spans; the emitter renders them to text.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


@dataclass(frozen=True)
class NamedType:
    name: str


BOOL = NamedType("bool")


@dataclass(frozen=True)
class GeneratedField:
    """Names sharing one type; an empty *names* tuple is an unnamed field."""

    names: tuple[str, ...]
    type: NamedType


# ── Expressions ──────────────────────────────────────────────────


class BinaryOperator(Enum):
    LOGICAL_AND = "&&"
    LOGICAL_OR = "||"
    EQUAL = "=="


@dataclass(frozen=True)
class Ident:
    name: str


@dataclass(frozen=True)
class Not:
    operand: GenExpr


@dataclass(frozen=True)
class Binary:
    op: BinaryOperator
    left: GenExpr
    right: GenExpr


GenExpr = Union[Ident, Not, Binary]


@dataclass(frozen=True)
class ReturnStmt:
    value: GenExpr


# ── Declarations ─────────────────────────────────────────────────


@dataclass(frozen=True)
class GeneratedDeclaration:
    name: str
    params: tuple[GeneratedField, ...]
    results: tuple[GeneratedField, ...]
    body: tuple[ReturnStmt, ...] | None = None

    @property
    def is_signature(self) -> bool:
        return self.body is None
