"""AST node definitions for the specification language."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from slgen.source import Span

# ── Types ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class BasicType:
    name: str
    span: Span


# Closed set; composite types are not representable.
Type = Union[BasicType]


# ── Expressions ──────────────────────────────────────────────────


@dataclass(frozen=True)
class Variable:
    name: str
    span: Span


@dataclass(frozen=True)
class Negation:
    operand: Expression
    span: Span


@dataclass(frozen=True)
class BinaryOp:
    operator: str  # source atom text: "=", "and", "or"
    left: Expression
    right: Expression
    span: Span


Expression = Union[Variable, Negation, BinaryOp]


# ── Bindings ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class PatternList:
    names: list[str]
    span: Span


@dataclass(frozen=True)
class PatternTypePair:
    """One or more parameter names sharing a declared type."""

    patterns: PatternList
    type: Type
    span: Span


@dataclass(frozen=True)
class IdentTypePair:
    name: str
    type: Type
    span: Span


@dataclass(frozen=True)
class PostExpression:
    expression: Expression
    span: Span


# ── Definitions ──────────────────────────────────────────────────


@dataclass(frozen=True)
class ImplicitDefinition:
    name: str
    parameters: list[PatternTypePair]
    returns: list[IdentTypePair]
    postcondition: PostExpression
    span: Span


Definition = Union[ImplicitDefinition]


@dataclass(frozen=True)
class FunctionDefinition:
    definition: Definition
    span: Span

    @property
    def name(self) -> str:
        return self.definition.name


@dataclass(frozen=True)
class DefinitionBlock:
    functions: list[FunctionDefinition]
    span: Span


@dataclass(frozen=True)
class Document:
    block: DefinitionBlock
    span: Span
