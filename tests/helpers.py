"""Shared test helpers: builders for specification source text."""

from __future__ import annotations

from slgen.ast_nodes import Document
from slgen.generated import GeneratedDeclaration
from slgen.lexer import Lexer
from slgen.lowering import lower_document
from slgen.parser import Parser

# The single-function example: f(x Int) (r Int) with postcondition x = r.
EXAMPLE = (
    "(sl_document (sl_definition_block (sl_function_definitions functions"
    " (function_definition (implicit_function_definition f"
    " (parameter_types (pattern_type_pair_list (pattern_list (pattern x))"
    " : (type (basic_type Int))))"
    " (identifier_type_pair_list (identifier_type_pair r : (type (basic_type Int))))"
    " (post_expression post ((expression (variable (name x))) ="
    " (expression (variable (name r))))))))))"
)


def var(name: str) -> str:
    return f"(expression (variable (name {name})))"


def neg(expr: str) -> str:
    return f"(expression (not {expr}))"


def negated(expr: str, depth: int) -> str:
    """Wrap *expr* in *depth* nested negations."""
    return "(expression (not " * depth + expr + "))" * depth


def binop(left: str, op: str, right: str) -> str:
    return f"({left} {op} {right})"


def typ(name: str) -> str:
    return f"(type (basic_type {name}))"


def params(*groups: tuple[list[str], str]) -> str:
    pairs = " ".join(
        "(pattern_type_pair_list (pattern_list "
        + " ".join(f"(pattern {n})" for n in names)
        + f") : {typ(ty)})"
        for names, ty in groups
    )
    return f"(parameter_types {pairs})"


def returns(*pairs: tuple[str, str]) -> str:
    body = " ".join(f"(identifier_type_pair {n} : {typ(ty)})" for n, ty in pairs)
    return f"(identifier_type_pair_list {body})"


def function(name: str, param_src: str, return_src: str, post: str) -> str:
    return (
        f"(function_definition (implicit_function_definition {name}"
        f" {param_src} {return_src} (post_expression post {post})))"
    )


def document(*functions: str) -> str:
    body = " ".join(functions)
    return (
        "(sl_document (sl_definition_block"
        f" (sl_function_definitions functions {body})))"
    )


def parse(source: str) -> Document:
    """Lex and parse source, return the Document."""
    tokens = Lexer(source, "test.sl").lex()
    return Parser(tokens, "test.sl").parse()


def lower(source: str) -> list[GeneratedDeclaration]:
    return lower_document(parse(source))
