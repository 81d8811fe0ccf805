"""Tests for the specification parser."""

from __future__ import annotations

import sys

import pytest

from slgen.ast_nodes import (
    BasicType,
    BinaryOp,
    Document,
    FunctionDefinition,
    ImplicitDefinition,
    Negation,
    Variable,
)
from slgen.errors import CompileError, ParseError
from slgen.tokens import TokenKind
from tests.helpers import (
    EXAMPLE,
    binop,
    document,
    function,
    neg,
    negated,
    params,
    parse,
    returns,
    var,
)


def parse_post(post: str):
    """Helper: parse a one-function document, return its postcondition expression."""
    doc = parse(document(function("f", params(), returns(), post)))
    return doc.block.functions[0].definition.postcondition.expression


class TestParserExample:
    def test_example_document(self):
        doc = parse(EXAMPLE)
        assert isinstance(doc, Document)
        assert len(doc.block.functions) == 1
        fd = doc.block.functions[0]
        assert isinstance(fd, FunctionDefinition)
        assert isinstance(fd.definition, ImplicitDefinition)
        assert fd.name == "f"

    def test_example_bindings(self):
        definition = parse(EXAMPLE).block.functions[0].definition
        assert len(definition.parameters) == 1
        assert definition.parameters[0].patterns.names == ["x"]
        assert definition.parameters[0].type.name == "Int"
        assert len(definition.returns) == 1
        assert definition.returns[0].name == "r"
        assert isinstance(definition.returns[0].type, BasicType)

    def test_example_postcondition(self):
        expr = parse(EXAMPLE).block.functions[0].definition.postcondition.expression
        assert isinstance(expr, BinaryOp)
        assert expr.operator == "="
        assert expr.left.name == "x"
        assert expr.right.name == "r"

    def test_spans_cover_forms(self):
        doc = parse(EXAMPLE)
        assert doc.span.start_line == 1
        assert doc.span.start_col == 1
        assert doc.span.end_col == len(EXAMPLE)


class TestParserDefinitions:
    def test_functions_keep_source_order(self):
        src = document(
            function("first", params(), returns(), var("a")),
            function("second", params(), returns(), var("b")),
            function("third", params(), returns(), var("c")),
        )
        names = [fd.name for fd in parse(src).block.functions]
        assert names == ["first", "second", "third"]

    def test_empty_definition_block(self):
        doc = parse(document())
        assert doc.block.functions == []

    def test_grouped_patterns(self):
        src = document(function(
            "add", params((["x", "y"], "Int"), (["flag"], "Bool")),
            returns(("sum", "Int")), var("x"),
        ))
        definition = parse(src).block.functions[0].definition
        assert [p.patterns.names for p in definition.parameters] == [["x", "y"], ["flag"]]
        assert [p.type.name for p in definition.parameters] == ["Int", "Bool"]

    def test_multiple_returns(self):
        src = document(function(
            "divmod", params((["a", "b"], "Int")),
            returns(("q", "Int"), ("r", "Int")), var("q"),
        ))
        definition = parse(src).block.functions[0].definition
        assert [r.name for r in definition.returns] == ["q", "r"]

    def test_whitespace_is_insignificant(self):
        spread = EXAMPLE.replace(" ", "\n\t ")
        assert parse(spread).block.functions[0].name == "f"


class TestParserExpressions:
    def test_variable(self):
        expr = parse_post(var("x"))
        assert isinstance(expr, Variable)
        assert expr.name == "x"

    def test_negation(self):
        expr = parse_post(neg(var("x")))
        assert isinstance(expr, Negation)
        assert isinstance(expr.operand, Variable)

    @pytest.mark.parametrize("op", ["=", "and", "or"])
    def test_binary_operators(self, op):
        expr = parse_post(binop(var("a"), op, var("b")))
        assert isinstance(expr, BinaryOp)
        assert expr.operator == op

    def test_unknown_operator_parses(self):
        expr = parse_post(binop(var("a"), "<", var("b")))
        assert isinstance(expr, BinaryOp)
        assert expr.operator == "<"

    def test_explicit_nesting(self):
        # (a and b) and c
        expr = parse_post(binop(binop(var("a"), "and", var("b")), "and", var("c")))
        assert isinstance(expr.left, BinaryOp)
        assert isinstance(expr.right, Variable)
        assert expr.left.left.name == "a"

    def test_negated_binary(self):
        expr = parse_post(neg(binop(var("a"), "or", var("b"))))
        assert isinstance(expr, Negation)
        assert isinstance(expr.operand, BinaryOp)
        assert expr.operand.operator == "or"


class TestParserErrors:
    def test_missing_final_paren(self):
        with pytest.raises(ParseError) as exc:
            parse(EXAMPLE[:-1])
        assert exc.value.actual.kind == TokenKind.EOF
        assert "')'" in exc.value.expected

    @pytest.mark.parametrize("index", [
        i for i, ch in enumerate(EXAMPLE) if ch == ")"
    ])
    def test_missing_any_close_paren(self, index):
        with pytest.raises(ParseError):
            parse(EXAMPLE[:index] + EXAMPLE[index + 1:])

    def test_wrong_keyword(self):
        with pytest.raises(ParseError) as exc:
            parse(EXAMPLE.replace("sl_document", "sl_doc", 1))
        assert exc.value.expected == "'sl_document'"
        assert exc.value.actual.value == "sl_doc"
        assert exc.value.span.start_col == 2

    def test_trailing_input(self):
        with pytest.raises(ParseError) as exc:
            parse(EXAMPLE + " (extra)")
        assert exc.value.actual.kind == TokenKind.LPAREN

    def test_empty_input(self):
        with pytest.raises(ParseError):
            parse("")

    def test_empty_pattern_list(self):
        src = EXAMPLE.replace("(pattern_list (pattern x))", "(pattern_list)")
        with pytest.raises(ParseError):
            parse(src)

    def test_composite_type_rejected(self):
        src = EXAMPLE.replace("(type (basic_type Int))", "(type (tuple_type Int Int))", 1)
        with pytest.raises(ParseError) as exc:
            parse(src)
        assert exc.value.actual.value == "tuple_type"

    def test_expression_alternative_not_found(self):
        with pytest.raises(ParseError) as exc:
            parse_post("(variable (name x))")
        assert exc.value.actual.value == "variable"

    def test_unknown_term(self):
        with pytest.raises(ParseError):
            parse_post("(expression (literal 1))")

    def test_operator_must_be_atom(self):
        with pytest.raises(ParseError) as exc:
            parse_post(f"({var('a')} {var('b')})")
        assert exc.value.actual.kind == TokenKind.LPAREN

    def test_diagnostic_code(self):
        with pytest.raises(CompileError) as exc:
            parse("(sl_document)")
        assert exc.value.diagnostics[0].code == "E200"


class TestParserNesting:
    def test_moderate_nesting_parses(self):
        expr = parse_post(negated(var("x"), 50))
        for _ in range(50):
            assert isinstance(expr, Negation)
            expr = expr.operand
        assert expr.name == "x"

    def test_nesting_too_deep(self):
        src = document(function(
            "f", params(), returns(), negated(var("x"), sys.getrecursionlimit()),
        ))
        with pytest.raises(ParseError) as exc:
            parse(src)
        assert exc.value.diagnostics[0].message == "nesting too deep"
        assert exc.value.diagnostics[0].code == "E200"
        assert exc.value.span.file == "test.sl"
