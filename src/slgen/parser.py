"""Parser for the S-expression specification format.

Recursive descent over keyword-tagged forms: every production opens a
parenthesis, matches its literal keyword atoms, descends into its
sub-productions and closes. Alternatives are chosen by looking at no more
than two tokens. The first mismatch aborts the parse with a ParseError.
"""

from __future__ import annotations

from slgen.ast_nodes import (
    BasicType,
    BinaryOp,
    DefinitionBlock,
    Document,
    Expression,
    FunctionDefinition,
    IdentTypePair,
    ImplicitDefinition,
    Negation,
    PatternList,
    PatternTypePair,
    PostExpression,
    Type,
    Variable,
)
from slgen.errors import ParseError
from slgen.grammar import (
    COLON,
    KW_BASIC_TYPE,
    KW_DEFINITION_BLOCK,
    KW_DOCUMENT,
    KW_EXPRESSION,
    KW_FUNCTION_DEFINITION,
    KW_FUNCTION_DEFINITIONS,
    KW_FUNCTIONS,
    KW_IDENTIFIER_TYPE_PAIR,
    KW_IDENTIFIER_TYPE_PAIR_LIST,
    KW_IMPLICIT_DEFINITION,
    KW_NAME,
    KW_NOT,
    KW_PARAMETER_TYPES,
    KW_PATTERN,
    KW_PATTERN_LIST,
    KW_PATTERN_TYPE_PAIR_LIST,
    KW_POST,
    KW_POST_EXPRESSION,
    KW_TYPE,
    KW_VARIABLE,
    LOOKAHEAD,
)
from slgen.source import Span
from slgen.tokens import ATOM_KINDS, Token, TokenKind


class Parser:
    """Parses a list of tokens into a specification Document."""

    def __init__(self, tokens: list[Token], filename: str = "<stdin>") -> None:
        self.tokens = tokens
        self.pos = 0
        self.filename = filename

    # ── Token access ─────────────────────────────────────────────

    def _current(self) -> Token:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return self.tokens[-1]  # EOF

    def _peek(self, offset: int = 0) -> Token:
        assert offset < LOOKAHEAD, "lookahead exceeds grammar bound"
        idx = self.pos + offset
        if idx < len(self.tokens):
            return self.tokens[idx]
        return self.tokens[-1]

    def _advance(self) -> Token:
        tok = self._current()
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return tok

    def _fail(self, expected: str, tok: Token | None = None) -> ParseError:
        return ParseError(expected, tok or self._current())

    def _expect(self, kind: TokenKind) -> Token:
        tok = self._current()
        if tok.kind != kind:
            raise self._fail(_describe_kind(kind), tok)
        return self._advance()

    def _expect_keyword(self, word: str) -> Token:
        tok = self._current()
        if tok.kind not in ATOM_KINDS or tok.value != word:
            raise self._fail(repr(word), tok)
        return self._advance()

    def _expect_ident(self) -> Token:
        return self._expect(TokenKind.IDENTIFIER)

    def _open(self, *keywords: str) -> Span:
        """Consume ``(`` and the production's keyword atoms."""
        start = self._expect(TokenKind.LPAREN).span
        for word in keywords:
            self._expect_keyword(word)
        return start

    def _close(self, start: Span) -> Span:
        end = self._expect(TokenKind.RPAREN).span
        return start.to(end)

    def _at_form(self, keyword: str) -> bool:
        """True if the next two tokens open a form tagged *keyword*."""
        head, tag = self._peek(0), self._peek(1)
        return (head.kind == TokenKind.LPAREN
                and tag.kind in ATOM_KINDS and tag.value == keyword)

    def _parse_repeated(self, keyword: str, parse_one) -> list:
        items = []
        while self._at_form(keyword):
            items.append(parse_one())
        return items

    # ── Top-level parsing ────────────────────────────────────────

    def parse(self) -> Document:
        """Parse the entire token stream into a Document."""
        try:
            start = self._open(KW_DOCUMENT)
            block = self._parse_definition_block()
        except RecursionError:
            raise ParseError(
                "a shallower form", self._current(), message="nesting too deep",
            ) from None
        span = self._close(start)
        self._expect(TokenKind.EOF)
        return Document(block=block, span=span)

    def _parse_definition_block(self) -> DefinitionBlock:
        start = self._open(KW_DEFINITION_BLOCK)
        inner = self._open(KW_FUNCTION_DEFINITIONS, KW_FUNCTIONS)
        functions = self._parse_repeated(
            KW_FUNCTION_DEFINITION, self._parse_function_definition,
        )
        self._close(inner)
        return DefinitionBlock(functions=functions, span=self._close(start))

    def _parse_function_definition(self) -> FunctionDefinition:
        start = self._open(KW_FUNCTION_DEFINITION)
        # Implicit definitions are the only variant the grammar defines.
        definition = self._parse_implicit_definition()
        return FunctionDefinition(definition=definition, span=self._close(start))

    def _parse_implicit_definition(self) -> ImplicitDefinition:
        start = self._open(KW_IMPLICIT_DEFINITION)
        name = self._expect_ident().value

        params_start = self._open(KW_PARAMETER_TYPES)
        parameters = self._parse_repeated(
            KW_PATTERN_TYPE_PAIR_LIST, self._parse_pattern_type_pair,
        )
        self._close(params_start)

        returns_start = self._open(KW_IDENTIFIER_TYPE_PAIR_LIST)
        returns = self._parse_repeated(
            KW_IDENTIFIER_TYPE_PAIR, self._parse_ident_type_pair,
        )
        self._close(returns_start)

        post = self._parse_post_expression()
        return ImplicitDefinition(
            name=name,
            parameters=parameters,
            returns=returns,
            postcondition=post,
            span=self._close(start),
        )

    # ── Bindings and types ───────────────────────────────────────

    def _parse_pattern_type_pair(self) -> PatternTypePair:
        start = self._open(KW_PATTERN_TYPE_PAIR_LIST)
        patterns = self._parse_pattern_list()
        self._expect_keyword(COLON)
        ty = self._parse_type()
        return PatternTypePair(patterns=patterns, type=ty, span=self._close(start))

    def _parse_pattern_list(self) -> PatternList:
        start = self._open(KW_PATTERN_LIST)
        names = [self._parse_pattern()]
        names.extend(self._parse_repeated(KW_PATTERN, self._parse_pattern))
        return PatternList(names=names, span=self._close(start))

    def _parse_pattern(self) -> str:
        start = self._open(KW_PATTERN)
        name = self._expect_ident().value
        self._close(start)
        return name

    def _parse_ident_type_pair(self) -> IdentTypePair:
        start = self._open(KW_IDENTIFIER_TYPE_PAIR)
        name = self._expect_ident().value
        self._expect_keyword(COLON)
        ty = self._parse_type()
        return IdentTypePair(name=name, type=ty, span=self._close(start))

    def _parse_type(self) -> Type:
        start = self._open(KW_TYPE)
        inner = self._open(KW_BASIC_TYPE)
        name = self._expect_ident().value
        basic = BasicType(name=name, span=self._close(inner))
        self._close(start)
        return basic

    # ── Expressions ──────────────────────────────────────────────

    def _parse_post_expression(self) -> PostExpression:
        start = self._open(KW_POST_EXPRESSION, KW_POST)
        expr = self._parse_expression()
        return PostExpression(expression=expr, span=self._close(start))

    def _parse_expression(self) -> Expression:
        """Parse one of the three expression shapes.

        ``(expression <term>)`` when the second token is the ``expression``
        tag, ``(<expr> <operator> <expr>)`` when it opens a nested form.
        """
        head, second = self._peek(0), self._peek(1)
        if head.kind != TokenKind.LPAREN:
            raise self._fail("'(' opening an expression", head)

        if second.kind in ATOM_KINDS and second.value == KW_EXPRESSION:
            start = self._open(KW_EXPRESSION)
            term = self._parse_term()
            self._close(start)
            return term

        if second.kind == TokenKind.LPAREN:
            start = self._open()
            left = self._parse_expression()
            op_tok = self._current()
            if op_tok.kind not in ATOM_KINDS:
                raise self._fail("an operator atom", op_tok)
            self._advance()
            right = self._parse_expression()
            return BinaryOp(
                operator=op_tok.value,
                left=left,
                right=right,
                span=self._close(start),
            )

        raise self._fail(f"'{KW_EXPRESSION}' or '(' after '('", second)

    def _parse_term(self) -> Expression:
        if self._at_form(KW_VARIABLE):
            start = self._open(KW_VARIABLE)
            inner = self._open(KW_NAME)
            name = self._expect_ident().value
            self._close(inner)
            return Variable(name=name, span=self._close(start))

        if self._at_form(KW_NOT):
            start = self._open(KW_NOT)
            operand = self._parse_expression()
            return Negation(operand=operand, span=self._close(start))

        head = self._peek(0)
        tok = self._peek(1) if head.kind == TokenKind.LPAREN else head
        raise self._fail(f"'({KW_VARIABLE} ...)' or '({KW_NOT} ...)'", tok)


def _describe_kind(kind: TokenKind) -> str:
    return {
        TokenKind.LPAREN: "'('",
        TokenKind.RPAREN: "')'",
        TokenKind.IDENTIFIER: "an identifier",
        TokenKind.TERMINAL: "a terminal atom",
        TokenKind.EOF: "end of input",
    }[kind]
