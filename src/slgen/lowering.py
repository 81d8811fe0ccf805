"""Lower a parsed Document into generated Go declarations.

Each function definition yields a signature stub and a ``POST_`` check
whose body returns the translated postcondition. Lowering is purely
syntactic: names in the postcondition are not resolved against the
definition's bindings.
"""

from __future__ import annotations

from slgen.ast_nodes import (
    BasicType,
    BinaryOp,
    Document,
    Expression,
    FunctionDefinition,
    IdentTypePair,
    ImplicitDefinition,
    Negation,
    PatternTypePair,
    Type,
    Variable,
)
from slgen.errors import (
    LoweringError,
    UnimplementedExpressionError,
    UnsupportedDefinitionError,
    UnsupportedOperatorError,
    UnsupportedTypeError,
)
from slgen.generated import (
    BOOL,
    Binary,
    BinaryOperator,
    GeneratedDeclaration,
    GeneratedField,
    GenExpr,
    Ident,
    NamedType,
    Not,
    ReturnStmt,
)

CHECK_PREFIX = "POST_"

OPERATORS: dict[str, BinaryOperator] = {
    "and": BinaryOperator.LOGICAL_AND,
    "or": BinaryOperator.LOGICAL_OR,
    "=": BinaryOperator.EQUAL,
}


def lower_document(document: Document) -> list[GeneratedDeclaration]:
    """Lower every function definition, in source order, into declaration pairs."""
    declarations: list[GeneratedDeclaration] = []
    for fd in document.block.functions:
        declarations.extend(lower_definition(fd))
    return declarations


def lower_definition(
    fd: FunctionDefinition,
) -> tuple[GeneratedDeclaration, GeneratedDeclaration]:
    """Return the (signature, check) pair for one function definition."""
    definition = fd.definition
    if not isinstance(definition, ImplicitDefinition):
        raise UnsupportedDefinitionError(
            f"not implemented: definition kind {type(definition).__name__}",
            getattr(definition, "span", fd.span),
        )
    try:
        try:
            return _lower_implicit(definition)
        except RecursionError:
            raise LoweringError(
                "postcondition nesting too deep", definition.postcondition.span,
            ) from None
    except LoweringError as e:
        e.set_definition(definition.name)
        raise


def _lower_implicit(
    definition: ImplicitDefinition,
) -> tuple[GeneratedDeclaration, GeneratedDeclaration]:
    params = tuple(lower_parameter(p) for p in definition.parameters)
    results = tuple(lower_return(r) for r in definition.returns)
    signature = GeneratedDeclaration(definition.name, params, results)

    condition = lower_expression(definition.postcondition.expression)
    check = GeneratedDeclaration(
        name=CHECK_PREFIX + definition.name,
        params=params + results,
        results=(GeneratedField((), BOOL),),
        body=(ReturnStmt(condition),),
    )
    return signature, check


def lower_parameter(pair: PatternTypePair) -> GeneratedField:
    return GeneratedField(tuple(pair.patterns.names), lower_type(pair.type))


def lower_return(pair: IdentTypePair) -> GeneratedField:
    return GeneratedField((pair.name,), lower_type(pair.type))


def lower_type(ty: Type) -> NamedType:
    """Map a source type to a named type reference."""
    if isinstance(ty, BasicType):
        return NamedType(ty.name)
    raise UnsupportedTypeError(
        f"not implemented: type {type(ty).__name__}", getattr(ty, "span", None),
    )


def lower_expression(expr: Expression) -> GenExpr:
    """Translate a postcondition expression into a generated boolean expression."""
    if isinstance(expr, Variable):
        return Ident(expr.name)
    if isinstance(expr, Negation):
        return Not(lower_expression(expr.operand))
    if isinstance(expr, BinaryOp):
        right = lower_expression(expr.right)
        left = lower_expression(expr.left)
        op = OPERATORS.get(expr.operator)
        if op is None:
            raise UnsupportedOperatorError(expr.operator, expr.span)
        return Binary(op, left, right)
    raise UnimplementedExpressionError(
        f"not implemented: expression {type(expr).__name__}",
        getattr(expr, "span", None),
    )
