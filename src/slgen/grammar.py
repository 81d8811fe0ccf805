"""Keyword atoms and the production table of the specification grammar.

The parser matches the keyword constants below verbatim; the production
table mirrors its methods and is what ``slgen ebnf`` prints.
"""

from __future__ import annotations

from dataclasses import dataclass

# ── Keyword atoms ────────────────────────────────────────────────

KW_DOCUMENT = "sl_document"
KW_DEFINITION_BLOCK = "sl_definition_block"
KW_FUNCTION_DEFINITIONS = "sl_function_definitions"
KW_FUNCTIONS = "functions"
KW_FUNCTION_DEFINITION = "function_definition"
KW_IMPLICIT_DEFINITION = "implicit_function_definition"
KW_PARAMETER_TYPES = "parameter_types"
KW_PATTERN_TYPE_PAIR_LIST = "pattern_type_pair_list"
KW_PATTERN_LIST = "pattern_list"
KW_PATTERN = "pattern"
KW_IDENTIFIER_TYPE_PAIR_LIST = "identifier_type_pair_list"
KW_IDENTIFIER_TYPE_PAIR = "identifier_type_pair"
KW_TYPE = "type"
KW_BASIC_TYPE = "basic_type"
KW_POST_EXPRESSION = "post_expression"
KW_POST = "post"
KW_EXPRESSION = "expression"
KW_VARIABLE = "variable"
KW_NAME = "name"
KW_NOT = "not"
COLON = ":"

LOOKAHEAD = 2


@dataclass(frozen=True)
class Production:
    name: str
    alternatives: tuple[str, ...]


def _tagged(*parts: str) -> str:
    return " ".join(['"("', *parts, '")"'])


def _kw(word: str) -> str:
    return f'"{word}"'


PRODUCTIONS: tuple[Production, ...] = (
    Production("Document", (
        _tagged(_kw(KW_DOCUMENT), "DefinitionBlock"),
    )),
    Production("DefinitionBlock", (
        _tagged(_kw(KW_DEFINITION_BLOCK), "FunctionDefinitions"),
    )),
    Production("FunctionDefinitions", (
        _tagged(_kw(KW_FUNCTION_DEFINITIONS), _kw(KW_FUNCTIONS), "FunctionDefinition*"),
    )),
    Production("FunctionDefinition", (
        _tagged(_kw(KW_FUNCTION_DEFINITION), "ImplicitDefinition"),
    )),
    Production("ImplicitDefinition", (
        _tagged(_kw(KW_IMPLICIT_DEFINITION), "<ident>", "ParameterTypes",
                "IdentifierTypePairList", "PostExpression"),
    )),
    Production("ParameterTypes", (
        _tagged(_kw(KW_PARAMETER_TYPES), "PatternTypePairList*"),
    )),
    Production("PatternTypePairList", (
        _tagged(_kw(KW_PATTERN_TYPE_PAIR_LIST), "PatternList", _kw(COLON), "Type"),
    )),
    Production("PatternList", (
        _tagged(_kw(KW_PATTERN_LIST), "Pattern+"),
    )),
    Production("Pattern", (
        _tagged(_kw(KW_PATTERN), "<ident>"),
    )),
    Production("IdentifierTypePairList", (
        _tagged(_kw(KW_IDENTIFIER_TYPE_PAIR_LIST), "IdentifierTypePair*"),
    )),
    Production("IdentifierTypePair", (
        _tagged(_kw(KW_IDENTIFIER_TYPE_PAIR), "<ident>", _kw(COLON), "Type"),
    )),
    Production("Type", (
        _tagged(_kw(KW_TYPE), "BasicType"),
    )),
    Production("BasicType", (
        _tagged(_kw(KW_BASIC_TYPE), "<ident>"),
    )),
    Production("PostExpression", (
        _tagged(_kw(KW_POST_EXPRESSION), _kw(KW_POST), "Expression"),
    )),
    Production("Expression", (
        _tagged(_kw(KW_EXPRESSION), "Term"),
        _tagged("Expression", "<operator>", "Expression"),
    )),
    Production("Term", (
        "Variable",
        "Negation",
    )),
    Production("Variable", (
        _tagged(_kw(KW_VARIABLE), _tagged(_kw(KW_NAME), "<ident>")),
    )),
    Production("Negation", (
        _tagged(_kw(KW_NOT), "Expression"),
    )),
)


def render_ebnf() -> str:
    """Render the production table as EBNF, one production per line."""
    width = max(len(p.name) for p in PRODUCTIONS)
    lines: list[str] = []
    for prod in PRODUCTIONS:
        head = f"{prod.name:<{width}} ::= "
        lines.append(head + prod.alternatives[0])
        for alt in prod.alternatives[1:]:
            lines.append(" " * (len(head) - 2) + "| " + alt)
    lines.append("")
    lines.append(f"(* lookahead: {LOOKAHEAD} tokens;"
                 " <operator> is any identifier or terminal atom *)")
    return "\n".join(lines)
