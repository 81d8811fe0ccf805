"""Generate Go source text from lowered declarations."""

from __future__ import annotations

from slgen.errors import EmitError
from slgen.generated import (
    Binary,
    GeneratedDeclaration,
    GeneratedField,
    GenExpr,
    Ident,
    Not,
    ReturnStmt,
)

_HEADER = "// Code generated by slgen. DO NOT EDIT."


class GoEmitter:
    """Emit a Go file holding one ``func`` per generated declaration."""

    def __init__(
        self,
        declarations: list[GeneratedDeclaration],
        package: str = "spec",
        *,
        header: bool = True,
    ) -> None:
        self._declarations = declarations
        self._package = package
        self._header = header
        self._out: list[str] = []
        self._indent = 0

    # ── Public API ─────────────────────────────────────────────

    def emit(self) -> str:
        """Generate the complete Go source."""
        self._out = []
        self._indent = 0
        if self._header:
            self._line(_HEADER)
            self._line("")
        self._line(f"package {self._package}")
        for decl in self._declarations:
            self._line("")
            try:
                self._emit_declaration(decl)
            except RecursionError:
                raise EmitError(f"nesting too deep to emit {decl.name}") from None
        return "\n".join(self._out) + "\n"

    # ── Helpers ────────────────────────────────────────────────

    def _line(self, text: str) -> None:
        if text:
            self._out.append("\t" * self._indent + text)
        else:
            self._out.append("")

    # ── Declarations ───────────────────────────────────────────

    def _emit_declaration(self, decl: GeneratedDeclaration) -> None:
        sig = f"func {decl.name}({format_fields(decl.params)})"
        results = format_results(decl.results)
        if results:
            sig += f" {results}"

        if decl.body is None:
            self._line(sig)
            return

        self._line(sig + " {")
        self._indent += 1
        for stmt in decl.body:
            self._emit_stmt(stmt)
        self._indent -= 1
        self._line("}")

    def _emit_stmt(self, stmt: ReturnStmt) -> None:
        if isinstance(stmt, ReturnStmt):
            self._line(f"return {format_expr(stmt.value)}")
        else:
            raise TypeError(f"cannot emit statement {type(stmt).__name__}")


def format_field(f: GeneratedField) -> str:
    if not f.names:
        return f.type.name
    return f"{', '.join(f.names)} {f.type.name}"


def format_fields(fields: tuple[GeneratedField, ...]) -> str:
    return ", ".join(format_field(f) for f in fields)


def format_results(fields: tuple[GeneratedField, ...]) -> str:
    """Result list; a single unnamed result needs no parentheses."""
    if not fields:
        return ""
    if len(fields) == 1 and not fields[0].names:
        return fields[0].type.name
    return f"({format_fields(fields)})"


def format_expr(expr: GenExpr, *, nested: bool = False) -> str:
    if isinstance(expr, Ident):
        return expr.name
    if isinstance(expr, Not):
        return f"!{format_expr(expr.operand, nested=True)}"
    if isinstance(expr, Binary):
        left = format_expr(expr.left, nested=True)
        right = format_expr(expr.right, nested=True)
        text = f"{left} {expr.op.value} {right}"
        return f"({text})" if nested else text
    raise TypeError(f"cannot emit expression {type(expr).__name__}")
