"""Pipeline helpers: specification text -> Document -> declarations."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from slgen.ast_nodes import Document
from slgen.errors import CompileError, Diagnostic, SourceDecodeError
from slgen.generated import GeneratedDeclaration
from slgen.lexer import Lexer
from slgen.lowering import lower_document
from slgen.parser import Parser


def read_source(path: Path) -> str:
    """Read a UTF-8 specification file. Raises SourceDecodeError."""
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise SourceDecodeError(str(path), e) from None


def parse_source(source: str, filename: str = "<stdin>") -> Document:
    tokens = Lexer(source, filename).lex()
    return Parser(tokens, filename).parse()


def compile_source(source: str, filename: str = "<stdin>") -> list[GeneratedDeclaration]:
    """Lex, parse and lower one input unit. Raises CompileError."""
    return lower_document(parse_source(source, filename))


def compile_stream(stream: TextIO, filename: str = "<stdin>") -> list[GeneratedDeclaration]:
    """Like compile_source, reading from an already-open text stream."""
    tokens = Lexer.from_stream(stream, filename).lex()
    return lower_document(Parser(tokens, filename).parse())


@dataclass
class CompileResult:
    """Outcome of compiling several files in order."""

    ok: bool
    declarations: list[GeneratedDeclaration] = field(default_factory=list)
    compiled: list[Path] = field(default_factory=list)
    failed: Path | None = None
    diagnostics: list[Diagnostic] = field(default_factory=list)


def compile_files(paths: list[Path]) -> CompileResult:
    """Compile *paths* sequentially, stopping at the first failing file.

    Declarations of the files compiled before the failure are kept.
    """
    result = CompileResult(ok=True)
    for path in paths:
        try:
            decls = compile_source(read_source(path), str(path))
        except CompileError as e:
            result.ok = False
            result.failed = path
            result.diagnostics.extend(e.diagnostics)
            break
        result.declarations.extend(decls)
        result.compiled.append(path)
    return result
