"""slgen command-line interface."""

from __future__ import annotations

from pathlib import Path

import click

from slgen import __version__
from slgen.compiler import compile_files, parse_source, read_source
from slgen.config import SlgenConfig, find_config, load_config
from slgen.errors import CompileError, Diagnostic, DiagnosticRenderer
from slgen.go_emitter import GoEmitter
from slgen.grammar import render_ebnf
from slgen.lexer import Lexer
from slgen.sexpr import format_sexpr, parse_sexpr


def _load_config_for(files: tuple[str, ...]) -> SlgenConfig:
    start = Path(files[0]) if files else None
    return load_config(find_config(start))


def _report(diagnostics: list[Diagnostic], color: bool) -> None:
    renderer = DiagnosticRenderer(color=color)
    for diag in diagnostics:
        click.echo(renderer.render(diag), err=True)


@click.group()
@click.version_option(__version__, prog_name="slgen")
def main() -> None:
    """Lower S-expression function specifications into Go stubs."""


@main.command()
def ebnf() -> None:
    """Print the grammar as EBNF."""
    click.echo(render_ebnf())


@main.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--raw", is_flag=True, help="Dump the generic S-expression tree.")
@click.option("--no-color", is_flag=True, help="Disable colored diagnostics.")
def view(files: tuple[str, ...], raw: bool, no_color: bool) -> None:
    """View the parse tree of specification files."""
    config = _load_config_for(files)
    color = config.diagnostics.color and not no_color

    for file in files:
        try:
            source = read_source(Path(file))
            if raw:
                tree = parse_sexpr(Lexer(source, file).lex())
                click.echo(format_sexpr(tree))
            else:
                _dump_ast(parse_source(source, file), 0)
        except CompileError as e:
            _report(e.diagnostics, color)
            raise SystemExit(1)


@main.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--package", "package", default=None, help="Go package name of the output.")
@click.option("-o", "--output", type=click.Path(dir_okay=False), default=None,
              help="Write Go source to this file instead of stdout.")
@click.option("--no-color", is_flag=True, help="Disable colored diagnostics.")
def gen(files: tuple[str, ...], package: str | None, output: str | None, no_color: bool) -> None:
    """Generate Go signature and postcondition check stubs."""
    config = _load_config_for(files)
    color = config.diagnostics.color and not no_color

    result = compile_files([Path(f) for f in files])
    if not result.ok:
        _report(result.diagnostics, color)
        click.echo(f"error: failed to compile {result.failed}", err=True)
        raise SystemExit(1)

    emitter = GoEmitter(
        result.declarations,
        package or config.generate.package,
        header=config.generate.header,
    )
    try:
        source = emitter.emit()
    except CompileError as e:
        _report(e.diagnostics, color)
        raise SystemExit(1)
    if output is None:
        click.echo(source, nl=False)
    else:
        Path(output).write_text(source, encoding="utf-8")
        click.echo(f"wrote {len(result.declarations)} declarations to {output}", err=True)


def _dump_ast(node: object, depth: int) -> None:
    """Print a readable AST dump."""
    indent = "  " * depth
    name = type(node).__name__

    if hasattr(node, "__dataclass_fields__"):
        fields = node.__dataclass_fields__  # type: ignore[union-attr]
        click.echo(f"{indent}{name}")
        for field_name in fields:
            if field_name == "span":
                continue
            value = getattr(node, field_name)
            if isinstance(value, list):
                if not value:
                    click.echo(f"{indent}  {field_name}: []")
                elif all(isinstance(v, str) for v in value):
                    click.echo(f"{indent}  {field_name}: {value!r}")
                else:
                    click.echo(f"{indent}  {field_name}:")
                    for item in value:
                        _dump_ast(item, depth + 2)
            elif hasattr(value, "__dataclass_fields__"):
                click.echo(f"{indent}  {field_name}:")
                _dump_ast(value, depth + 2)
            else:
                click.echo(f"{indent}  {field_name}: {value!r}")
    else:
        click.echo(f"{indent}{name}: {node!r}")
