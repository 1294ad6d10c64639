"""Command-line interface for tss."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .builtin import builtin_source, list_builtins, load_builtin
from .cascade import matching_rules, resolve_tree
from .exceptions import ParseError, TssError
from .highlights import HighlightTable
from .logger import setup_logger
from .models import Stylesheet
from .parser import StylesheetParser
from .theme import default_base_theme, load_base_theme
from .tree import load_tree

app = typer.Typer(
    name="tss",
    help="Check, format and apply tss stylesheets to syntax trees",
    add_completion=False,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=changes, 2=checks, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
) -> None:
    """Global options for tss commands."""
    setup_logger(verbose)


def _format_parse_error(path: Path, error: ParseError) -> str:
    return f"{path}:{error.line}:{error.column}: error[{error.kind.value}]: {error.message}"


def _load_stylesheet(path: Path) -> Stylesheet:
    try:
        return StylesheetParser().parse_file(path)
    except FileNotFoundError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None
    except ParseError as e:
        typer.echo(_format_parse_error(path, e), err=True)
        raise typer.Exit(1) from None


@app.command()
def check(
    files: Annotated[list[Path], typer.Argument(help="Stylesheet files to check")],
) -> None:
    """Parse stylesheets and report the first error in each."""
    parser = StylesheetParser()
    failed = False
    for path in files:
        try:
            stylesheet = parser.parse_file(path)
        except FileNotFoundError as e:
            typer.echo(f"Error: {e}", err=True)
            failed = True
        except ParseError as e:
            typer.echo(_format_parse_error(path, e), err=True)
            failed = True
        else:
            typer.echo(f"{path}: ok ({len(stylesheet)} rules)")

    if failed:
        raise typer.Exit(1)


@app.command("format")
def format_(
    file: Annotated[Path, typer.Argument(help="Stylesheet file to format")],
    *,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Output file path")] = None,
) -> None:
    """Print a stylesheet in canonical form (one rule per line, comments dropped)."""
    text = _load_stylesheet(file).to_tss()
    if output:
        output.write_text(text, encoding="utf-8")
        typer.echo(f"Stylesheet written to {output}")
    else:
        typer.echo(text, nl=False)


@app.command("resolve")
def resolve_command(
    stylesheet_file: Annotated[Path, typer.Argument(help="Stylesheet file")],
    tree_file: Annotated[Path, typer.Argument(help="YAML tree description")],
    *,
    theme: Annotated[
        Path | None,
        typer.Option("--theme", "-t", help="Base theme YAML (default: built-in theme)"),
    ] = None,
    explain: Annotated[
        bool,
        typer.Option("--explain", help="List the rules that matched each node"),
    ] = False,
) -> None:
    """Resolve the style of every node in a tree."""
    stylesheet = _load_stylesheet(stylesheet_file)
    try:
        base_theme: HighlightTable = (
            load_base_theme(theme) if theme is not None else default_base_theme()
        )
        root = load_tree(tree_file)
    except TssError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    for node, depth, style in resolve_tree(stylesheet, root, base_theme):
        indent = "  " * depth
        typer.echo(f"{indent}{node.kind()}: {style}")
        if explain:
            for position, rule in matching_rules(stylesheet, node):
                typer.echo(f"{indent}  <- rule {position}: {rule}")


@app.command()
def builtins(
    name: Annotated[
        str | None, typer.Argument(help="Built-in stylesheet to print (omit to list)")
    ] = None,
) -> None:
    """List the built-in stylesheets, or print one."""
    if name is None:
        for builtin_name in list_builtins():
            stylesheet = load_builtin(builtin_name)
            typer.echo(f"{builtin_name} ({len(stylesheet)} rules)")
        return

    try:
        typer.echo(builtin_source(name), nl=False)
    except KeyError:
        typer.echo(
            f"Error: Unknown built-in stylesheet '{name}'. "
            f"Available: {', '.join(list_builtins())}",
            err=True,
        )
        raise typer.Exit(1) from None


def main() -> int:
    """Main entry point."""
    # Typer handles sys.exit() internally
    app()
    return 0


if __name__ == "__main__":
    main()
