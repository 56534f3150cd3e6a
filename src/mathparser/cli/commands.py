"""
Expression commands: eval, parse, tokens.
"""

from __future__ import annotations

import json
from enum import StrEnum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from mathparser.cli.utils import fail, format_value, parse_assignments, resolve_config
from mathparser.core.errors import MathParserError
from mathparser.core.expression_lang.printer import to_ascii
from mathparser.core.std import StdMathParser

console = Console()

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        help="Path to mathparser.toml (default: ./mathparser.toml if present)",
    ),
]


class OutputFormat(StrEnum):
    ASCII = "ascii"
    JSON = "json"


def _std_parser(ctx: typer.Context, config_path: Path | None) -> StdMathParser:
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    return StdMathParser.from_config(resolve_config(config_path, verbose))


def eval_command(
    ctx: typer.Context,
    expression: Annotated[str, typer.Argument(help="Expression, e.g. 'sin(x)^2 + 3*y'")],
    var: Annotated[
        list[str] | None,
        typer.Option("--var", "-x", help="Variable binding NAME=VALUE (repeatable)"),
    ] = None,
    config: ConfigOption = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print a JSON object")] = False,
) -> None:
    """Evaluate an expression."""
    bindings = parse_assignments(var or [])
    parser = _std_parser(ctx, config)

    try:
        value = parser.evaluate(expression, bindings)
    except MathParserError as e:
        fail(e)

    if as_json:
        typer.echo(json.dumps({"expression": expression, "value": format_value(value)}))
    else:
        typer.echo(repr(value))


def parse_command(
    ctx: typer.Context,
    expression: Annotated[str, typer.Argument(help="Expression to parse")],
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="ascii re-renders the tree, json dumps it"),
    ] = OutputFormat.ASCII,
    config: ConfigOption = None,
) -> None:
    """Parse an expression and print its tree."""
    parser = _std_parser(ctx, config)

    try:
        tree = parser.parse(expression)
        if output_format == OutputFormat.JSON:
            text = tree.model_dump_json(indent=2)
        else:
            text = to_ascii(tree)
    except MathParserError as e:
        fail(e)

    typer.echo(text)


def tokens_command(
    expression: Annotated[str, typer.Argument(help="Expression to tokenize")],
) -> None:
    """Show the token stream of an expression."""
    try:
        tokens = StdMathParser().tokenize(expression)
    except MathParserError as e:
        fail(e)

    table = Table(title="Tokens")
    table.add_column("Kind", style="cyan")
    table.add_column("Value")
    table.add_column("Line", justify="right")
    table.add_column("Column", justify="right")
    for tok in tokens:
        table.add_row(str(tok.kind), tok.value, str(tok.line), str(tok.column))
    console.print(table)
