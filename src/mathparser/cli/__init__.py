"""
mathparser CLI.

- commands.py: eval, parse and tokens commands
- utils.py: shared utilities (version, logging, config, --var parsing)
"""

from __future__ import annotations

from typing import Annotated

import typer

from mathparser.cli.commands import eval_command, parse_command, tokens_command
from mathparser.cli.utils import configure_logging, version_callback

app = typer.Typer(
    help="Parse and evaluate mathematical expressions.",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and environment information",
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log parsing and evaluation details")
    ] = False,
) -> None:
    """mathparser CLI main callback for global options."""
    configure_logging(verbose)
    ctx.obj = {"verbose": verbose}


app.command(name="eval")(eval_command)
app.command(name="parse")(parse_command)
app.command(name="tokens")(tokens_command)


def main() -> None:
    app()


__all__ = ["app", "main"]
