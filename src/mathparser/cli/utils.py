"""
mathparser CLI utilities.

Shared helpers used by the CLI commands.
"""

from __future__ import annotations

import logging
import math
import platform
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from mathparser._version import get_version
from mathparser.core.errors import MathParserError
from mathparser.core.manifest import MathParserConfig, find_config, load_config

err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"mathparser version {get_version()}")
        typer.echo(
            f"Python {platform.python_implementation()} {platform.python_version()}"
            f" on {platform.system()}"
        )
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send library logs to stderr; DEBUG with --verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def resolve_config(path: Path | None, verbose: bool) -> MathParserConfig:
    """Load ``path`` or ./mathparser.toml, falling back to defaults."""
    config_path = path or find_config()
    if config_path is None:
        return MathParserConfig()

    try:
        config = load_config(config_path)
    except MathParserError as e:
        fail(e)
    if not verbose:
        logging.getLogger("mathparser").setLevel(config.log_level)
    return config


def parse_assignments(assignments: list[str]) -> dict[str, float]:
    """Turn ``["x=1", "y=2.5"]`` into ``{"x": 1.0, "y": 2.5}``."""
    bindings: dict[str, float] = {}
    for item in assignments:
        name, sep, raw = item.partition("=")
        name = name.strip()
        if not sep or not name:
            raise typer.BadParameter(f"Expected NAME=VALUE, got {item!r}", param_hint="--var")
        try:
            bindings[name] = float(raw)
        except ValueError:
            raise typer.BadParameter(
                f"Value for {name!r} is not a number: {raw!r}", param_hint="--var"
            ) from None
    return bindings


def format_value(value: float) -> str | float:
    """JSON-safe rendering of a result: non-finite values become strings."""
    if math.isfinite(value):
        return value
    return repr(value)


def fail(error: MathParserError) -> NoReturn:
    """Print a library error and exit with status 1."""
    err_console.print(f"[red]Error ({error.kind}):[/red] {escape(error.message)}")
    raise typer.Exit(1)
