"""
Loading of ``mathparser.toml`` configuration files.

Example file:

    [constants]
    tau = 6.283185307179586

    [variables]
    x = 0.5

    [functions.aliases]
    ln = "log"

    [logging]
    level = "INFO"
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from mathparser.core.errors import ConfigError
from mathparser.core.expression_lang.functions import DEFAULT_CONSTANTS, DEFAULT_FUNCTIONS

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "mathparser.toml"


@dataclass
class MathParserConfig:
    """Settings read from mathparser.toml."""

    constants: dict[str, float] = field(default_factory=dict)
    variables: dict[str, float] = field(default_factory=dict)
    function_aliases: dict[str, str] = field(default_factory=dict)
    log_level: str = "WARNING"


def _is_identifier(name: str) -> bool:
    return name.isascii() and name.isalnum() and name[0].isalpha()


def _read_numbers(section: str, data: Any) -> dict[str, float]:
    if not isinstance(data, dict):
        raise ConfigError(f"[{section}] must be a table")
    numbers: dict[str, float] = {}
    for name, value in data.items():
        if not _is_identifier(name):
            raise ConfigError(f"[{section}] {name!r} is not a valid identifier")
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"[{section}] {name} must be a number, got {value!r}")
        numbers[name] = float(value)
    return numbers


def _read_aliases(data: Any) -> dict[str, str]:
    if not isinstance(data, dict):
        raise ConfigError("[functions.aliases] must be a table")
    aliases: dict[str, str] = {}
    for alias, target in data.items():
        if not _is_identifier(alias):
            raise ConfigError(f"[functions.aliases] {alias!r} is not a valid identifier")
        if target not in DEFAULT_FUNCTIONS:
            raise ConfigError(f"[functions.aliases] {alias} points at unknown function {target!r}")
        aliases[alias] = target
    return aliases


def parse_config(data: dict[str, Any]) -> MathParserConfig:
    """Build a MathParserConfig from already-decoded TOML data."""
    constants = _read_numbers("constants", data.get("constants", {}))
    variables = _read_numbers("variables", data.get("variables", {}))

    functions_data = data.get("functions", {})
    if not isinstance(functions_data, dict):
        raise ConfigError("[functions] must be a table")
    aliases = _read_aliases(functions_data.get("aliases", {}))

    logging_data = data.get("logging", {})
    if not isinstance(logging_data, dict):
        raise ConfigError("[logging] must be a table")
    level = str(logging_data.get("level", "WARNING")).upper()
    if level not in logging.getLevelNamesMapping():
        raise ConfigError(f"[logging] unknown level {level!r}")

    for name in constants:
        if name in DEFAULT_CONSTANTS:
            logger.warning("Config constant %r overrides the builtin value", name)
        if name in variables:
            logger.warning("%r is both a constant and a variable; the constant wins", name)

    return MathParserConfig(
        constants=constants,
        variables=variables,
        function_aliases=aliases,
        log_level=level,
    )


def load_config(path: Path) -> MathParserConfig:
    """Read and validate a mathparser.toml file.

    Raises:
        ConfigError: If the file cannot be read or contains invalid values.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    config = parse_config(data)
    logger.debug(
        "Loaded %s: %d constant(s), %d variable(s), %d alias(es)",
        path,
        len(config.constants),
        len(config.variables),
        len(config.function_aliases),
    )
    return config


def find_config(start: Path | None = None) -> Path | None:
    """Return the mathparser.toml in ``start`` (default: cwd), if any."""
    candidate = (start or Path.cwd()) / CONFIG_FILENAME
    return candidate if candidate.is_file() else None
