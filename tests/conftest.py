"""Shared pytest fixtures for mathparser tests."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner


@pytest.fixture
def variables() -> dict[str, float]:
    """Bindings used throughout the evaluator tests."""
    return {"x": 0.7, "y": 2.1}


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CLI test runner."""
    return CliRunner()
