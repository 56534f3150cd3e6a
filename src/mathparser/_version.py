"""Version lookup for mathparser."""

from __future__ import annotations

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

# Present only in a source checkout (src/mathparser/_version.py -> repo root)
_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def get_version() -> str:
    """Return the checkout's pyproject version, else the installed distribution's."""
    if _PYPROJECT.is_file():
        with _PYPROJECT.open("rb") as f:
            project = tomllib.load(f).get("project", {})
        if project.get("name") == "mathparser" and "version" in project:
            return str(project["version"])
    try:
        return version("mathparser")
    except PackageNotFoundError:
        return "0+unknown"
