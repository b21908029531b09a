"""vsm-publisher package for relaying build metadata and SBOMs to LeanIX VSM."""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path


def _get_version() -> str:
    """Get package version, falling back to pyproject.toml for source checkouts."""
    try:
        return version("vsm-publisher")
    except PackageNotFoundError:
        pass

    pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
    try:
        with open(pyproject_path, "rb") as f:
            pyproject_data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return "unknown"
    return pyproject_data.get("project", {}).get("version", "unknown")


__version__ = _get_version()
