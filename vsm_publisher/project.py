"""Project metadata lookup (PEP 621 format) and default SBOM location."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import tomllib

from vsm_publisher.exceptions import ConfigurationError
from vsm_publisher.logging_config import logger

TOOL_SECTION = "vsm-publisher"


@dataclass
class ProjectInfo:
    """
    Identity of the project being built.

    Attributes:
        group_id: Owning group, first half of the VSM service ID
        artifact_id: Artifact name, second half of the service ID and the service name
        version: Version being built
        description: Optional human description
        base_dir: Project root used to resolve the default SBOM path
    """

    group_id: str
    artifact_id: str
    version: str
    description: Optional[str] = None
    base_dir: Path = Path(".")


def default_sbom_path(base_dir: Union[str, Path]) -> Path:
    """Return the conventional SBOM location, <base_dir>/target/bom.json."""
    return Path(base_dir).absolute() / "target" / "bom.json"


def _read_pyproject(base_dir: Path) -> Dict[str, Any]:
    pyproject_path = base_dir / "pyproject.toml"
    if not pyproject_path.exists():
        logger.debug(f"No pyproject.toml found in {base_dir}")
        return {}

    try:
        with open(pyproject_path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as e:
        raise ConfigurationError(f"Failed to parse {pyproject_path}: {e}") from e


def _table(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, dict):
        raise ConfigurationError(f"pyproject.toml: [{key}] must be a table, got {type(value).__name__}")
    return value


def _string(table: Dict[str, Any], key: str) -> Optional[str]:
    value = table.get(key)
    if value is not None and not isinstance(value, str):
        raise ConfigurationError(f"pyproject.toml: {key} must be a string, got {type(value).__name__}")
    return value


def load_project_info(
    base_dir: Union[str, Path] = ".",
    group_id: Optional[str] = None,
    artifact_id: Optional[str] = None,
    version: Optional[str] = None,
    description: Optional[str] = None,
) -> ProjectInfo:
    """
    Resolve the project identity.

    Explicit arguments win; missing values come from pyproject.toml:
    - [project].name -> artifact_id
    - [project].version -> version
    - [project].description -> description
    - [tool.vsm-publisher].group-id -> group_id

    Args:
        base_dir: Project root containing pyproject.toml
        group_id: Group ID override
        artifact_id: Artifact ID override
        version: Version override
        description: Description override

    Returns:
        ProjectInfo

    Raises:
        ConfigurationError: If group ID, artifact ID or version cannot be determined,
            or pyproject.toml holds values of the wrong type
    """
    base = Path(base_dir).absolute()
    data = _read_pyproject(base)
    project = _table(data, "project")
    tool = _table(_table(data, "tool"), TOOL_SECTION)

    info = ProjectInfo(
        group_id=group_id or _string(tool, "group-id") or "",
        artifact_id=artifact_id or _string(project, "name") or "",
        version=version or _string(project, "version") or "",
        description=description if description is not None else _string(project, "description"),
        base_dir=base,
    )

    missing = [
        label
        for label, value in (
            ("group ID", info.group_id),
            ("artifact ID", info.artifact_id),
            ("version", info.version),
        )
        if not value
    ]
    if missing:
        raise ConfigurationError(f"Project {', '.join(missing)} could not be determined")

    logger.debug(f"Resolved project {info.group_id}.{info.artifact_id} {info.version}")
    return info
