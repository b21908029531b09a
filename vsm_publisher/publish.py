"""
Public API for relaying build data to LeanIX VSM.

Usage:
    from vsm_publisher.publish import publish_to_vsm

    outcome = publish_to_vsm(
        region="eu",
        host="acme",
        api_token="technical-user-token",
        project_dir=".",
        data='{"team": "payments"}',
    )
    if not outcome.success:
        print(outcome.message)
"""

from pathlib import Path
from typing import Optional, Union

from ._publish import (
    DEFAULT_DOMAIN,
    DEFAULT_SOURCE_INSTANCE,
    DEFAULT_SOURCE_TYPE,
    PublishInput,
    PublishOrchestrator,
    PublishOutcome,
)
from .exceptions import VsmPublisherError
from .logging_config import logger
from .project import load_project_info


def publish_to_vsm(
    region: str,
    host: str,
    api_token: str,
    project_dir: Union[str, Path] = ".",
    group_id: Optional[str] = None,
    artifact_id: Optional[str] = None,
    version: Optional[str] = None,
    description: Optional[str] = None,
    sbom_path: Optional[str] = None,
    skip_snapshot: bool = True,
    data: str = "{}",
    source_type: str = DEFAULT_SOURCE_TYPE,
    source_instance: str = DEFAULT_SOURCE_INSTANCE,
    domain: str = DEFAULT_DOMAIN,
) -> PublishOutcome:
    """
    Relay a project's identity, metadata and SBOM to VSM.

    Never raises; every failure, including unresolvable project metadata,
    is logged as a warning and returned as a failed outcome.

    Args:
        region: Hosting region of the VSM workspace (eu, de, us, au, ca, ch)
        host: DNS host of the workspace
        api_token: Technical user API token (not an OAuth token)
        project_dir: Project root with pyproject.toml
        group_id: Group ID override
        artifact_id: Artifact ID override
        version: Version override
        description: Description override
        sbom_path: SBOM path (default: <project_dir>/target/bom.json)
        skip_snapshot: Hold back versions containing "SNAPSHOT"
        data: Free-form metadata as a JSON object string
        source_type: Source type label
        source_instance: Source instance label
        domain: Vendor domain

    Returns:
        PublishOutcome
    """
    try:
        project = load_project_info(
            project_dir,
            group_id=group_id,
            artifact_id=artifact_id,
            version=version,
            description=description,
        )
    except VsmPublisherError as e:
        message = f"Problem relaying data to VSM due to: {e}"
        logger.warning(message)
        return PublishOutcome.failure_result(message=message)

    input_params = PublishInput(
        region=region,
        host=host,
        api_token=api_token,
        project=project,
        sbom_path=sbom_path,
        skip_snapshot=skip_snapshot,
        data=data,
        source_type=source_type,
        source_instance=source_instance,
        domain=domain,
    )

    return PublishOrchestrator().run(input_params)


__all__ = [
    "publish_to_vsm",
    "PublishInput",
    "PublishOutcome",
]
