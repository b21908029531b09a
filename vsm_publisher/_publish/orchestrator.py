"""Publish orchestrator: gate, authenticate, compose and submit."""

from pathlib import Path
from typing import Callable, Optional

import sentry_sdk

from vsm_publisher.exceptions import FileProcessingError, VsmPublisherError
from vsm_publisher.logging_config import logger
from vsm_publisher.project import default_sbom_path

from .auth import AuthenticationClient
from .endpoints import EndpointConfig
from .gate import should_publish
from .metadata import compose_metadata
from .protocol import PublishInput, PublishRequest
from .publisher import ServicePublisher
from .result import PublishOutcome


def resolve_sbom_file(sbom_path: Optional[str], base_dir: Path) -> Optional[Path]:
    """
    Locate the SBOM to attach.

    Args:
        sbom_path: Explicit path, or None/empty for <base_dir>/target/bom.json
        base_dir: Project root

    Returns:
        Path to an existing SBOM file, or None if there is nothing to attach

    Raises:
        FileProcessingError: If the path exists but is not a readable file
    """
    if sbom_path:
        path = Path(sbom_path)
    else:
        path = default_sbom_path(base_dir)
        logger.info(f"No SBOM path given, using default {path}")

    try:
        exists = path.exists()
    except OSError as e:
        raise FileProcessingError(f"Problem accessing SBOM path {path}: {e}") from e

    if not exists:
        logger.info(f"SBOM not found at '{path}', SKIPPING attachment")
        return None
    if not path.is_file():
        raise FileProcessingError(f"SBOM path {path} is not a file")

    logger.info(f"SBOM path is {path}")
    return path


class PublishOrchestrator:
    """
    Runs the publish pipeline for one build.

    Failures never escape run(): they are logged as warnings and returned as
    a failed PublishOutcome, so the host build is never broken by this step.

    Example:
        orchestrator = PublishOrchestrator()
        outcome = orchestrator.run(PublishInput(
            region="eu",
            host="acme",
            api_token="...",
            project=load_project_info("."),
        ))
    """

    def __init__(
        self,
        auth_client_factory: Callable[[EndpointConfig], AuthenticationClient] = AuthenticationClient,
        publisher_factory: Callable[[EndpointConfig], ServicePublisher] = ServicePublisher,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            auth_client_factory: Builds the token client for an endpoint
            publisher_factory: Builds the service publisher for an endpoint
        """
        self._auth_client_factory = auth_client_factory
        self._publisher_factory = publisher_factory

    def run(self, input: PublishInput) -> PublishOutcome:
        """
        Execute the pipeline and reduce any failure to a warning.

        Args:
            input: PublishInput for this build

        Returns:
            PublishOutcome describing what happened
        """
        try:
            return self._run(input)
        except VsmPublisherError as e:
            message = f"Problem relaying data to VSM due to: {e}"
            logger.warning(message)
            return PublishOutcome.failure_result(message=message, http_status=getattr(e, "status_code", None))
        except Exception as e:
            message = f"Problem relaying data to VSM due to: {e}"
            logger.warning(message)
            logger.debug("Unexpected publish failure", exc_info=True)
            sentry_sdk.capture_exception(e)
            return PublishOutcome.failure_result(message=message)

    def _run(self, input: PublishInput) -> PublishOutcome:
        project = input.project
        endpoint = EndpointConfig.from_settings(
            region=input.region,
            host=input.host,
            api_token=input.api_token,
            domain=input.domain,
        )

        sbom_file = resolve_sbom_file(input.sbom_path, project.base_dir)

        if not should_publish(project.version, input.skip_snapshot):
            message = f"Snapshot version {project.version} not relayed to VSM (skip snapshot enabled)"
            logger.info("***SKIPPING*** relaying build data to VSM")
            logger.info(message)
            return PublishOutcome.skipped_result(message)

        logger.info(f"Project description is {project.description}")
        logger.info(f"skipSnapshot is set to {input.skip_snapshot}")
        logger.info(f"Project version is {project.version}")

        token = self._auth_client_factory(endpoint).get_bearer_token()
        metadata_json = compose_metadata(input.data, project.version)

        request = PublishRequest.build(
            project=project,
            source_type=input.source_type,
            source_instance=input.source_instance,
            metadata_json=metadata_json,
            sbom_file=sbom_file,
        )

        return self._publisher_factory(endpoint).publish(token, request)
