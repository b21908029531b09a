import os
from dataclasses import dataclass
from typing import Optional

import click
import sentry_sdk

from .. import __version__
from .._publish import (
    DEFAULT_DOMAIN,
    DEFAULT_SOURCE_INSTANCE,
    DEFAULT_SOURCE_TYPE,
    PublishInput,
    PublishOrchestrator,
    PublishOutcome,
)
from ..console import (
    gha_warning,
    print_banner,
    print_publish_summary,
    print_step_end,
    print_step_header,
    print_summary_table,
)
from ..exceptions import ConfigurationError
from ..logging_config import logger, set_log_format, set_log_level
from ..project import ProjectInfo, load_project_info

VSM_PUBLISHER_VERSION = __version__

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]
LOG_FORMATS = ["text", "json"]

"""

Relaying build data to VSM happens in two steps.

# Step 1: Project resolution
The project's group ID, artifact ID, version and description are taken
from the command line or from pyproject.toml in the project directory.

# Step 2: Relay to VSM
The snapshot gate decides whether the build is sent at all. If it is,
a bearer token is exchanged for the API token, the metadata is merged
with the project version and the service is registered together with
the SBOM (default: <project-dir>/target/bom.json) if one exists.

Publishing is best effort: every failure is reported as a warning and
the command exits 0 so that the host build is never broken.

"""


@dataclass
class Config:
    """Configuration settings for the publisher."""

    region: str
    host: str
    api_token: str
    project_dir: str = "."
    group_id: Optional[str] = None
    artifact_id: Optional[str] = None
    project_version: Optional[str] = None
    description: Optional[str] = None
    sbom_path: Optional[str] = None
    skip_snapshot: bool = True
    data: str = "{}"
    source_type: str = DEFAULT_SOURCE_TYPE
    source_instance: str = DEFAULT_SOURCE_INSTANCE
    domain: str = DEFAULT_DOMAIN

    def validate(self) -> None:
        """
        Validate configuration settings.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not self.region:
            raise ConfigurationError("VSM region is not defined")
        if not self.host:
            raise ConfigurationError("VSM host is not defined")
        if not self.api_token:
            raise ConfigurationError("VSM API token is not defined")
        if not self.source_type:
            raise ConfigurationError("Source type is not defined")
        if not self.source_instance:
            raise ConfigurationError("Source instance is not defined")
        if not os.path.isdir(self.project_dir):
            raise ConfigurationError(f"Project directory not found: {self.project_dir}")

    def to_publish_input(self, project: ProjectInfo) -> PublishInput:
        """Combine this configuration with a resolved project."""
        return PublishInput(
            region=self.region,
            host=self.host,
            api_token=self.api_token,
            project=project,
            sbom_path=self.sbom_path,
            skip_snapshot=self.skip_snapshot,
            data=self.data,
            source_type=self.source_type,
            source_instance=self.source_instance,
            domain=self.domain,
        )


def evaluate_boolean(value: str) -> bool:
    """
    Evaluate string values as boolean.

    Args:
        value: String value to evaluate

    Returns:
        Boolean result
    """
    return value.lower() in ["true", "yes", "yeah", "1"]


def build_config(
    region: Optional[str],
    host: Optional[str],
    api_token: Optional[str],
    project_dir: str = ".",
    group_id: Optional[str] = None,
    artifact_id: Optional[str] = None,
    project_version: Optional[str] = None,
    description: Optional[str] = None,
    sbom_path: Optional[str] = None,
    skip_snapshot: bool = True,
    data: Optional[str] = None,
    source_type: str = DEFAULT_SOURCE_TYPE,
    source_instance: str = DEFAULT_SOURCE_INSTANCE,
    domain: str = DEFAULT_DOMAIN,
) -> Config:
    """
    Build and validate configuration from parsed CLI values.

    Returns:
        Validated configuration object

    Raises:
        ConfigurationError: If configuration is invalid
    """
    config = Config(
        region=region or "",
        host=host or "",
        api_token=api_token or "",
        project_dir=project_dir,
        group_id=group_id,
        artifact_id=artifact_id,
        project_version=project_version,
        description=description,
        sbom_path=sbom_path or None,
        skip_snapshot=skip_snapshot,
        data=data or "{}",
        source_type=source_type,
        source_instance=source_instance,
        domain=domain or DEFAULT_DOMAIN,
    )
    config.validate()
    return config


def _before_send(event, hint):
    """
    Filter events before sending to Sentry.

    Configuration and metadata errors are user errors and are not reported.
    """
    if "exc_info" in hint:
        exc_type, exc_value, tb = hint["exc_info"]
        if isinstance(exc_value, ConfigurationError):
            return None
    return event


def initialize_sentry() -> bool:
    """
    Initialize Sentry for error tracking.

    Only enabled when SENTRY_DSN is set and TELEMETRY is not false.

    Returns:
        True if Sentry was initialized
    """
    if not evaluate_boolean(os.getenv("TELEMETRY", "true")):
        return False

    sentry_dsn = os.getenv("SENTRY_DSN")
    if not sentry_dsn:
        logger.debug("SENTRY_DSN not set, error telemetry disabled")
        return False

    try:
        sentry_sdk.init(
            dsn=sentry_dsn,
            send_default_pii=False,
            release=f"vsm-publisher@{VSM_PUBLISHER_VERSION}",
            before_send=_before_send,
        )
    except Exception as e:
        logger.warning(f"Error telemetry disabled, could not initialize Sentry: {e}")
        return False
    return True


def run_pipeline(config: Config) -> PublishOutcome:
    """
    Resolve the project and relay it to VSM.

    Args:
        config: Validated configuration

    Returns:
        PublishOutcome (failures are returned, never raised)
    """
    print_step_header(1, "Project Resolution")
    try:
        project = load_project_info(
            config.project_dir,
            group_id=config.group_id,
            artifact_id=config.artifact_id,
            version=config.project_version,
            description=config.description,
        )
    except ConfigurationError as e:
        message = f"Problem relaying data to VSM due to: {e}"
        logger.warning(message)
        print_step_end(1, success=False)
        outcome = PublishOutcome.failure_result(message=message)
        print_publish_summary(success=False, message=message)
        return outcome

    print_summary_table(
        "Project",
        [
            ("Service ID", f"{project.group_id}.{project.artifact_id}"),
            ("Version", project.version),
            ("Description", project.description),
            ("Source", f"{config.source_type} / {config.source_instance}"),
        ],
    )
    print_step_end(1)

    print_step_header(2, "Relay to VSM")
    outcome = PublishOrchestrator().run(config.to_publish_input(project))
    print_step_end(2, success=outcome.success)

    print_publish_summary(
        success=outcome.success,
        skipped=outcome.skipped,
        http_status=outcome.http_status,
        message=outcome.message,
        response=outcome.metadata,
    )
    return outcome


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(VSM_PUBLISHER_VERSION, "--version", prog_name="vsm-publisher", message="%(prog)s %(version)s")
@click.option("--region", envvar="VSM_REGION", help="Hosting region of the VSM workspace: eu, de, us, au, ca or ch.")
@click.option("--host", envvar="VSM_HOST", help='DNS host of the workspace, e.g. "acme" for https://acme.leanix.net.')
@click.option(
    "--api-token",
    envvar="VSM_API_TOKEN",
    help="Technical user API token (not the OAuth token).",
)
@click.option(
    "--sbom-path",
    envvar="VSM_SBOM_PATH",
    help="Path to the SBOM file. [default: <project-dir>/target/bom.json]",
)
@click.option(
    "--skip-snapshot/--no-skip-snapshot",
    envvar="VSM_SKIP_SNAPSHOT",
    default=True,
    show_default=True,
    help="Do not relay versions containing SNAPSHOT.",
)
@click.option("--data", envvar="VSM_DATA", default="{}", show_default=True, help='Extra metadata as a JSON object.')
@click.option("--source-type", envvar="VSM_SOURCE_TYPE", default=DEFAULT_SOURCE_TYPE, show_default=True)
@click.option("--source-instance", envvar="VSM_SOURCE_INSTANCE", default=DEFAULT_SOURCE_INSTANCE, show_default=True)
@click.option("--group-id", envvar="VSM_GROUP_ID", help="Group ID. [default: [tool.vsm-publisher] group-id]")
@click.option("--artifact-id", envvar="VSM_ARTIFACT_ID", help="Artifact ID. [default: [project] name]")
@click.option("--project-version", envvar="VSM_PROJECT_VERSION", help="Version. [default: [project] version]")
@click.option("--description", envvar="VSM_DESCRIPTION", help="Description. [default: [project] description]")
@click.option(
    "--project-dir",
    envvar="VSM_PROJECT_DIR",
    default=".",
    show_default=True,
    type=click.Path(file_okay=False),
    help="Project root containing pyproject.toml.",
)
@click.option("--domain", envvar="VSM_DOMAIN", default=DEFAULT_DOMAIN, show_default=True, help="Vendor domain.")
@click.option(
    "--log-level",
    envvar="VSM_LOG_LEVEL",
    default="INFO",
    show_default=True,
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
)
@click.option(
    "--log-format",
    envvar="VSM_LOG_FORMAT",
    default="text",
    show_default=True,
    type=click.Choice(LOG_FORMATS, case_sensitive=False),
    help="Log line format; json emits one JSON object per line.",
)
def cli(
    region: Optional[str],
    host: Optional[str],
    api_token: Optional[str],
    sbom_path: Optional[str],
    skip_snapshot: bool,
    data: str,
    source_type: str,
    source_instance: str,
    group_id: Optional[str],
    artifact_id: Optional[str],
    project_version: Optional[str],
    description: Optional[str],
    project_dir: str,
    domain: str,
    log_level: str,
    log_format: str,
) -> None:
    """Relay build metadata and an SBOM to LeanIX VSM.

    Failures are reported as warnings; the command always exits 0.
    """
    set_log_level(log_level)
    set_log_format(log_format)
    print_banner(VSM_PUBLISHER_VERSION)
    initialize_sentry()

    try:
        config = build_config(
            region=region,
            host=host,
            api_token=api_token,
            project_dir=project_dir,
            group_id=group_id,
            artifact_id=artifact_id,
            project_version=project_version,
            description=description,
            sbom_path=sbom_path,
            skip_snapshot=skip_snapshot,
            data=data,
            source_type=source_type,
            source_instance=source_instance,
            domain=domain,
        )
    except ConfigurationError as e:
        logger.warning(f"Configuration error: {e}")
        gha_warning(f"Nothing relayed to VSM: {e}", title="VSM publish")
        return

    run_pipeline(config)


def main() -> None:
    """Main entry point for vsm-publisher."""
    cli()
