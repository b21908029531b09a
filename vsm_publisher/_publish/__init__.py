"""VSM publish pipeline.

This module relays a build's identity, metadata and optional SBOM to the
LeanIX VSM service catalog:
- EndpointConfig resolves the token and discovery URLs and the Basic credential
- AuthenticationClient exchanges the API token for a bearer token
- should_publish gates snapshot builds
- compose_metadata merges free-form metadata with the project version
- ServicePublisher submits the multipart registration
- PublishOrchestrator sequences the above and never raises

Usage:
    from vsm_publisher._publish import PublishInput, PublishOrchestrator
    from vsm_publisher.project import load_project_info

    outcome = PublishOrchestrator().run(PublishInput(
        region="eu",
        host="acme",
        api_token="...",
        project=load_project_info("."),
    ))
"""

from .auth import AuthenticationClient, get_bearer_token
from .endpoints import DEFAULT_DOMAIN, EndpointConfig
from .gate import is_snapshot, should_publish
from .metadata import compose_metadata
from .orchestrator import PublishOrchestrator, resolve_sbom_file
from .protocol import DEFAULT_SOURCE_INSTANCE, DEFAULT_SOURCE_TYPE, PublishInput, PublishRequest
from .publisher import ServicePublisher
from .result import PublishOutcome

__all__ = [
    # Core types
    "EndpointConfig",
    "PublishInput",
    "PublishRequest",
    "PublishOutcome",
    "DEFAULT_DOMAIN",
    "DEFAULT_SOURCE_TYPE",
    "DEFAULT_SOURCE_INSTANCE",
    # Pipeline stages
    "AuthenticationClient",
    "get_bearer_token",
    "is_snapshot",
    "should_publish",
    "compose_metadata",
    "ServicePublisher",
    # Orchestration
    "PublishOrchestrator",
    "resolve_sbom_file",
]
