"""Endpoint resolution for the VSM token and discovery services."""

import base64
from dataclasses import dataclass

# Default vendor domain hosting both the MTM token service and VSM
DEFAULT_DOMAIN = "leanix.net"

API_TOKEN_PREFIX = "apitoken:"


@dataclass(frozen=True)
class EndpointConfig:
    """
    Resolved service URLs and encoded credential for one publish attempt.

    Attributes:
        token_endpoint_url: OAuth2 token URL on the workspace host
        discovery_endpoint_url: VSM service discovery URL in the workspace region
        encoded_credential: base64 of "apitoken:<api token>" for Basic auth
    """

    token_endpoint_url: str
    discovery_endpoint_url: str
    encoded_credential: str

    @classmethod
    def from_settings(
        cls,
        region: str,
        host: str,
        api_token: str,
        domain: str = DEFAULT_DOMAIN,
    ) -> "EndpointConfig":
        """
        Build the endpoint configuration from workspace settings.

        Region and host are not validated; bad values produce URLs that fail
        at request time.

        Args:
            region: Hosting region of the VSM workspace (e.g. "eu", "us")
            host: DNS host of the workspace (e.g. "acme" for acme.leanix.net)
            api_token: Technical user API token
            domain: Vendor domain

        Returns:
            EndpointConfig instance
        """
        credential = base64.b64encode(f"{API_TOKEN_PREFIX}{api_token}".encode()).decode()
        return cls(
            token_endpoint_url=f"https://{host}.{domain}/services/mtm/v1/oauth2/token",
            discovery_endpoint_url=f"https://{region}-vsm.{domain}/services/vsm/discovery/v1/service",
            encoded_credential=credential,
        )
