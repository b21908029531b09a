"""OAuth2 client-credentials exchange against the LeanIX MTM token endpoint."""

import json
from typing import Any, Dict

import requests

from vsm_publisher.exceptions import AuthError
from vsm_publisher.http_client import REQUEST_TIMEOUT, get_default_headers
from vsm_publisher.logging_config import logger

from .endpoints import EndpointConfig

ACCESS_TOKEN_KEY = "access_token"
GRANT_TYPE_BODY = {"grant_type": "client_credentials"}


def _redact(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of a token response safe to log."""
    return {key: ("***" if "token" in key else value) for key, value in payload.items()}


class AuthenticationClient:
    """
    Exchanges the encoded API token for a short-lived bearer token.

    One POST per call; no caching, no refresh, no retry.
    """

    def __init__(self, endpoint: EndpointConfig):
        self._endpoint = endpoint

    def get_bearer_token(self) -> str:
        """
        Obtain a bearer token.

        Returns:
            The access token string

        Raises:
            AuthError: On transport failure, a status above 299, an unreadable
                body, or a response without an access token
        """
        url = self._endpoint.token_endpoint_url
        headers = get_default_headers(
            content_type="application/x-www-form-urlencoded",
            basic_credential=self._endpoint.encoded_credential,
        )

        logger.info(f"Requesting bearer token from {url}")
        try:
            response = requests.post(
                url,
                headers=headers,
                data=GRANT_TYPE_BODY,
                timeout=REQUEST_TIMEOUT,
            )
        except requests.exceptions.RequestException as e:
            raise AuthError(f"Failed to obtain bearer token: {e}") from e

        logger.info(f"Token endpoint response status: {response.status_code}")

        if response.status_code > 299:
            raise AuthError(
                f"Failed to obtain bearer token from LeanIX. [{response.status_code}]",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except (ValueError, json.JSONDecodeError) as e:
            raise AuthError(f"Failed to decode bearer token response: {e}", status_code=response.status_code) from e

        if not isinstance(payload, dict):
            raise AuthError(
                "Failed to decode bearer token response: expected a JSON object",
                status_code=response.status_code,
            )

        logger.debug(f"Token endpoint response body: {_redact(payload)}")

        token = payload.get(ACCESS_TOKEN_KEY)
        if not token or not isinstance(token, str):
            raise AuthError(
                f"Token endpoint response did not contain '{ACCESS_TOKEN_KEY}'",
                status_code=response.status_code,
            )

        return token


def get_bearer_token(endpoint: EndpointConfig) -> str:
    """Obtain a bearer token for the given endpoint configuration."""
    return AuthenticationClient(endpoint).get_bearer_token()
