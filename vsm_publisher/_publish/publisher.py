"""Service registration against the VSM discovery endpoint."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import requests

from vsm_publisher.exceptions import FileProcessingError, PublishError
from vsm_publisher.http_client import REQUEST_TIMEOUT, get_default_headers
from vsm_publisher.logging_config import logger

from .endpoints import EndpointConfig
from .protocol import PublishRequest
from .result import PublishOutcome

BOM_PART_NAME = "bom"
BOM_CONTENT_TYPE = "application/json"

# Longest response excerpt carried into a failure message
MAX_MESSAGE_BODY = 500


def _read_sbom(sbom_file: Path) -> Optional[bytes]:
    """
    Read the SBOM in full.

    Returns:
        File content, or None if the file no longer exists

    Raises:
        FileProcessingError: For any other read failure
    """
    try:
        with sbom_file.open("rb") as f:
            return f.read()
    except FileNotFoundError:
        logger.info(f"SBOM not found at '{sbom_file}', submitting without it")
        return None
    except OSError as e:
        raise FileProcessingError(f"Failed to read SBOM file {sbom_file}: {e}") from e


class ServicePublisher:
    """
    Creates or updates a VSM service with its metadata and optional SBOM.

    A rejected registration (status above 299) is reported through the
    returned PublishOutcome; only transport failures raise.
    """

    def __init__(self, endpoint: EndpointConfig):
        self._endpoint = endpoint

    def publish(self, token: str, request: PublishRequest) -> PublishOutcome:
        """
        Submit a registration request.

        Args:
            token: Bearer token from the authentication client
            request: Registration to submit

        Returns:
            PublishOutcome classifying the response

        Raises:
            PublishError: If the request could not be delivered
            FileProcessingError: If the SBOM exists but cannot be read
        """
        parts: List[Tuple[str, Tuple[Any, ...]]] = list(request.form_fields())

        if request.sbom_file is not None:
            content = _read_sbom(request.sbom_file)
            if content is not None:
                parts.append((BOM_PART_NAME, (request.sbom_file.name, content, BOM_CONTENT_TYPE)))
                logger.info(f"Attaching SBOM {request.sbom_file.name} ({len(content)} bytes)")

        headers = get_default_headers(token=token)
        headers["accept"] = "*/*"

        url = self._endpoint.discovery_endpoint_url
        logger.info(f"Registering service '{request.service_id}' at {url}")

        try:
            response = requests.post(
                url,
                headers=headers,
                files=parts,
                timeout=REQUEST_TIMEOUT,
            )
        except requests.exceptions.RequestException as e:
            raise PublishError(f"Failed to reach VSM discovery endpoint: {e}") from e

        logger.info(f"Discovery endpoint response status: {response.status_code}")
        logger.debug(f"Discovery endpoint response body: {response.text[:MAX_MESSAGE_BODY]}")

        if response.status_code > 299:
            message = f"FAILURE to post to VSM, got response code: {response.status_code}"
            if response.reason:
                message += f" and message: {response.reason}"
            body = (response.text or "")[:MAX_MESSAGE_BODY]
            if body:
                message += f" - {body}"
            logger.warning(message)
            return PublishOutcome.failure_result(message=message, http_status=response.status_code)

        response_metadata: Dict[str, Any] = {}
        try:
            response_data = response.json()
            if isinstance(response_data, dict):
                response_metadata = response_data
        except (ValueError, json.JSONDecodeError):
            logger.debug("Discovery endpoint response was not JSON")

        logger.info(f"Service '{request.service_id}' registered with VSM")
        return PublishOutcome.success_result(http_status=response.status_code, metadata=response_metadata)
