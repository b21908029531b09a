"""HTTP client utilities with consistent user agent."""

from typing import Optional

from vsm_publisher import __version__

USER_AGENT = f"vsm-publisher/{__version__}"

# Applied to every outbound call; a timeout surfaces as a transport failure.
REQUEST_TIMEOUT = 120


def get_default_headers(
    token: Optional[str] = None,
    content_type: Optional[str] = None,
    basic_credential: Optional[str] = None,
) -> dict:
    """
    Get default HTTP headers with user agent.

    Args:
        token: Optional bearer token to include
        content_type: Optional Content-Type header value
        basic_credential: Optional base64 credential for Basic authorization.
            Ignored when a bearer token is given.

    Returns:
        Dictionary of HTTP headers
    """
    headers = {"User-Agent": USER_AGENT}
    if token is not None:
        headers["Authorization"] = f"Bearer {token}"
    elif basic_credential:
        headers["Authorization"] = f"Basic {basic_credential}"
    if content_type:
        headers["Content-Type"] = content_type
    return headers
