"""Custom exceptions for vsm-publisher."""

from typing import Optional


class VsmPublisherError(Exception):
    """Base exception for all vsm-publisher operations."""


class ConfigurationError(VsmPublisherError):
    """Raised when configuration or project metadata validation fails."""


class MetadataError(ConfigurationError):
    """Raised when the free-form metadata JSON is malformed or not an object."""


class AuthError(VsmPublisherError):
    """Raised when a bearer token cannot be obtained from the token endpoint."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PublishError(VsmPublisherError):
    """Raised when the registration request cannot be delivered."""


class FileProcessingError(VsmPublisherError):
    """Raised when file operations fail."""
