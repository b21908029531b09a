"""PublishOutcome dataclass for the result of a publish invocation."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class PublishOutcome:
    """
    Result of a publish invocation.

    Attributes:
        success: Whether the catalog accepted the registration
        http_status: Status returned by the discovery endpoint, if one was reached
        message: Error or skip message
        skipped: Whether the gate held the build back before any network call
        metadata: Parsed response body on success
    """

    success: bool
    http_status: Optional[int] = None
    message: Optional[str] = None
    skipped: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate outcome state."""
        if self.success and self.message and not self.skipped:
            raise ValueError("Successful outcome should not have a message")
        if not self.success and not self.message:
            raise ValueError("Failed outcome must have a message")

    @classmethod
    def success_result(
        cls,
        http_status: int,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "PublishOutcome":
        """Create a successful outcome."""
        return cls(success=True, http_status=http_status, metadata=metadata or {})

    @classmethod
    def failure_result(
        cls,
        message: str,
        http_status: Optional[int] = None,
    ) -> "PublishOutcome":
        """Create a failed outcome."""
        return cls(success=False, http_status=http_status, message=message)

    @classmethod
    def skipped_result(cls, message: str) -> "PublishOutcome":
        """Create an outcome for a build the gate held back."""
        return cls(success=True, message=message, skipped=True)
