"""Custom exception hierarchy for the cost projection tooling.

The projection engine itself never raises for malformed numeric input; these
exceptions cover the scenario file loader and the command line surface.
"""

from typing import Any, Optional


class BlobCostError(Exception):
    """Base exception for all cost projection errors."""

    def __init__(
        self,
        message: str,
        *,
        correlation_id: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        """Initialize cost projection error.

        Args:
            message: Error message
            correlation_id: Optional correlation ID for tracing
            context: Optional context dictionary with additional details
        """
        super().__init__(message)
        self.message = message
        self.correlation_id = correlation_id
        self.context = context or {}

    def __str__(self) -> str:
        """Return formatted error message."""
        parts = [self.message]
        if self.correlation_id:
            parts.append(f"[correlation_id={self.correlation_id}]")
        if self.context:
            parts.append(f"[context={self.context}]")
        return " ".join(parts)


class ConfigurationError(BlobCostError):
    """Scenario file and command line configuration errors."""

    pass

