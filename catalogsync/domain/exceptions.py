"""Domain exceptions.

Errors raised by the domain layer when a remote payload or a local
operation violates the engine's expectations. Remote-call failures are
not exceptions; the HTTP client reports them as ``APIResponse`` values.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class MalformedPayloadError(DomainError):
    """Raised when a remote payload cannot be parsed into a domain model."""

    def __init__(self, payload_type: str, reason: str) -> None:
        """Initialize malformed payload error.

        Args:
            payload_type: Name of the model being parsed (e.g., "ProductPage").
            reason: Parser error description.
        """
        super().__init__(
            f"Malformed {payload_type} payload: {reason}",
            details={"payload_type": payload_type, "reason": reason},
        )


class InvalidSessionError(DomainError):
    """Raised when a session cannot be started with the given credentials."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Cannot start session: {reason}", details={"reason": reason})


class InvalidStatusTransitionError(DomainError):
    """Raised when an event would move the listing to a status it cannot reach."""

    def __init__(
        self,
        current_status: str,
        target_status: str,
        allowed_transitions: list[str] | None = None,
    ) -> None:
        """Initialize invalid status transition error.

        Args:
            current_status: Current listing status.
            target_status: Status the event would produce.
            allowed_transitions: Statuses reachable from the current one.
        """
        allowed = allowed_transitions or []
        super().__init__(
            f"Cannot transition listing from '{current_status}' to '{target_status}'. "
            f"Allowed transitions: {allowed}",
            details={
                "current_status": current_status,
                "target_status": target_status,
                "allowed_transitions": allowed,
            },
        )
