"""Domain exceptions for the Topology service.

Defines domain-level exceptions that represent business rule violations
and store faults. These exceptions are independent of infrastructure
concerns. Presentation layer maps them to HTTP responses in exception
handlers.
"""

from typing import Any


class TopologyException(Exception):
    """Base exception for all Topology service errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the exception handlers."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(TopologyException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthorizationException(TopologyException):
    """Raised when the caller may not perform the operation on an entity."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource identifier (e.g. 'asset:abc').
            action: Optional action that was attempted (e.g. 'read', 'delete').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(TopologyException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'asset', 'device').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ContainmentChainBrokenException(TopologyException):
    """Raised when a Contains edge between two consecutive chain ids is absent.

    Distinct from ResourceNotFoundException: both endpoints may exist, but
    the claimed parent does not contain the claimed child.
    """

    def __init__(self, from_id: str, to_id: str) -> None:
        """Initialize with the pair whose edge is missing.

        Args:
            from_id: Claimed parent id.
            to_id: Claimed child id.
        """
        super().__init__(
            f"There is no relation between {from_id} and {to_id}",
            "BROKEN_CHAIN",
            {"from_id": from_id, "to_id": to_id},
        )


class ChainCheckFailedException(TopologyException):
    """Raised when chain validation could not complete because a store failed.

    Retryable: the edge was not proven absent, only unprovable.
    """

    def __init__(self, from_id: str, to_id: str, reason: str) -> None:
        super().__init__(
            f"Could not verify relation between {from_id} and {to_id}",
            "CHAIN_CHECK_FAILED",
            {"from_id": from_id, "to_id": to_id, "reason": reason},
        )


class TypeMismatchException(TopologyException):
    """Raised when a type tag conflicts with the hierarchy level's expected type."""

    def __init__(self, expected_type: str, actual_type: str) -> None:
        """Initialize with the expected and the conflicting type.

        Args:
            expected_type: Type tag of the level (e.g. 'Building').
            actual_type: Declared or stored type that conflicts.
        """
        super().__init__(
            f"Expected type '{expected_type}' but got '{actual_type}'",
            "TYPE_MISMATCH",
            {"expected_type": expected_type, "actual_type": actual_type},
        )


class MalformedEntityException(TopologyException):
    """Raised when the entity store returns an entity without an identifier."""

    def __init__(self, entity_type: str | None = None) -> None:
        super().__init__(
            "Entity has no resolvable identifier",
            "MALFORMED_ENTITY",
            {"entity_type": entity_type} if entity_type else {},
        )


class StoreUnavailableException(TopologyException):
    """Raised when the entity or relation store times out or cannot be reached."""

    def __init__(self, store: str, reason: str) -> None:
        super().__init__(
            f"{store} store is unavailable",
            "STORE_UNAVAILABLE",
            {"store": store, "reason": reason},
        )


class SqlNotConfiguredException(TopologyException):
    """Raised when an operation requires Postgres but DATABASE_URL is not set."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
