"""Domain exceptions for casehub.

Defines domain-level exceptions that represent business rule violations and
data retrieval failures. These exceptions are independent of infrastructure
concerns. Presentation layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class CasehubException(Exception):
    """Base exception for all casehub errors.

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
        """Return the JSON body used by the HTTP exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(CasehubException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(CasehubException):
    """Raised when the bearer token is missing, invalid, or expired."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(CasehubException):
    """Raised when the principal may not act on a resource.

    World-scoped denials carry the world code so callers can tell which
    boundary was hit.
    """

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
        world_code: str | None = None,
    ) -> None:
        """Initialize with optional resource, action, message and world code.

        Args:
            resource: Optional resource type (e.g. 'dossier', 'world').
            action: Optional action that was attempted (e.g. 'read').
            message: Human-readable message; default used when resource/action omitted.
            world_code: Optional world the action was scoped to.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        if world_code is not None:
            details["world_code"] = world_code
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(CasehubException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'world', 'dossier').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class RetrievalFailure(CasehubException):
    """Raised when a record store query did not complete.

    Covers an unreachable store, a timeout, and a malformed response. Callers
    must treat it as "history unknown", never as "no history".
    """

    def __init__(self, collection: str, reason: str) -> None:
        """Initialize with the queried collection and a short reason.

        Args:
            collection: Collection that was being queried.
            reason: Human-readable cause (e.g. 'timeout', 'unknown field').
        """
        super().__init__(
            f"Could not retrieve records from {collection}: {reason}",
            "RETRIEVAL_FAILURE",
            {"collection": collection, "reason": reason},
        )


class InconsistentTransfer(CasehubException):
    """Raised when a transfer record violates a data-integrity rule.

    The ledger catches it per record, skips the record and keeps going.
    """

    def __init__(self, transfer_id: str, reason: str) -> None:
        """Initialize with the offending transfer id and reason.

        Args:
            transfer_id: Transfer record that failed the check.
            reason: Which rule was broken (e.g. 'same source and target world').
        """
        super().__init__(
            f"Inconsistent transfer {transfer_id}: {reason}",
            "INCONSISTENT_TRANSFER",
            {"transfer_id": transfer_id, "reason": reason},
        )


class InvalidTransferTransition(CasehubException):
    """Raised when a transfer status change is not allowed by the lifecycle."""

    def __init__(self, transfer_id: str, current: str, target: str) -> None:
        """Initialize with transfer id and the rejected transition.

        Args:
            transfer_id: Transfer being changed.
            current: Current status value.
            target: Requested status value.
        """
        super().__init__(
            f"Transfer {transfer_id} cannot move from {current} to {target}",
            "INVALID_TRANSITION",
            {"transfer_id": transfer_id, "current": current, "target": target},
        )


class SqlNotConfiguredException(CasehubException):
    """Raised when an operation requires Postgres but the backend is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
