"""
Exception hierarchy for the FairForm AI backend.

Provides layered exception structure for domain-specific errors.
Every exception carries an ErrorKind whose value is the stable tag rendered
in JSON error bodies, so callers branch on type rather than message text.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Stable error tags surfaced to API clients."""

    VALIDATION = "ValidationError"
    CONTENT_BLOCKED = "ContentBlocked"
    UNAUTHORIZED = "Unauthorized"
    FORBIDDEN = "Forbidden"
    NOT_FOUND = "SessionNotFound"
    SESSION_ARCHIVED = "SessionArchived"
    UPSTREAM = "UpstreamError"
    UNEXPECTED_RESPONSE = "UnexpectedResponse"
    SCHEMA_MISMATCH = "SchemaMismatch"
    MODERATION_FAILURE = "ModerationFailure"
    CONFIGURATION = "ConfigurationError"
    REPOSITORY = "RepositoryError"
    SERVER = "ServerError"


class FairFormException(Exception):
    """Base exception for all FairForm application errors."""

    kind: ErrorKind = ErrorKind.SERVER
    status_code: int = 500
    public_message: str = "Unable to process request."

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(FairFormException):
    """Raised when caller input fails validation."""

    kind = ErrorKind.VALIDATION
    status_code = 400

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ContentBlockedError(FairFormException):
    """Raised when moderation blocks the submitted content."""

    kind = ErrorKind.CONTENT_BLOCKED
    status_code = 400

    def __init__(self, moderation: Any, details: dict[str, Any] | None = None) -> None:
        """
        Initialize content blocked error.

        Args:
            moderation: ModerationResult that produced the block verdict
            details: Additional context
        """
        self.moderation = moderation
        super().__init__(
            "We're unable to process this request. Please review your description and try again.",
            details,
        )


class AuthenticationError(FairFormException):
    """Raised when a request carries no valid credentials."""

    kind = ErrorKind.UNAUTHORIZED
    status_code = 401


class ForbiddenError(FairFormException):
    """Raised when the caller does not own the requested resource."""

    kind = ErrorKind.FORBIDDEN
    status_code = 403


class SessionNotFoundError(FairFormException):
    """Raised when a session cannot be found."""

    kind = ErrorKind.NOT_FOUND
    status_code = 404

    def __init__(self, session_id: Any, details: dict[str, Any] | None = None) -> None:
        """
        Initialize session not found error.

        Args:
            session_id: ID of the missing session
            details: Additional context
        """
        details = details or {}
        details["session_id"] = str(session_id)
        super().__init__(f"Session not found: {session_id}", details)


class SessionArchivedError(FairFormException):
    """Raised when writing to a session that is no longer active."""

    kind = ErrorKind.SESSION_ARCHIVED
    status_code = 409

    def __init__(self, session_id: Any, status: str) -> None:
        super().__init__(
            f"Session {session_id} is {status} and read-only",
            {"session_id": str(session_id), "status": status},
        )


class UpstreamError(FairFormException):
    """Raised when an upstream AI call fails at the transport or HTTP level."""

    kind = ErrorKind.UPSTREAM
    status_code = 502
    public_message = "The AI service is unavailable right now. Try again shortly."


class UnexpectedResponseError(FairFormException):
    """Raised when an upstream reply has no usable content."""

    kind = ErrorKind.UNEXPECTED_RESPONSE
    status_code = 502
    public_message = "AI response missing content."


class SchemaMismatchError(FairFormException):
    """Raised when an upstream reply fails local schema validation."""

    kind = ErrorKind.SCHEMA_MISMATCH
    status_code = 502
    public_message = "AI response did not match the expected schema."


class ModerationError(FairFormException):
    """Raised when the moderation call itself fails (infrastructure, not content)."""

    kind = ErrorKind.MODERATION_FAILURE
    status_code = 502
    public_message = "Content moderation failed. Please try again."


class ConfigurationError(FairFormException):
    """Raised when required server-side configuration is missing."""

    kind = ErrorKind.CONFIGURATION
    status_code = 500


class SessionRepositoryError(FairFormException):
    """Raised when a session persistence operation fails."""

    kind = ErrorKind.REPOSITORY
    status_code = 500

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize repository error.

        Args:
            message: Error message
            operation: Operation that failed (archive, delete, count)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)
