"""Domain exception hierarchy for type-safe error handling.

This module provides the base exception hierarchy for all domain errors.
Exceptions include structured error codes and context for consistent
error handling and logging across bounded contexts.

Example:
    >>> from custodia.foundation.domain.exceptions import InvalidOwnerError
    >>> raise InvalidOwnerError(None, "owner is required")
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "AttachmentUsageLookupError",
    "DomainError",
    "InvalidOwnerError",
    "ValidationError",
]


class DomainError(Exception):
    """Base class for all domain errors.

    Provides error code and structured context for debugging. All domain
    exceptions inherit from this class to enable consistent error
    handling and logging.

    Attributes:
        error_code: Machine-readable error code for client handling.
        message: Human-readable error description.
        context: Structured debugging information (owner keys, content ids).

    Example:
        >>> raise DomainError("Operation failed", context={"owner_key": "release:r1"})
        DomainError: Operation failed (owner_key=release:r1)
    """

    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize domain error with message and optional context.

        Args:
            message: Human-readable error description.
            context: Structured debugging information. Keys should be snake_case.
                     Values are typically strings or primitive types.
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """String representation including context for logging."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        return f"{self.__class__.__name__}({self.message!r}, context={self.context!r})"


class ValidationError(DomainError):
    """Raised when input fails domain validation rules.

    Attributes:
        error_code: "VALIDATION_ERROR" (class constant).
        field: Field path that failed validation.
        reason: Human-readable validation failure reason.

    Example:
        >>> raise ValidationError("owner", "Owner is required")
        ValidationError: Validation failed for 'owner': Owner is required
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        field: str,
        reason: str,
        **extra_context: Any,
    ) -> None:
        """Initialize validation error.

        Args:
            field: Field path that failed validation.
            reason: Human-readable validation failure reason.
            **extra_context: Additional debugging context.
        """
        self.field = field
        self.reason = reason
        message = f"Validation failed for '{field}': {reason}"
        context = {
            "field": field,
            "reason": reason,
            **extra_context,
        }
        super().__init__(message, context)


class InvalidOwnerError(ValidationError):
    """Raised when an owner reference is absent or has no usable usage key.

    Retention decisions are scoped by the owner's usage key. Failing fast
    here prevents a usage query from being scoped to an empty or global key.

    Attributes:
        error_code: "INVALID_OWNER" (class constant).
        owner: The rejected owner value (may be None).

    Example:
        >>> raise InvalidOwnerError(None, "owner is required")
        InvalidOwnerError: Validation failed for 'owner': owner is required
    """

    error_code: str = "INVALID_OWNER"

    def __init__(self, owner: object, reason: str) -> None:
        """Initialize invalid owner error.

        Args:
            owner: The rejected owner value.
            reason: Why the owner cannot be used.
        """
        self.owner = owner
        super().__init__("owner", reason, owner_type=type(owner).__name__)


class AttachmentUsageLookupError(DomainError):
    """Raised when the attachment usage store cannot answer a usage query.

    Covers connectivity failures, timeouts and malformed responses. Callers
    must not apply any deletion when this is raised: assuming zero usage
    could delete content that is still referenced.

    Attributes:
        error_code: "ATTACHMENT_USAGE_LOOKUP_FAILED" (class constant).
        owner_key: Usage key of the owner being queried.

    Example:
        >>> raise AttachmentUsageLookupError("release:r1", "connection refused")
        AttachmentUsageLookupError: Attachment usage lookup failed: connection refused (owner_key=release:r1)
    """

    error_code: str = "ATTACHMENT_USAGE_LOOKUP_FAILED"

    def __init__(self, owner_key: str, reason: str, **extra_context: Any) -> None:
        """Initialize usage lookup error.

        Args:
            owner_key: Usage key of the owner being queried.
            reason: Description of the underlying failure.
            **extra_context: Additional debugging context (e.g., candidate_count).
        """
        self.owner_key = owner_key
        self.reason = reason
        message = f"Attachment usage lookup failed: {reason}"
        super().__init__(message, {"owner_key": owner_key, **extra_context})
