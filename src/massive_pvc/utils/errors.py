"""Custom exceptions and error handling for massive-pvc.

This module provides the exception hierarchy raised by the cluster client
and utilities for enhancing fatal error messages with operator guidance.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any


@dataclass
class EnhancedError:
    """An error with enhanced context for the operator.

    Wraps error messages with a hint on how to recover before
    re-running the sequence.
    """

    error: str
    """The original error message."""

    error_code: str
    """A categorized error code (e.g., 'NOT_FOUND', 'AUTH_FAILED')."""

    suggestion: str
    """Actionable suggestion for recovery."""

    related_commands: list[str] = field(default_factory=list)
    """kubectl commands that might help inspect the issue."""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for structured logging."""
        return {
            "error": self.error,
            "error_code": self.error_code,
            "suggestion": self.suggestion,
            "related_commands": self.related_commands,
        }


@dataclass
class ErrorPattern:
    """A pattern for matching and enhancing errors."""

    pattern: str
    """Regex pattern to match against error messages."""

    error_code: str
    """The error code to assign when this pattern matches."""

    suggestion: str
    """The suggestion to provide when this pattern matches."""

    related_commands: list[str] = field(default_factory=list)
    """Commands that might help resolve this type of error."""


# Order matters: the first matching pattern wins.
ERROR_PATTERNS: list[ErrorPattern] = [
    # Namespace errors (more specific, must come before generic "not found")
    ErrorPattern(
        pattern=r'(?i)namespaces? "[^"]*" not found',
        error_code="NAMESPACE_NOT_FOUND",
        suggestion="The target namespace does not exist. Create it or pass "
        "--namespace with an existing one.",
        related_commands=["kubectl get namespaces"],
    ),
    ErrorPattern(
        pattern=r"(?i)not found|does not exist|404",
        error_code="NOT_FOUND",
        suggestion="The resource was not found. It may have been deleted "
        "already, or the start/end range differs from the one used to create it.",
        related_commands=["kubectl get pvc", "kubectl get pods"],
    ),
    ErrorPattern(
        pattern=r"(?i)unauthorized|forbidden|403|401|authentication.*fail",
        error_code="AUTH_FAILED",
        suggestion="Authentication or authorization failed. Check that the "
        "kubeconfig is valid and grants create/delete on pods and PVCs.",
        related_commands=[
            "kubectl auth can-i create persistentvolumeclaims",
            "kubectl auth can-i create pods",
        ],
    ),
    ErrorPattern(
        pattern=r"(?i)connection.*refused|network.*unreachable|timeout|max retries",
        error_code="CONNECTION_FAILED",
        suggestion="Failed to connect to the Kubernetes API. Check network "
        "connectivity and cluster availability.",
        related_commands=["kubectl cluster-info"],
    ),
    ErrorPattern(
        pattern=r"(?i)already exists|conflict|409",
        error_code="ALREADY_EXISTS",
        suggestion="A resource with this name already exists, probably left over "
        "from an interrupted run. Delete it or choose a different start/end range.",
        related_commands=["kubectl get pvc", "kubectl delete pod hold-massive-pvcs"],
    ),
    ErrorPattern(
        pattern=r"(?i)exceeded quota|resource quota",
        error_code="QUOTA_EXCEEDED",
        suggestion="Resource quota exceeded. Reduce the number of claims "
        "(end - start + 1) or the claim size.",
        related_commands=["kubectl describe resourcequota"],
    ),
    ErrorPattern(
        pattern=r"(?i)storageclass|persistent.*volume|storage.*unavailable",
        error_code="STORAGE_ERROR",
        suggestion="Storage could not be provisioned. Check that the cluster has "
        "a default StorageClass.",
        related_commands=["kubectl get storageclass"],
    ),
    ErrorPattern(
        pattern=r"(?i)invalid.*name|dns.*invalid|must.*consist of|must be.*valid",
        error_code="INVALID_NAME",
        suggestion="A resource name is invalid. Names must be DNS-compatible: "
        "lowercase letters, numbers, and hyphens only.",
        related_commands=[],
    ),
]


def enhance_error(error_message: str) -> EnhancedError:
    """Enhance an error message with recovery guidance.

    Args:
        error_message: The original error message.

    Returns:
        An EnhancedError with context and suggestions.
    """
    for pattern in ERROR_PATTERNS:
        if re.search(pattern.pattern, error_message):
            return EnhancedError(
                error=error_message,
                error_code=pattern.error_code,
                suggestion=pattern.suggestion,
                related_commands=pattern.related_commands,
            )

    return EnhancedError(
        error=error_message,
        error_code="UNKNOWN_ERROR",
        suggestion="An unexpected error occurred. Created resources are not "
        "cleaned up automatically; inspect the namespace before re-running.",
        related_commands=["kubectl get pvc,pods"],
    )


class MassivePVCError(Exception):
    """Base exception for massive-pvc operations."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ConfigurationError(MassivePVCError):
    """Configuration error."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, details)


class ExternalCallError(MassivePVCError):
    """A create, list or delete request against the cluster API failed."""

    def __init__(
        self,
        operation: str,
        resource_type: str,
        name: str | None = None,
        namespace: str | None = None,
        reason: str | None = None,
        status: int | None = None,
    ) -> None:
        target = f" '{name}'" if name else ""
        location = f" in namespace '{namespace}'" if namespace else ""
        message = f"Failed to {operation} {resource_type}{target}{location}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.operation = operation
        self.resource_type = resource_type
        self.name = name
        self.namespace = namespace
        self.reason = reason
        self.status = status


class NotFoundError(ExternalCallError):
    """Resource not found."""


class ResourceExistsError(ExternalCallError):
    """Resource already exists."""


class AuthenticationError(ExternalCallError):
    """Authentication or authorization error."""


class ConsoleError(MassivePVCError):
    """Reading the operator's confirmation failed."""
