"""Utility functions and helpers for massive-pvc."""

from massive_pvc.utils.errors import (
    AuthenticationError,
    ConfigurationError,
    ConsoleError,
    EnhancedError,
    ErrorPattern,
    ExternalCallError,
    MassivePVCError,
    NotFoundError,
    ResourceExistsError,
    enhance_error,
)
from massive_pvc.utils.labels import MassivePVCLabels

__all__ = [
    # Errors
    "MassivePVCError",
    "ConfigurationError",
    "ConsoleError",
    "ExternalCallError",
    "NotFoundError",
    "ResourceExistsError",
    "AuthenticationError",
    # Error enhancement
    "EnhancedError",
    "ErrorPattern",
    "enhance_error",
    # Labels
    "MassivePVCLabels",
]
