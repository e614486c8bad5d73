"""
Domain-specific exceptions for the options adapter.

Translation is all-or-nothing: every failure surfaces as one of these
exceptions and propagates to the compiler-initialization path, which
aborts configuration for that run.
"""

from typing import Any


class AdapterError(Exception):
    """Base exception for all options adapter errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class PreconditionViolation(AdapterError):
    """
    Raised when a field that must exist after defaulting is absent.

    Examples:
    - module.defaultRules missing
    - output.publicPath missing
    - snapshot.resolve.hash missing

    This signals a bug in the upstream defaulting stage, not a user
    configuration error.
    """

    pass


class UnsupportedShapeError(AdapterError):
    """
    Raised when a value is none of the shapes this layer can encode.

    Examples:
    - A rule condition that is a number, a boolean or None
    - A cache group test that is neither a pattern nor pattern text
    - A loader-chain entry that is neither a loader name nor a loader record
    """

    pass


# Error kind mapping, used as the status label for failure metrics
ERROR_KIND_MAP = {
    PreconditionViolation: "precondition_violation",
    UnsupportedShapeError: "unsupported_shape",
}


def get_error_kind(error: Exception) -> str:
    """
    Get the stable kind label for a given exception.

    Args:
        error: The exception instance

    Returns:
        Kind label (defaults to "internal" for unknown errors)
    """
    return ERROR_KIND_MAP.get(type(error), "internal")
