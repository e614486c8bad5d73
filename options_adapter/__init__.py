"""Canonical options adapter for the bundler's native build engine."""

from options_adapter.compiler import translate_options
from options_adapter.core.errors import AdapterError, PreconditionViolation, UnsupportedShapeError

__all__ = [
    "translate_options",
    "AdapterError",
    "PreconditionViolation",
    "UnsupportedShapeError",
]
