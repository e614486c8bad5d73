"""
Observability module for the options adapter.

Provides:
- Structured logging with JSON format and a per-translation correlation ID
- Translation correlation ID (translation_id) generation and propagation
- Prometheus metrics collection for translations

Usage:
    from options_adapter.core.observability import (
        configure_structured_logging,
        get_translation_id,
        metrics,
    )
"""

import json
import logging
import uuid
from contextvars import ContextVar, Token
from datetime import UTC, datetime

from prometheus_client import CollectorRegistry, Counter, Histogram

# ============================================================================
# Context Variables for Translation Tracking
# ============================================================================

# Correlation ID - links all logs for a single translation call
_translation_id_ctx: ContextVar[str] = ContextVar("translation_id", default="")


def generate_translation_id() -> str:
    """
    Generate a unique translation ID for correlation.

    Returns:
        String representation of a UUID4
    """
    return str(uuid.uuid4())


def get_translation_id() -> str:
    """Get the current translation ID from context."""
    return _translation_id_ctx.get()


def set_translation_id(translation_id: str) -> Token[str]:
    """Set the translation ID for the current context; returns the token to restore it."""
    return _translation_id_ctx.set(translation_id)


def reset_translation_id(token: Token[str]) -> None:
    """Restore the translation ID that was current before the matching set."""
    _translation_id_ctx.reset(token)


# ============================================================================
# Structured Logging Configuration
# ============================================================================

_RESERVED_RECORD_KEYS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "getMessage",
        "exc_info",
        "exc_text",
        "stack_info",
    }
)


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs logs as JSON with standard fields:
    - timestamp: ISO 8601 format
    - level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - logger: Logger name
    - message: Log message
    - translation_id: Correlation ID (if available)
    - exception: Exception type and message (if present)
    - extra: Any additional context from logging.extra
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON.

        Args:
            record: Python logging LogRecord

        Returns:
            JSON-formatted log string
        """
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        translation_id = get_translation_id()
        if translation_id:
            log_entry["translation_id"] = translation_id

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
            }

        log_entry["file"] = record.pathname
        log_entry["line"] = record.lineno
        log_entry["function"] = record.funcName

        # Fields passed through logger.info("msg", extra={"key": "value"})
        extra_keys = {k: v for k, v in record.__dict__.items() if k not in _RESERVED_RECORD_KEYS}
        if extra_keys:
            log_entry["extra"] = extra_keys

        return json.dumps(log_entry, default=str)


def configure_structured_logging(level: str = "INFO", structured: bool = True) -> None:
    """
    Configure root logger, with JSON formatting unless disabled.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        structured: Emit JSON lines when True, plain text otherwise
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler()
    if structured:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))

    root_logger.addHandler(handler)


# ============================================================================
# Prometheus Metrics
# ============================================================================

# Use a custom registry to avoid conflicts with the host's Prometheus metrics
_registry = CollectorRegistry()


class Metrics:
    """
    Centralized metrics collection for option translations.

    Tracks translation outcomes, duration, rule counts and output size.
    """

    def __init__(self, registry: CollectorRegistry) -> None:
        """Initialize all metrics with proper labels."""
        self.registry = registry

        # Translation success/failure count, failures labelled by error kind
        self.translations_total = Counter(
            "translator_translations_total",
            "Total option translations",
            ["status"],
            registry=self.registry,
        )

        self.duration_seconds = Histogram(
            "translator_duration_seconds",
            "Option translation duration in seconds",
            buckets=(0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
            registry=self.registry,
        )

        # Number of compiled module rules, default rules included
        self.rules_count = Histogram(
            "translator_rules_count",
            "Number of top-level module rules in translated options",
            buckets=(1, 5, 10, 25, 50, 100, 250, 500),
            registry=self.registry,
        )

        self.output_bytes = Histogram(
            "translator_output_bytes",
            "Size of the canonical options tree serialized as JSON",
            buckets=(1024, 4096, 16384, 65536, 262144, 1048576),
            registry=self.registry,
        )


# Global metrics instance
metrics = Metrics(_registry)
