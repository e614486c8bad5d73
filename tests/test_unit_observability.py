"""
Unit tests for observability features.

Tests cover:
- Structured logging with JSON format
- Translation correlation ID generation and propagation
- Prometheus metrics registration
"""

import json
import logging
import re
import sys

import pytest
from prometheus_client import generate_latest

from options_adapter.core.observability import (
    StructuredFormatter,
    configure_structured_logging,
    generate_translation_id,
    get_translation_id,
    metrics,
    set_translation_id,
)


class TestTranslationId:
    """Tests for translation ID generation and context management."""

    @pytest.mark.anyio
    async def test_generate_translation_id_returns_uuid_format(self):
        uuid_pattern = re.compile(
            r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
        )
        assert uuid_pattern.match(generate_translation_id())

    @pytest.mark.anyio
    async def test_translation_ids_are_unique(self):
        assert generate_translation_id() != generate_translation_id()

    @pytest.mark.anyio
    async def test_translation_id_context(self):
        set_translation_id("translation-1")
        assert get_translation_id() == "translation-1"

        set_translation_id("")
        assert get_translation_id() == ""


class TestStructuredFormatter:
    """Tests for the JSON log formatter."""

    @staticmethod
    def _record(msg: str = "hello %s", args: tuple = ("world",), **kwargs) -> logging.LogRecord:
        return logging.LogRecord(
            name="options_adapter.test",
            level=logging.INFO,
            pathname="/app/translator.py",
            lineno=42,
            msg=msg,
            args=args,
            exc_info=kwargs.get("exc_info"),
            func="translate_options",
        )

    @pytest.mark.anyio
    async def test_formats_standard_fields(self):
        set_translation_id("")
        entry = json.loads(StructuredFormatter().format(self._record()))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "options_adapter.test"
        assert entry["message"] == "hello world"
        assert entry["line"] == 42
        assert entry["function"] == "translate_options"
        assert "translation_id" not in entry

    @pytest.mark.anyio
    async def test_includes_translation_id(self):
        set_translation_id("abc-123")
        try:
            entry = json.loads(StructuredFormatter().format(self._record()))
        finally:
            set_translation_id("")

        assert entry["translation_id"] == "abc-123"

    @pytest.mark.anyio
    async def test_includes_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = self._record(exc_info=sys.exc_info())

        entry = json.loads(StructuredFormatter().format(record))
        assert entry["exception"] == {"type": "ValueError", "message": "boom"}

    @pytest.mark.anyio
    async def test_includes_extra_fields(self):
        record = self._record()
        record.rule_count = 7

        entry = json.loads(StructuredFormatter().format(record))
        assert entry["extra"]["rule_count"] == 7


class TestConfigureLogging:
    """Tests for root logger configuration."""

    @pytest.mark.anyio
    async def test_structured_handler_installed(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            configure_structured_logging("debug")

            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, StructuredFormatter)
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

    @pytest.mark.anyio
    async def test_plain_handler_when_unstructured(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            configure_structured_logging("WARNING", structured=False)

            assert root.level == logging.WARNING
            assert not isinstance(root.handlers[0].formatter, StructuredFormatter)
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)


class TestMetrics:
    """Tests for the metrics registry."""

    @pytest.mark.anyio
    async def test_metrics_registered(self):
        metrics.translations_total.labels(status="success").inc()
        output = generate_latest(metrics.registry).decode("utf-8")

        assert "translator_translations_total" in output
        assert "translator_duration_seconds" in output
        assert "translator_rules_count" in output
        assert "translator_output_bytes" in output
