"""
Options translator.

Translates a normalized (defaults-applied) configuration into the canonical
options record handed to the build engine. This is the only entry point the
compiler-initialization path calls:

    raw = translate_options(normalized, compiler)

The translation is a single synchronous top-down pass over fresh data:
- Validates context, devtool and cache survived defaulting
- Runs every section encoder
- Assembles the flat record whose field names are the engine's wire contract

Nothing is cached between calls, so identical input always produces an
identical result.
"""

import logging
import time
from collections.abc import Mapping
from typing import Any

from options_adapter.compiler.canonicalizer import to_canonical_json_string
from options_adapter.compiler.optimization import encode_optimization
from options_adapter.compiler.preconditions import require_fields
from options_adapter.compiler.rule_use import UseChainContext, UseChainEncoder, encode_use_chain
from options_adapter.compiler.rules import compile_module
from options_adapter.compiler.sections import (
    encode_cache,
    encode_dev_server,
    encode_entry,
    encode_experiments,
    encode_externals,
    encode_node,
    encode_output,
    encode_snapshot,
    encode_stats,
    encode_target,
)
from options_adapter.core.config import settings
from options_adapter.core.errors import get_error_kind
from options_adapter.core.observability import (
    generate_translation_id,
    metrics,
    reset_translation_id,
    set_translation_id,
)

logger = logging.getLogger(__name__)

# Top-level fields the engine reads; anything else is ignored with a warning
WIRE_FIELDS = (
    "entry",
    "mode",
    "target",
    "context",
    "output",
    "resolve",
    "module",
    "externals",
    "externalsType",
    "devtool",
    "optimization",
    "stats",
    "devServer",
    "snapshot",
    "cache",
    "experiments",
    "node",
    "builtins",
)

REQUIRED_TOP_LEVEL_FIELDS = ("context", "devtool", "cache", "entry")


def translate_options(
    options: Mapping[str, Any],
    compiler: Any,
    use_encoder: UseChainEncoder = encode_use_chain,
) -> dict[str, Any]:
    """
    Translate normalized options into the engine's canonical options.

    Args:
        options: Normalized configuration; every field read here must
                 already have been defaulted upstream
        compiler: Owning compiler instance, forwarded to loader-chain encoding
        use_encoder: Loader-chain encoder for module rules

    Returns:
        Canonical options dictionary

    Raises:
        PreconditionViolation: If a required-after-defaulting field is absent
        UnsupportedShapeError: If a condition or loader value has an unknown shape

    Example Output:
        {
            "entry": {"main": {"import": ["./src/index.js"]}},
            "target": ["web"],
            "devtool": "",
            "module": {"rules": [...]},
            "optimization": {"moduleIds": "named", "sideEffects": "true", ...},
            "cache": {"type": "memory", "maxGenerations": 0, ...},
            ...
        }
    """
    token = set_translation_id(generate_translation_id())
    try:
        return _translate(options, compiler, use_encoder)
    finally:
        reset_translation_id(token)


def _translate(
    options: Mapping[str, Any], compiler: Any, use_encoder: UseChainEncoder
) -> dict[str, Any]:
    start_time = time.perf_counter()
    logger.info("Starting options translation (mode=%s)", options.get("mode"))

    try:
        require_fields("options", options, REQUIRED_TOP_LEVEL_FIELDS)
        _warn_on_ignored_input(options)

        context = options["context"]
        devtool = "" if options["devtool"] is False else options["devtool"]
        use_context = UseChainContext(compiler=compiler, devtool=devtool, context=context)

        raw: dict[str, Any] = {
            "entry": encode_entry(options["entry"]),
            "mode": options.get("mode"),
            "target": encode_target(options.get("target")),
            "context": context,
            "output": encode_output(options.get("output")),
            "resolve": options.get("resolve"),
            "module": compile_module(options.get("module"), use_context, use_encoder),
            "externals": encode_externals(options.get("externals")),
            "externalsType": options.get("externalsType") or "",
            "devtool": devtool,
            "optimization": encode_optimization(options.get("optimization")),
            "stats": encode_stats(options.get("stats")),
            "devServer": encode_dev_server(options.get("devServer")),
            "snapshot": encode_snapshot(options.get("snapshot")),
            "cache": encode_cache(options["cache"]),
            "experiments": encode_experiments(options.get("experiments")),
            "node": encode_node(options.get("node")),
            "builtins": options.get("builtins"),
        }
        # Absent passthrough sections are omitted, not sent as null
        raw = {key: value for key, value in raw.items() if value is not None}

    except Exception as e:
        duration = time.perf_counter() - start_time
        logger.error("Options translation failed after %.4fs: %s", duration, e)
        _record_translation_metrics(get_error_kind(e), duration, 0, 0)
        raise

    duration = time.perf_counter() - start_time
    rule_count = len(raw["module"]["rules"])
    output_bytes = len(to_canonical_json_string(raw).encode("utf-8"))

    logger.info(
        "Translated options: %d module rules, devtool=%r, duration=%.4fs, size=%d bytes",
        rule_count,
        devtool,
        duration,
        output_bytes,
    )
    _record_translation_metrics("success", duration, rule_count, output_bytes)

    return raw


def _warn_on_ignored_input(options: Mapping[str, Any]) -> None:
    """Warn about input the engine will never see."""
    unknown = sorted(str(key) for key in options if key not in WIRE_FIELDS)
    if unknown:
        logger.warning("Ignoring options with no engine counterpart: %s", ", ".join(unknown))

    if not options["entry"]:
        logger.warning("No entry points configured; the engine will build nothing")


def _record_translation_metrics(
    status: str, duration: float, rule_count: int, output_bytes: int
) -> None:
    """
    Record translation metrics to Prometheus.

    Metrics failures are logged and ignored; they never affect translation.

    Args:
        status: "success" or the error kind
        duration: Translation duration in seconds
        rule_count: Number of top-level module rules produced
        output_bytes: Size of the canonical JSON form
    """
    if not settings.metrics_enabled:
        return

    try:
        metrics.translations_total.labels(status=status).inc()
        metrics.duration_seconds.observe(duration)

        if status == "success":
            metrics.rules_count.observe(rule_count)
            metrics.output_bytes.observe(output_bytes)
    except Exception:
        logger.debug("Failed to record translation metrics", exc_info=True)
