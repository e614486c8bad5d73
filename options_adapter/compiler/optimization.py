"""
Optimization section encoding, split-chunk cache groups included.
"""

import re
from collections.abc import Mapping
from typing import Any

from options_adapter.compiler.preconditions import require_fields
from options_adapter.core.errors import UnsupportedShapeError

CACHE_GROUP_FIELDS = ("name", "priority", "minChunks", "chunks")

SPLIT_CHUNKS_FIELDS = (
    "chunks",
    "maxAsyncRequests",
    "maxInitialRequests",
    "minChunks",
    "minSize",
    "enforceSizeThreshold",
    "minRemainingSize",
)


def to_text(value: Any) -> str:
    """
    Stringify a scalar the way the engine expects.

    Booleans become "true"/"false"; everything else uses str().
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_optimization(optimization: Mapping[str, Any]) -> dict[str, Any]:
    """
    Encode the optimization section.

    "sideEffects" is always stringified, whatever its input shape.
    "splitChunks" is omitted entirely when disabled, so the engine can tell
    "disabled" from "enabled with defaults" (an empty mapping).

    Raises:
        PreconditionViolation: If moduleIds, removeAvailableModules or
                               sideEffects is missing
    """
    require_fields(
        "optimization", optimization, ("moduleIds", "removeAvailableModules", "sideEffects")
    )

    encoded: dict[str, Any] = {
        "moduleIds": optimization["moduleIds"],
        "removeAvailableModules": optimization["removeAvailableModules"],
        "sideEffects": to_text(optimization["sideEffects"]),
    }

    split_chunks = optimization.get("splitChunks")
    if split_chunks is not None and split_chunks is not False:
        encoded["splitChunks"] = encode_split_chunks(split_chunks)

    return encoded


def encode_split_chunks(split_chunks: Mapping[str, Any]) -> dict[str, Any]:
    """
    Encode split-chunk options.

    Args:
        split_chunks: Split-chunk options with optional "cacheGroups"

    Returns:
        Encoded options; "cacheGroups" is always present (empty when absent)
    """
    cache_groups = split_chunks.get("cacheGroups") or {}
    encoded: dict[str, Any] = {
        "cacheGroups": {
            key: encode_cache_group(group, key) for key, group in cache_groups.items()
        },
    }

    for field in SPLIT_CHUNKS_FIELDS:
        if split_chunks.get(field) is not None:
            encoded[field] = split_chunks[field]

    return encoded


def encode_cache_group(group: Mapping[str, Any], key: str = "") -> dict[str, Any]:
    """
    Encode one cache group.

    Split-chunk matching uses a single pattern, so "test" is sent as raw
    pattern source text rather than a tagged condition.

    Raises:
        UnsupportedShapeError: If "test" is neither a pattern nor pattern text
    """
    encoded: dict[str, Any] = {}

    test = group.get("test")
    if isinstance(test, re.Pattern) and isinstance(test.pattern, str):
        encoded["test"] = test.pattern
    elif isinstance(test, str):
        encoded["test"] = test
    elif test is not None:
        raise UnsupportedShapeError(
            f"Cache group '{key}' test must be a pattern, got {type(test).__name__}",
            details={"cache_group": key, "type": type(test).__name__},
        )

    for field in CACHE_GROUP_FIELDS:
        if group.get(field) is not None:
            encoded[field] = group[field]

    return encoded
