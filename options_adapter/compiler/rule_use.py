"""
Default loader-chain encoding.

The module rule compiler delegates each rule's "use" field to a pluggable
encoder, any callable taking ``(use, UseChainContext)`` and returning the
canonical chain as a list. This module provides the context record and the
default encoder, which normalizes loader specifications into an ordered list
of ``{"loader": ..., "options": ...}`` entries.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from options_adapter.core.errors import UnsupportedShapeError


@dataclass(frozen=True)
class UseChainContext:
    """Inputs loader-chain encoding may depend on."""

    compiler: Any
    devtool: str | bool
    context: str


UseChainEncoder = Callable[[Any, UseChainContext], list]


def encode_use_chain(use: Any, context: UseChainContext) -> list[dict[str, Any]]:
    """
    Encode a rule's loader chain.

    Accepted shapes:
    - None: empty chain
    - "a-loader" or "a-loader!b-loader": one entry per loader, left to right
    - {"loader": "a-loader", "options": {...}}: one entry
    - a list of any of the above, concatenated in order

    Args:
        use: Loader chain specification from the rule
        context: Encoding context (unused by the default encoder)

    Returns:
        Ordered list of loader entries

    Raises:
        UnsupportedShapeError: If an entry is not a loader name or loader record
    """
    return _encode_use(use, path="$")


def _encode_use(use: Any, path: str) -> list[dict[str, Any]]:
    if use is None:
        return []

    if isinstance(use, str):
        return [{"loader": loader} for loader in use.split("!") if loader]

    if isinstance(use, Mapping):
        loader = use.get("loader")
        if not isinstance(loader, str) or not loader:
            raise UnsupportedShapeError(
                f"Loader record at {path} must have a non-empty 'loader' name",
                details={"path": path, "keys": list(use.keys())},
            )
        entry: dict[str, Any] = {"loader": loader}
        if use.get("options") is not None:
            entry["options"] = use["options"]
        return [entry]

    if isinstance(use, (list, tuple)):
        chain: list[dict[str, Any]] = []
        for i, item in enumerate(use):
            chain.extend(_encode_use(item, f"{path}[{i}]"))
        return chain

    raise UnsupportedShapeError(
        f"Unsupported loader specification at {path}: {type(use).__name__}",
        details={"path": path, "type": type(use).__name__},
    )
