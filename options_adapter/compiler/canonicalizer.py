"""
Stable JSON forms of the translated options tree.

Keys are sorted at every level and list order is kept, since rule order and
condition order are significant to the engine. Used to compare translations
byte for byte and to size the output for metrics.
"""

import json
from typing import Any


def canonicalize_json(obj: Any) -> dict | list | Any:
    """Sort mapping keys recursively; tuples become lists, other values pass through."""
    if isinstance(obj, dict):
        items = sorted(obj.items(), key=lambda item: str(item[0]))
        return {str(k): canonicalize_json(v) for k, v in items}

    elif isinstance(obj, (list, tuple)):
        return [canonicalize_json(item) for item in obj]

    else:
        return obj


def to_canonical_json_string(obj: Any) -> str:
    """
    Compact canonical JSON.

    Opaque passthrough values (a plugin object inside "builtins", say) are
    rendered with str().

    Example:
        >>> to_canonical_json_string({"target": ["web"], "devtool": ""})
        '{"devtool":"","target":["web"]}'
    """
    return json.dumps(
        canonicalize_json(obj),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )


def to_canonical_json_pretty(obj: Any) -> str:
    return json.dumps(
        canonicalize_json(obj), sort_keys=True, indent=2, ensure_ascii=False, default=str
    )
