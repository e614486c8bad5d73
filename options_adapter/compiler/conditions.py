"""
Rule condition encoding.

Turns the polymorphic user-facing condition (text, pattern, ordered list,
logical combination) into a tagged tree the engine can switch on without
inspecting runtime types:

    "src"                     -> {"type": "string", "stringMatcher": "src"}
    re.compile(r"\\.js$")     -> {"type": "regexp", "regexpMatcher": "\\.js$"}
    ["a", re.compile("b")]    -> {"type": "array", "arrayMatcher": [...]}
    {"and": [...], "not": x}  -> {"type": "logical", "logicalMatcher": [{...}]}

Pattern flags are dropped: the engine only receives the pattern source.
"""

import re
from collections.abc import Mapping
from typing import Any

from options_adapter.core.errors import UnsupportedShapeError
from options_adapter.domain.enums import ConditionType, LogicalOperator

Condition = Any
EncodedCondition = dict[str, Any]


def is_absent_condition(value: Any) -> bool:
    """Return True for condition slots that carry no condition (None or empty text)."""
    return value is None or value == ""


def encode_condition(condition: Condition, path: str = "$") -> EncodedCondition:
    """
    Encode a rule condition into its tagged variant.

    Exactly one payload field is populated per node, matching the "type"
    discriminant. Lists keep their order; logical objects are wrapped in a
    single-element list, which is the shape the engine expects.

    Args:
        condition: str, compiled pattern, list/tuple of conditions, or a
                   mapping with optional "and", "or", "not" keys
        path: JSONPath to this node (for error reporting)

    Returns:
        Encoded condition dictionary

    Raises:
        UnsupportedShapeError: If the value is none of the four shapes

    Example:
        >>> encoded = encode_condition(["a", "b"])
        >>> # Result: {"type": "array", "arrayMatcher": [
        >>> #     {"type": "string", "stringMatcher": "a"},
        >>> #     {"type": "string", "stringMatcher": "b"}]}
    """
    if isinstance(condition, str):
        return {"type": ConditionType.STRING.value, "stringMatcher": condition}

    if isinstance(condition, re.Pattern):
        if not isinstance(condition.pattern, str):
            raise UnsupportedShapeError(
                f"Unsupported condition shape at {path}: bytes patterns cannot be encoded",
                details={"path": path, "type": "bytes pattern"},
            )
        return {"type": ConditionType.REGEXP.value, "regexpMatcher": condition.pattern}

    if isinstance(condition, (list, tuple)):
        return {
            "type": ConditionType.ARRAY.value,
            "arrayMatcher": [
                encode_condition(item, f"{path}[{i}]") for i, item in enumerate(condition)
            ],
        }

    if isinstance(condition, Mapping):
        return {
            "type": ConditionType.LOGICAL.value,
            "logicalMatcher": [encode_logical_conditions(condition, path)],
        }

    raise UnsupportedShapeError(
        f"Unsupported condition shape at {path}: expected string, pattern, list or "
        f"logical object, got {type(condition).__name__}",
        details={"path": path, "type": type(condition).__name__},
    )


def encode_logical_conditions(logical: Mapping[str, Any], path: str = "$") -> dict[str, Any]:
    """
    Encode an and/or/not combinator object.

    Absent keys stay absent; they are never defaulted to empty lists. An
    empty "not" text counts as absent. No arity checks happen here, an
    empty "and" list encodes to an empty list.

    Args:
        logical: Mapping with optional "and" (list), "or" (list), "not" (single condition)
        path: JSONPath to this node (for error reporting)

    Returns:
        Mapping with the same keys present, each value encoded
    """
    encoded: dict[str, Any] = {}

    for operator in (LogicalOperator.AND.value, LogicalOperator.OR.value):
        children = logical.get(operator)
        if children is None:
            continue
        if not isinstance(children, (list, tuple)):
            raise UnsupportedShapeError(
                f"'{operator}' must be a list of conditions at {path}",
                details={"path": f"{path}.{operator}", "type": type(children).__name__},
            )
        encoded[operator] = [
            encode_condition(child, f"{path}.{operator}[{i}]") for i, child in enumerate(children)
        ]

    negated = logical.get(LogicalOperator.NOT.value)
    if not is_absent_condition(negated):
        encoded[LogicalOperator.NOT.value] = encode_condition(negated, f"{path}.not")

    return encoded
