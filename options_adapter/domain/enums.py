"""
Domain enums matching the discriminants the build engine switches on.
"""

from enum import Enum


class ConditionType(str, Enum):
    """Discriminant of an encoded rule condition."""

    STRING = "string"
    REGEXP = "regexp"
    ARRAY = "array"
    LOGICAL = "logical"


# Payload field populated for each condition discriminant
CONDITION_PAYLOAD_FIELD = {
    ConditionType.STRING: "stringMatcher",
    ConditionType.REGEXP: "regexpMatcher",
    ConditionType.ARRAY: "arrayMatcher",
    ConditionType.LOGICAL: "logicalMatcher",
}


class LogicalOperator(str, Enum):
    """Keys of a logical-combination condition object."""

    AND = "and"
    OR = "or"
    NOT = "not"


class CacheType(str, Enum):
    """Cache descriptor types understood by the engine."""

    MEMORY = "memory"
    DISABLE = "disable"
