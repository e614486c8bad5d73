"""
Defaulting guards for the options adapter.

Every section encoder reads fields that the upstream normalization stage
must already have filled in. These guards check that it actually ran and
report every missing field of a section at once, with a uniform message.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from options_adapter.core.errors import PreconditionViolation

_MISSING = object()


def is_nil(value: Any) -> bool:
    """Return True for values treated as absent (missing or None)."""
    return value is None or value is _MISSING


def lookup(obj: Any, field_path: str) -> Any:
    """
    Resolve a possibly dotted field path against nested mappings.

    Args:
        obj: Mapping to read from (None is treated as empty)
        field_path: Field name, or dotted path such as "resolve.timestamp"

    Returns:
        The value, or a private sentinel when any segment is absent
    """
    current = obj
    for part in field_path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return _MISSING
        current = current[part]
    return current


@dataclass(frozen=True)
class FieldCheck:
    """Outcome of checking a section for required-after-defaulting fields."""

    section: str
    missing: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.missing

    @property
    def message(self) -> str:
        return f"{self.section}: {', '.join(self.missing)} should not be nil after defaults"

    def raise_for_missing(self) -> None:
        """
        Raise if any field is missing.

        Raises:
            PreconditionViolation: Naming the section and every missing field
        """
        if self.missing:
            raise PreconditionViolation(
                self.message,
                details={"section": self.section, "missing_fields": list(self.missing)},
            )


def check_fields(section: str, obj: Any, fields: Iterable[str]) -> FieldCheck:
    """
    Check which required fields are absent from a section.

    Args:
        section: Section name used in error messages (e.g. "output")
        obj: The section mapping; None makes every field missing
        fields: Required field names or dotted paths, in report order

    Returns:
        FieldCheck listing missing fields in declaration order
    """
    missing = tuple(f for f in fields if is_nil(lookup(obj, f)))
    return FieldCheck(section=section, missing=missing)


def require_fields(section: str, obj: Any, fields: Iterable[str]) -> None:
    """
    Fail fast when any required field of a section is absent.

    Raises:
        PreconditionViolation: If at least one field is missing
    """
    check_fields(section, obj, fields).raise_for_missing()
