"""Domain value objects for condition values.

Stored condition values and record values are loosely typed (the authoring
UI saves everything as strings). They are coerced at the boundary into a
tagged union, one variant per field type family, so comparisons never mix
types. Coercion failure yields None and the caller fails the condition.
"""

import math
from dataclasses import dataclass
from typing import Any

from fieldservice.domain.enums import FieldType

_TRUE_TOKENS = frozenset({"true", "yes", "1"})
_FALSE_TOKENS = frozenset({"false", "no", "0"})


@dataclass(frozen=True)
class TextValue:
    """Text or select value. Comparisons use the normalized form."""

    value: str

    @property
    def normalized(self) -> str:
        """Trimmed, lower-cased form used for equality and substring tests."""
        return self.value.strip().lower()

    def render(self) -> str:
        return f"'{self.value}'"


@dataclass(frozen=True)
class NumberValue:
    """Finite numeric value."""

    value: float

    def __post_init__(self) -> None:
        if not math.isfinite(self.value):
            raise ValueError("Number value must be finite")

    def render(self) -> str:
        if self.value.is_integer():
            return str(int(self.value))
        return repr(self.value)


@dataclass(frozen=True)
class BoolValue:
    """Boolean value."""

    value: bool

    def render(self) -> str:
        return "true" if self.value else "false"


ConditionValue = TextValue | NumberValue | BoolValue


def is_empty_value(raw: Any) -> bool:
    """Return True for None, blank strings and empty collections.

    "0", 0 and False are values, not emptiness.
    """
    if raw is None:
        return True
    if isinstance(raw, str):
        return not raw.strip()
    if isinstance(raw, (list, tuple, set, frozenset, dict)):
        return len(raw) == 0
    return False


def coerce_text(raw: Any) -> TextValue | None:
    """Coerce to TextValue. Strings and plain numbers are accepted."""
    if isinstance(raw, str):
        return TextValue(raw)
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        try:
            return TextValue(str(raw))
        except ValueError:
            # int beyond the interpreter's str() digit limit
            return None
    return None


def coerce_number(raw: Any) -> NumberValue | None:
    """Coerce to NumberValue. Booleans and non-finite numbers are rejected."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float, str)):
        try:
            number = float(raw.strip() if isinstance(raw, str) else raw)
        except (OverflowError, ValueError):
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return NumberValue(number)


def coerce_bool(raw: Any) -> BoolValue | None:
    """Coerce to BoolValue from bool, 0/1 or a yes/no style string."""
    if isinstance(raw, bool):
        return BoolValue(raw)
    if isinstance(raw, int) and raw in (0, 1):
        return BoolValue(bool(raw))
    if isinstance(raw, str):
        token = raw.strip().lower()
        if token in _TRUE_TOKENS:
            return BoolValue(True)
        if token in _FALSE_TOKENS:
            return BoolValue(False)
    return None


def coerce_value(raw: Any, field_type: FieldType) -> ConditionValue | None:
    """Coerce a raw value for the given field type.

    Args:
        raw: Value from a stored condition or a service record.
        field_type: Declared type of the referenced field.

    Returns:
        The tagged value, or None when the value cannot represent the type.
    """
    if field_type in (FieldType.TEXT, FieldType.SELECT):
        return coerce_text(raw)
    if field_type is FieldType.NUMBER:
        return coerce_number(raw)
    if field_type is FieldType.BOOLEAN:
        return coerce_bool(raw)
    return None
