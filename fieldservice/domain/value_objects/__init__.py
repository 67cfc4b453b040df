"""Domain value objects and shared value types."""

from fieldservice.domain.value_objects.core import (
    BoolValue,
    ConditionValue,
    NumberValue,
    TextValue,
    coerce_bool,
    coerce_number,
    coerce_text,
    coerce_value,
    is_empty_value,
)

__all__ = [
    "BoolValue",
    "ConditionValue",
    "NumberValue",
    "TextValue",
    "coerce_bool",
    "coerce_number",
    "coerce_text",
    "coerce_value",
    "is_empty_value",
]
