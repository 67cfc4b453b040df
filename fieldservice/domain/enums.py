"""Domain enumerations for the field-service condition engine.

Enums represent the closed vocabularies of step conditions: field types,
comparison operators and ALL/ANY combination logic.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class FieldType(_ValuesMixin, str, Enum):
    """Semantic type of a service field that conditions can reference.

    Determines which operators are legal and how values are coerced.
    """

    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    SELECT = "select"


class ConditionOperator(_ValuesMixin, str, Enum):
    """Comparison operator of a single condition clause."""

    IS_EMPTY = "is_empty"
    IS_NOT_EMPTY = "is_not_empty"
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    IN = "in"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"

    @property
    def requires_value(self) -> bool:
        """Return whether the operator compares against a configured value."""
        return self not in (ConditionOperator.IS_EMPTY, ConditionOperator.IS_NOT_EMPTY)

    @classmethod
    def parse(cls, token: object) -> "ConditionOperator | None":
        """Return the operator for a stored token, or None when unknown."""
        if isinstance(token, cls):
            return token
        if not isinstance(token, str):
            return None
        try:
            return cls(token.strip())
        except ValueError:
            return None


class RuleLogic(_ValuesMixin, str, Enum):
    """How the conditions of a rule set are combined.

    ALL = every condition must match (AND), ANY = at least one (OR).
    """

    ALL = "all"
    ANY = "any"

    @property
    def joiner(self) -> str:
        """Keyword used between clauses in rule descriptions."""
        return "AND" if self is RuleLogic.ALL else "OR"


class ConditionIssue(_ValuesMixin, str, Enum):
    """Why a condition failed without being compared (fail-closed reasons)."""

    MALFORMED = "malformed"
    UNKNOWN_FIELD = "unknown_field"
    UNKNOWN_OPERATOR = "unknown_operator"
    OPERATOR_NOT_ALLOWED = "operator_not_allowed"
    MISSING_VALUE = "missing_value"
    INVALID_VALUE = "invalid_value"
    INVALID_RECORD_VALUE = "invalid_record_value"
