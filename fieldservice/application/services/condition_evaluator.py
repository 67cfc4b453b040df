"""Evaluates a single step condition against a service record.

Configuration problems (unknown field, illegal operator, missing or
uncoercible value) fail the condition instead of raising, so a rule written
against a renamed field degrades to "never matches". The only error raised
is RecordContractException when the record is not a mapping.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from fieldservice.application.dtos.step_match import ConditionOutcome
from fieldservice.application.services.condition_registry import (
    ConditionFieldRegistry,
    get_default_registry,
)
from fieldservice.core.config import Settings, get_settings
from fieldservice.domain.entities.condition import Condition, ConditionField
from fieldservice.domain.enums import ConditionIssue, ConditionOperator
from fieldservice.domain.exceptions import RecordContractException
from fieldservice.domain.value_objects.core import (
    BoolValue,
    ConditionValue,
    NumberValue,
    TextValue,
    coerce_value,
    is_empty_value,
)
from fieldservice.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

# Negated operators hold when the record has no value at all.
_MATCH_WHEN_ABSENT = frozenset(
    {ConditionOperator.NOT_EQUALS, ConditionOperator.NOT_CONTAINS}
)

# Issues caused by stale configuration rather than by the record.
_CONFIG_ISSUES = frozenset(
    {
        ConditionIssue.MALFORMED,
        ConditionIssue.UNKNOWN_FIELD,
        ConditionIssue.UNKNOWN_OPERATOR,
        ConditionIssue.OPERATOR_NOT_ALLOWED,
    }
)


def ensure_record(record: Any) -> Mapping[str, Any]:
    """Return record if it is a mapping, else raise RecordContractException."""
    if not isinstance(record, Mapping):
        raise RecordContractException(record)
    return record


def _split_list(value: TextValue) -> frozenset[str]:
    """Normalized non-empty items of a comma-separated value."""
    items = (part.strip().lower() for part in value.value.split(","))
    return frozenset(item for item in items if item)


@dataclass(frozen=True)
class _ResolvedCondition:
    field: ConditionField
    operator: ConditionOperator
    expected: ConditionValue | None


class ConditionEvaluator:
    """Evaluates conditions using a field registry for type dispatch."""

    def __init__(
        self,
        registry: ConditionFieldRegistry | None = None,
        *,
        settings: Settings | None = None,
    ) -> None:
        self.registry = registry if registry is not None else get_default_registry()
        settings = settings or get_settings()
        self._inert_log_level = (
            logging.WARNING if settings.log_inert_conditions else logging.DEBUG
        )

    def evaluate(self, condition: Condition, record: Mapping[str, Any]) -> bool:
        """Return whether the record satisfies the condition.

        Raises:
            RecordContractException: If record is not a mapping.
        """
        return self.outcome(condition, record).matched

    def check(self, condition: Condition) -> ConditionIssue | None:
        """Return why the condition can never be evaluated, or None if well-formed."""
        resolved = self._resolve(condition)
        return resolved if isinstance(resolved, ConditionIssue) else None

    def outcome(
        self, condition: Condition, record: Mapping[str, Any]
    ) -> ConditionOutcome:
        """Evaluate the condition and report the fail-closed issue, if any."""
        ensure_record(record)
        resolved = self._resolve(condition)
        if isinstance(resolved, ConditionIssue):
            self._log_issue(condition, resolved)
            return ConditionOutcome(condition, False, resolved)

        actual = record.get(resolved.field.key)
        op = resolved.operator
        if op is ConditionOperator.IS_EMPTY:
            return ConditionOutcome(condition, is_empty_value(actual))
        if op is ConditionOperator.IS_NOT_EMPTY:
            return ConditionOutcome(condition, not is_empty_value(actual))

        if is_empty_value(actual):
            return ConditionOutcome(condition, op in _MATCH_WHEN_ABSENT)
        actual_value = coerce_value(actual, resolved.field.type)
        if actual_value is None:
            logger.debug(
                "Record value %r for field '%s' is not a valid %s; condition fails",
                actual,
                resolved.field.key,
                resolved.field.type.value,
            )
            return ConditionOutcome(
                condition, False, ConditionIssue.INVALID_RECORD_VALUE
            )
        return ConditionOutcome(
            condition, self._compare(op, actual_value, resolved.expected)
        )

    def _resolve(self, condition: Condition) -> _ResolvedCondition | ConditionIssue:
        if not isinstance(condition, Condition) or condition.is_inert:
            return ConditionIssue.MALFORMED
        field = self.registry.field_by_key(condition.field)
        if field is None:
            return ConditionIssue.UNKNOWN_FIELD
        op = condition.parsed_operator
        if op is None:
            return ConditionIssue.UNKNOWN_OPERATOR
        if not self.registry.is_operator_allowed(field, op):
            return ConditionIssue.OPERATOR_NOT_ALLOWED
        if not op.requires_value:
            return _ResolvedCondition(field, op, None)
        if is_empty_value(condition.value):
            return ConditionIssue.MISSING_VALUE
        expected = coerce_value(condition.value, field.type)
        if expected is None:
            return ConditionIssue.INVALID_VALUE
        if op is ConditionOperator.IN and not _split_list(expected):
            return ConditionIssue.MISSING_VALUE
        return _ResolvedCondition(field, op, expected)

    def _log_issue(self, condition: Condition, issue: ConditionIssue) -> None:
        level = self._inert_log_level if issue in _CONFIG_ISSUES else logging.DEBUG
        logger.log(
            level,
            "Condition on field '%s' with operator '%s' is inert (%s); failing closed",
            getattr(condition, "field", None),
            getattr(condition, "operator", None),
            issue.value,
        )

    @staticmethod
    def _compare(
        op: ConditionOperator,
        actual: ConditionValue,
        expected: ConditionValue | None,
    ) -> bool:
        if op is ConditionOperator.EQUALS:
            return _values_equal(actual, expected)
        if op is ConditionOperator.NOT_EQUALS:
            return not _values_equal(actual, expected)
        if op in (ConditionOperator.GREATER_THAN, ConditionOperator.LESS_THAN):
            if not isinstance(actual, NumberValue) or not isinstance(
                expected, NumberValue
            ):
                return False
            if op is ConditionOperator.GREATER_THAN:
                return actual.value > expected.value
            return actual.value < expected.value

        if not isinstance(actual, TextValue) or not isinstance(expected, TextValue):
            return False
        if op is ConditionOperator.CONTAINS:
            return expected.normalized in actual.normalized
        if op is ConditionOperator.NOT_CONTAINS:
            return expected.normalized not in actual.normalized
        if op is ConditionOperator.STARTS_WITH:
            return actual.normalized.startswith(expected.normalized)
        if op is ConditionOperator.ENDS_WITH:
            return actual.normalized.endswith(expected.normalized)
        if op is ConditionOperator.IN:
            return actual.normalized in _split_list(expected)
        return False


def _values_equal(actual: ConditionValue, expected: ConditionValue | None) -> bool:
    """Type-aware equality: text trimmed and case-insensitive, numbers numeric."""
    if isinstance(actual, TextValue) and isinstance(expected, TextValue):
        return actual.normalized == expected.normalized
    if isinstance(actual, NumberValue) and isinstance(expected, NumberValue):
        return actual.value == expected.value
    if isinstance(actual, BoolValue) and isinstance(expected, BoolValue):
        return actual.value is expected.value
    return False


def evaluate(
    condition: Condition,
    record: Mapping[str, Any],
    registry: ConditionFieldRegistry | None = None,
) -> bool:
    """Evaluate one condition against a record with the given or default registry."""
    return ConditionEvaluator(registry).evaluate(condition, record)
