"""Combines step conditions under ALL/ANY logic and renders rule descriptions."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from fieldservice.application.dtos.step_match import ConditionOutcome
from fieldservice.application.services.condition_evaluator import (
    ConditionEvaluator,
    ensure_record,
)
from fieldservice.domain.entities.condition import Condition, ConditionField, RuleSet
from fieldservice.domain.enums import RuleLogic
from fieldservice.domain.value_objects.core import coerce_value, is_empty_value

NO_CONDITIONS_SUMMARY = "No auto-assignment conditions."
INVALID_CLAUSE_TEXT = "(invalid condition)"


class RuleEvaluator:
    """Evaluates rule sets with a ConditionEvaluator.

    A missing or empty rule set always matches: steps without conditions are
    never restricted.
    """

    def __init__(self, condition_evaluator: ConditionEvaluator | None = None) -> None:
        self.condition_evaluator = condition_evaluator or ConditionEvaluator()

    def matches(self, rule_set: RuleSet | None, record: Mapping[str, Any]) -> bool:
        """Return whether the record satisfies the rule set.

        Raises:
            RecordContractException: If record is not a mapping.
        """
        ensure_record(record)
        if rule_set is None or rule_set.is_unrestricted:
            return True
        results = (
            self.condition_evaluator.evaluate(c, record) for c in rule_set.conditions
        )
        if rule_set.logic is RuleLogic.ANY:
            return any(results)
        return all(results)

    def outcomes(
        self, rule_set: RuleSet | None, record: Mapping[str, Any]
    ) -> tuple[bool, tuple[ConditionOutcome, ...]]:
        """Evaluate every condition (no short-circuit) and return the combined result."""
        ensure_record(record)
        if rule_set is None or rule_set.is_unrestricted:
            return True, ()
        outcomes = tuple(
            self.condition_evaluator.outcome(c, record) for c in rule_set.conditions
        )
        reduce = any if rule_set.logic is RuleLogic.ANY else all
        return reduce(o.matched for o in outcomes), outcomes

    def describe(self, rule_set: RuleSet | None) -> str:
        """Render the rule set for the authoring UI.

        Example: "Country equals 'France' AND Equipment Count greater_than 5".
        Returns an empty string when there are no conditions.
        """
        if rule_set is None or rule_set.is_unrestricted:
            return ""
        joiner = f" {rule_set.logic.joiner} "
        return joiner.join(self.describe_condition(c) for c in rule_set.conditions)

    def describe_condition(self, condition: Condition) -> str:
        """Render one clause as "<field label> <operator> <value>"."""
        if not isinstance(condition, Condition) or condition.is_inert:
            return INVALID_CLAUSE_TEXT
        field = self.condition_evaluator.registry.field_by_key(condition.field)
        label = field.label if field is not None else condition.field
        op = condition.parsed_operator
        op_text = op.value if op is not None else str(condition.operator)
        if op is not None and not op.requires_value:
            return f"{label} {op_text}"
        return f"{label} {op_text} {self._render_value(condition, field)}"

    def summarize(self, rule_set: RuleSet | None) -> str:
        """One-line summary, e.g. "Auto-suggested when ALL of the 2 condition(s) match."."""
        if rule_set is None or rule_set.is_unrestricted:
            return NO_CONDITIONS_SUMMARY
        return (
            f"Auto-suggested when {rule_set.logic.value.upper()} of the "
            f"{len(rule_set.conditions)} condition(s) match."
        )

    @staticmethod
    def _render_value(condition: Condition, field: ConditionField | None) -> str:
        raw = condition.value
        if is_empty_value(raw):
            return "''"
        if field is not None:
            value = coerce_value(raw, field.type)
            if value is not None:
                return value.render()
        if isinstance(raw, bool):
            return "true" if raw else "false"
        if isinstance(raw, (int, float)):
            return str(raw)
        return f"'{raw}'"


def matches(
    rule_set: RuleSet | None,
    record: Mapping[str, Any],
    evaluator: RuleEvaluator | None = None,
) -> bool:
    """Evaluate a rule set against a record with the given or default evaluator."""
    return (evaluator or RuleEvaluator()).matches(rule_set, record)


def describe(rule_set: RuleSet | None, evaluator: RuleEvaluator | None = None) -> str:
    """Describe a rule set with the given or default evaluator."""
    return (evaluator or RuleEvaluator()).describe(rule_set)
