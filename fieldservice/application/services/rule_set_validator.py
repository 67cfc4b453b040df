"""Validates step conditions before they are saved (implements strict parsing).

Evaluation is forgiving of stale configuration; saving is not. The authoring
UI calls this so operators see problems instead of a step that silently
never matches.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from fieldservice.application.services.condition_evaluator import ConditionEvaluator
from fieldservice.core.config import get_settings
from fieldservice.domain.entities.condition import RuleSet
from fieldservice.domain.exceptions import RuleSetParseException
from fieldservice.schemas.step_conditions import StepConditionsConfig

_ISSUE_MESSAGES = {
    "unknown_field": "unknown field '{field}'",
    "unknown_operator": "unknown operator '{operator}'",
    "operator_not_allowed": "operator '{operator}' is not allowed for field '{field}'",
    "missing_value": "operator '{operator}' on field '{field}' requires a value",
    "invalid_value": "value {value!r} is not valid for field '{field}'",
}


class RuleSetValidator:
    """Parses stored or submitted step conditions and rejects any defect."""

    def __init__(self, condition_evaluator: ConditionEvaluator | None = None) -> None:
        self.condition_evaluator = condition_evaluator or ConditionEvaluator()

    def validate(self, data: Any) -> RuleSet:
        """Return the RuleSet for data, or raise.

        Raises:
            RuleSetParseException: If the payload is malformed or any condition
                references an unknown field, an illegal operator, or a bad value.
        """
        try:
            config = StepConditionsConfig.model_validate(data)
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(p) for p in err['loc']) or 'root'}: {err['msg']}"
                for err in e.errors()
            ]
            raise RuleSetParseException(errors) from e

        rule_set = RuleSet(
            logic=config.logic or get_settings().default_rule_logic,
            conditions=tuple(c.to_domain() for c in config.conditions),
        )
        errors: list[str] = []
        for index, condition in enumerate(rule_set.conditions):
            issue = self.condition_evaluator.check(condition)
            if issue is None:
                continue
            template = _ISSUE_MESSAGES.get(issue.value, "condition is invalid ({issue})")
            message = template.format(
                issue=issue.value,
                field=condition.field,
                operator=condition.operator,
                value=condition.value,
            )
            errors.append(f"conditions.{index}: {message}")
        if errors:
            raise RuleSetParseException(errors)
        return rule_set
