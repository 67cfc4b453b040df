"""Picks the project/service auto-creation rules that apply to a record."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from fieldservice.application.services.condition_evaluator import (
    ConditionEvaluator,
    ensure_record,
)
from fieldservice.application.services.condition_registry import get_service_rule_registry
from fieldservice.application.services.rule_evaluator import RuleEvaluator
from fieldservice.domain.entities.auto_rule import AutoRuleEntity


class AutoRuleSelector:
    """Returns active auto rules whose conditions match, lowest priority first.

    Without an explicit evaluator, conditions are checked against the service
    auto-creation registry (project and location fields).
    """

    def __init__(self, rule_evaluator: RuleEvaluator | None = None) -> None:
        self.rule_evaluator = rule_evaluator or RuleEvaluator(
            ConditionEvaluator(get_service_rule_registry())
        )

    def matching_rules(
        self, rules: Iterable[AutoRuleEntity], record: Mapping[str, Any]
    ) -> list[AutoRuleEntity]:
        """Active rules matching record, ordered by priority (stable for ties)."""
        ensure_record(record)
        matched = [
            rule
            for rule in rules
            if rule.is_active and self.rule_evaluator.matches(rule.rule_set, record)
        ]
        return sorted(matched, key=lambda rule: rule.priority)

    def first_match(
        self, rules: Iterable[AutoRuleEntity], record: Mapping[str, Any]
    ) -> AutoRuleEntity | None:
        """Return the highest-priority matching rule, or None."""
        matched = self.matching_rules(rules, record)
        return matched[0] if matched else None
