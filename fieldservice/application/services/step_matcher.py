"""Selects the workflow steps whose auto-assignment conditions a service satisfies."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from fieldservice.application.dtos.step_match import StepMatchResult
from fieldservice.application.services.condition_evaluator import ensure_record
from fieldservice.application.services.rule_evaluator import RuleEvaluator
from fieldservice.domain.entities.workflow_step import WorkflowStepEntity
from fieldservice.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class StepMatcher:
    """Filters workflow steps by their rule sets (implements step auto-suggestion).

    Steps keep their input order; there is no deduplication or sorting. Steps
    without a rule set always match.
    """

    def __init__(self, rule_evaluator: RuleEvaluator | None = None) -> None:
        self.rule_evaluator = rule_evaluator or RuleEvaluator()

    def matching_steps(
        self,
        steps: Iterable[WorkflowStepEntity],
        record: Mapping[str, Any],
        *,
        include_inactive: bool = True,
    ) -> list[WorkflowStepEntity]:
        """Return steps whose rule set matches the record, in input order.

        Raises:
            RecordContractException: If record is not a mapping.
        """
        ensure_record(record)
        matched = [
            step
            for step in steps
            if (include_inactive or step.is_active)
            and self.rule_evaluator.matches(step.rule_set, record)
        ]
        logger.debug("%d workflow step(s) matched service record", len(matched))
        return matched

    def explain_steps(
        self,
        steps: Iterable[WorkflowStepEntity],
        record: Mapping[str, Any],
        *,
        include_inactive: bool = True,
    ) -> list[StepMatchResult]:
        """Return a per-step match result with per-condition outcomes."""
        ensure_record(record)
        results: list[StepMatchResult] = []
        for step in steps:
            if not include_inactive and not step.is_active:
                continue
            matched, outcomes = self.rule_evaluator.outcomes(step.rule_set, record)
            results.append(
                StepMatchResult(
                    step=step,
                    matched=matched,
                    description=self.rule_evaluator.describe(step.rule_set),
                    outcomes=outcomes,
                )
            )
        return results


def matching_steps(
    steps: Iterable[WorkflowStepEntity],
    record: Mapping[str, Any],
    matcher: StepMatcher | None = None,
) -> list[WorkflowStepEntity]:
    """Filter steps with the given or default matcher."""
    return (matcher or StepMatcher()).matching_steps(steps, record)
