"""DTOs for condition and step match explanations."""

from dataclasses import dataclass, field

from fieldservice.domain.entities.condition import Condition
from fieldservice.domain.entities.workflow_step import WorkflowStepEntity
from fieldservice.domain.enums import ConditionIssue


@dataclass(frozen=True)
class ConditionOutcome:
    """Result of evaluating one condition; issue is set when it failed closed."""

    condition: Condition
    matched: bool
    issue: ConditionIssue | None = None


@dataclass(frozen=True)
class StepMatchResult:
    """Read-model for one step: whether it applies, and why."""

    step: WorkflowStepEntity
    matched: bool
    description: str
    outcomes: tuple[ConditionOutcome, ...] = field(default_factory=tuple)

    @property
    def step_id(self) -> str:
        return self.step.id
