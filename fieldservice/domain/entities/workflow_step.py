"""Workflow step domain entity.

Workflow steps are library reference data (e.g. "Site survey", "Install").
Each step optionally carries a rule set deciding when it is auto-suggested
for a service. The rule set is a dedicated field; unrelated per-step data
stays in the generic metadata bag.
"""

from dataclasses import dataclass, field
from typing import Any

from fieldservice.domain.entities.condition import RuleSet


@dataclass
class WorkflowStepEntity:
    """Domain entity for a workflow step (library item of category workflow_steps)."""

    id: str
    name: str
    rule_set: RuleSet | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    is_active: bool = True
    display_order: int = 0

    @property
    def has_conditions(self) -> bool:
        """Return whether the step restricts auto-suggestion with conditions."""
        return self.rule_set is not None and not self.rule_set.is_unrestricted
