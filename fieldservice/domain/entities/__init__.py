"""Domain entities.

Pure domain models; no persistence or presentation concerns.
"""

from fieldservice.domain.entities.auto_rule import AutoRuleEntity
from fieldservice.domain.entities.condition import Condition, ConditionField, RuleSet
from fieldservice.domain.entities.workflow_step import WorkflowStepEntity

__all__ = [
    "AutoRuleEntity",
    "Condition",
    "ConditionField",
    "RuleSet",
    "WorkflowStepEntity",
]
